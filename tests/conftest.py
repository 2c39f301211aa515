# tests/conftest.py
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from products_api.api.dependencies import get_product_repository
from products_api.core.config import Settings, get_settings
from products_api.core.rate_limit import limiter
from products_api.domain.models import Product
from products_api.main import app
from products_api.repositories.product_repository import ProductRepository, demo_products


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        api_keys={"test-key-alice": "alice (admin)", "test-key-bob": "bob (user)"},
        default_page_size=10,
        max_page_size=100,
    )


@pytest.fixture
def seed_products() -> list[Product]:
    return demo_products()


@pytest.fixture
def repository(seed_products: list[Product]) -> ProductRepository:
    return ProductRepository(seed_products)


@pytest.fixture
def client(
    test_settings: Settings, repository: ProductRepository
) -> Generator[TestClient, None, None]:
    # Every test gets its own store; the app-wide singleton is never touched.
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_product_repository] = lambda: repository
    limiter.reset()
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_settings, None)
        app.dependency_overrides.pop(get_product_repository, None)


@pytest.fixture
def alice_headers() -> dict:
    return {"X-API-Key": "test-key-alice"}
