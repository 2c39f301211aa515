# src/products_api/api/dependencies.py
import threading

from fastapi import Depends

from products_api.core.config import Settings, get_settings
from products_api.core.metrics import PRODUCTS_IN_STORE
from products_api.repositories.product_repository import ProductRepository, demo_products
from products_api.services.product_service import ProductService

# Singleton Repository (initialised on first access)
_repository: ProductRepository | None = None
_repository_lock = threading.Lock()


def get_product_repository(
    settings: Settings = Depends(get_settings),
) -> ProductRepository:
    global _repository
    if _repository is None:
        # Sync dependency: FastAPI may call it from several threadpool workers at once.
        with _repository_lock:
            if _repository is None:
                repo = ProductRepository(demo_products() if settings.seed_demo_data else ())
                PRODUCTS_IN_STORE.set(repo.count())
                _repository = repo
    return _repository


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductService:
    return ProductService(repository=repository)
