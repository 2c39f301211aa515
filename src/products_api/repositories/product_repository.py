from __future__ import annotations

import threading
import uuid
from collections.abc import Iterable

from products_api.domain.errors import ProductApiError
from products_api.domain.models import Product, ProductCreate, ProductUpdate


class ProductRepository:
    """
    In-memory, insertion-ordered storage for products.

    Every operation holds a single lock: mutations are serialized against each
    other and readers always get a consistent copy of the list. Lookups are
    linear scans, the catalog is expected to stay small.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: list[Product] = list(products)
        self._lock = threading.Lock()

    def list(self) -> list[Product]:
        with self._lock:
            return list(self._products)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def get(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def create(self, payload: ProductCreate) -> Product:
        with self._lock:
            product = Product(id=self._new_id(), **payload.model_dump())
            self._products.append(product)
            return product

    def update(self, product_id: str, payload: ProductUpdate) -> Product:
        with self._lock:
            index = self._index_of(product_id)
            updated = self._products[index].model_copy(update=payload.changes())
            self._products[index] = updated
            return updated

    def delete(self, product_id: str) -> Product:
        with self._lock:
            return self._products.pop(self._index_of(product_id))

    def _index_of(self, product_id: str) -> int:
        # Caller must hold the lock.
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise ProductApiError.not_found("Product")

    def _new_id(self) -> str:
        existing = {p.id for p in self._products}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in existing:
                return candidate


def demo_products() -> list[Product]:
    """The catalog a fresh instance starts with when demo data is enabled."""
    return [
        Product(
            id="1",
            name="Laptop",
            description="High-performance laptop for work and gaming",
            price=999.99,
            category="electronics",
            in_stock=True,
        ),
        Product(
            id="2",
            name="Smartphone",
            description="Latest smartphone with advanced features",
            price=699.99,
            category="electronics",
            in_stock=True,
        ),
        Product(
            id="3",
            name="Coffee Maker",
            description="Automatic coffee maker for home use",
            price=149.99,
            category="appliances",
            in_stock=False,
        ),
        Product(
            id="4",
            name="Running Shoes",
            description="Comfortable running shoes for athletes",
            price=129.99,
            category="sports",
            in_stock=True,
        ),
        Product(
            id="5",
            name="Book: JavaScript Guide",
            description="Comprehensive guide to JavaScript programming",
            price=49.99,
            category="books",
            in_stock=True,
        ),
    ]
