# src/products_api/services/product_service.py
from __future__ import annotations

import logging

from products_api.core.metrics import PRODUCT_MUTATIONS, PRODUCTS_IN_STORE
from products_api.domain.models import (
    ListFilters,
    Product,
    ProductCreate,
    ProductListResponse,
    ProductQuery,
    ProductSearchQuery,
    ProductSearchResponse,
    ProductStatistics,
    ProductUpdate,
    SearchFilters,
    Sorting,
)
from products_api.repositories.product_repository import ProductRepository
from products_api.services.query_engine import run_list_query, run_search_query
from products_api.services.statistics_service import compute_statistics

logger = logging.getLogger(__name__)


class ProductService:
    """
    Use cases of the catalog. Read paths work on a snapshot taken from the
    repository, write paths go straight to it.
    """

    def __init__(self, repository: ProductRepository) -> None:
        self._repo = repository

    def list_products(self, query: ProductQuery) -> ProductListResponse:
        page = run_list_query(self._repo.list(), query)
        return ProductListResponse(
            products=page.products,
            pagination=page.pagination,
            filters=ListFilters(
                category=query.category,
                in_stock=query.in_stock,
                min_price=query.min_price,
                max_price=query.max_price,
            ),
            sorting=Sorting(sort_by=query.sort_by, sort_order=query.sort_order),
        )

    def search_products(self, query: ProductSearchQuery) -> ProductSearchResponse:
        page = run_search_query(self._repo.list(), query)
        return ProductSearchResponse(
            products=page.products,
            search_query=query.q,
            total_results=page.pagination.total_products,
            pagination=page.pagination,
            filters=SearchFilters(category=query.category, in_stock=query.in_stock),
        )

    def get_statistics(self) -> ProductStatistics:
        return compute_statistics(self._repo.list())

    def get_product(self, product_id: str) -> Product:
        return self._repo.get(product_id)

    def create_product(self, payload: ProductCreate) -> Product:
        product = self._repo.create(payload)
        self._record_mutation("create", product)
        return product

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        product = self._repo.update(product_id, payload)
        self._record_mutation("update", product)
        return product

    def delete_product(self, product_id: str) -> Product:
        product = self._repo.delete(product_id)
        self._record_mutation("delete", product)
        return product

    def _record_mutation(self, operation: str, product: Product) -> None:
        PRODUCT_MUTATIONS.labels(operation=operation).inc()
        PRODUCTS_IN_STORE.set(self._repo.count())
        logger.info("Product %s: %s (%s)", operation, product.id, product.name)
