"""
Filtering, search, sorting and pagination over a snapshot of the catalog.

All functions are pure: they take a sequence of products and return new
lists, the stored records are never touched.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from products_api.domain.models import (
    Pagination,
    Product,
    ProductPage,
    ProductQuery,
    ProductSearchQuery,
    SortOrder,
)

# Public (camelCase) sort keys -> model attributes
SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category",
    "inStock": "in_stock",
}


def filter_by_category(products: Sequence[Product], category: str | None) -> list[Product]:
    if not category:
        return list(products)
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def filter_by_stock(products: Sequence[Product], in_stock: bool | None) -> list[Product]:
    if in_stock is None:
        return list(products)
    return [p for p in products if p.in_stock is in_stock]


def filter_by_price(
    products: Sequence[Product], min_price: float | None, max_price: float | None
) -> list[Product]:
    result = list(products)
    if min_price is not None:
        result = [p for p in result if p.price >= min_price]
    if max_price is not None:
        result = [p for p in result if p.price <= max_price]
    return result


def search(products: Sequence[Product], term: str) -> list[Product]:
    """Case-insensitive substring match on name or description."""
    needle = term.lower()
    return [p for p in products if needle in p.name.lower() or needle in p.description.lower()]


def sort_products(
    products: Sequence[Product], sort_by: str, order: SortOrder = SortOrder.ASC
) -> list[Product]:
    """
    Stable sort by a public field name. Strings compare case-insensitively.
    Unknown fields keep the incoming order.
    """
    attribute = SORTABLE_FIELDS.get(sort_by)
    if attribute is None:
        return list(products)

    def key(product: Product) -> Any:
        value = getattr(product, attribute)
        return value.lower() if isinstance(value, str) else value

    # sorted() stays stable with reverse=True, ties keep their original order
    return sorted(products, key=key, reverse=order is SortOrder.DESC)


def paginate(products: Sequence[Product], page: int, limit: int) -> ProductPage:
    total = len(products)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit
    return ProductPage(
        products=list(products[start : start + limit]),
        pagination=Pagination(
            current_page=page,
            total_pages=total_pages,
            total_products=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )


def run_list_query(products: Sequence[Product], query: ProductQuery) -> ProductPage:
    result = filter_by_category(products, query.category)
    result = filter_by_stock(result, query.in_stock)
    result = filter_by_price(result, query.min_price, query.max_price)
    result = sort_products(result, query.sort_by, query.sort_order)
    return paginate(result, query.page, query.limit)


def run_search_query(products: Sequence[Product], query: ProductSearchQuery) -> ProductPage:
    # No price bounds and no sorting here, results stay in catalog order.
    result = search(products, query.q)
    result = filter_by_category(result, query.category)
    result = filter_by_stock(result, query.in_stock)
    return paginate(result, query.page, query.limit)
