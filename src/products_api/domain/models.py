# src/products_api/domain/models.py
from __future__ import annotations

import math
from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, Field, StrictBool, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from products_api.domain.errors import ProductApiError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# ---------------------------------------------------------------------------
# Aggregate: Product
# ---------------------------------------------------------------------------


class Product(BaseModel):
    """A single catalog entry. Stored records are immutable; updates swap the record."""

    id: str
    name: str
    description: str
    price: float = Field(ge=0, allow_inf_nan=False)
    category: str
    in_stock: bool

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


# ---------------------------------------------------------------------------
# API Request Schemas
# ---------------------------------------------------------------------------


class ProductCreate(BaseModel):
    name: NonEmptyStr
    description: NonEmptyStr
    price: float = Field(
        ge=0, strict=True, allow_inf_nan=False, description="Non-negative JSON number"
    )
    category: NonEmptyStr
    in_stock: StrictBool

    # "id" and any other unknown keys are dropped
    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


class ProductUpdate(BaseModel):
    name: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    price: float | None = Field(default=None, ge=0, strict=True, allow_inf_nan=False)
    category: NonEmptyStr | None = None
    in_stock: StrictBool | None = None

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("name", "description", "price", "category", "in_stock", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Only the fields that were present in the request body."""
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Query models
# ---------------------------------------------------------------------------


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


def parse_price(raw: str | None) -> float | None:
    """Lenient float parsing; anything unparseable means "bound not applied"."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_positive_int(raw: str | None, default: int) -> int:
    """Malformed values fall back to the default, values below 1 are clamped to 1."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return max(1, value)


def parse_stock_flag(raw: str | None) -> bool | None:
    # Presence of the parameter switches the filter on; only "true" means in stock.
    if raw is None:
        return None
    return raw == "true"


class ProductQuery(BaseModel):
    category: str | None = None
    in_stock: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort_by: str = "name"
    sort_order: SortOrder = SortOrder.ASC

    model_config = {"frozen": True}

    @classmethod
    def from_params(
        cls,
        *,
        category: str | None = None,
        in_stock: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        page: str | None = None,
        limit: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> ProductQuery:
        return cls(
            category=category or None,
            in_stock=parse_stock_flag(in_stock),
            min_price=parse_price(min_price),
            max_price=parse_price(max_price),
            page=parse_positive_int(page, 1),
            limit=min(parse_positive_int(limit, default_limit), max_limit),
            sort_by=sort_by or "name",
            sort_order=SortOrder.DESC if sort_order == SortOrder.DESC else SortOrder.ASC,
        )


class ProductSearchQuery(BaseModel):
    q: str
    category: str | None = None
    in_stock: bool | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    model_config = {"frozen": True}

    @classmethod
    def from_params(
        cls,
        *,
        q: str | None,
        category: str | None = None,
        in_stock: str | None = None,
        page: str | None = None,
        limit: str | None = None,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> ProductSearchQuery:
        """
        Raises:
            ProductApiError: (validation) when the search term is missing or blank.
        """
        if not q or not q.strip():
            raise ProductApiError.validation("Search query is required")
        return cls(
            q=q,
            category=category or None,
            in_stock=parse_stock_flag(in_stock),
            page=parse_positive_int(page, 1),
            limit=min(parse_positive_int(limit, default_limit), max_limit),
        )


# ---------------------------------------------------------------------------
# API Response Schemas
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Pagination(_CamelModel):
    current_page: int
    total_pages: int
    total_products: int
    has_next_page: bool
    has_prev_page: bool


class ProductPage(BaseModel):
    """Result of the query pipeline before it is wrapped into a response."""

    products: list[Product]
    pagination: Pagination


class ListFilters(_CamelModel):
    category: str | None = None
    in_stock: bool | None = None
    min_price: float | None = None
    max_price: float | None = None


class SearchFilters(_CamelModel):
    category: str | None = None
    in_stock: bool | None = None


class Sorting(_CamelModel):
    sort_by: str
    sort_order: SortOrder


class ProductListResponse(_CamelModel):
    products: list[Product]
    pagination: Pagination
    filters: ListFilters
    sorting: Sorting


class ProductSearchResponse(_CamelModel):
    products: list[Product]
    search_query: str
    total_results: int
    pagination: Pagination
    filters: SearchFilters


class ProductMutationResponse(_CamelModel):
    message: str
    product: Product


class StockOverview(_CamelModel):
    total_products: int
    in_stock_products: int
    out_of_stock_products: int
    stock_percentage: float


class PriceRanges(BaseModel):
    # wire names as-is, not camelCased
    under50: int = 0
    between50and200: int = 0
    between200and500: int = 0
    over500: int = 0


class PricingSummary(_CamelModel):
    # None on an empty catalog
    min_price: float | None
    max_price: float | None
    average_price: float | None
    price_ranges: PriceRanges


class ProductStatistics(_CamelModel):
    overview: StockOverview
    pricing: PricingSummary
    categories: dict[str, int]
    last_updated: datetime
