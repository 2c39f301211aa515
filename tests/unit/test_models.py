import pytest
from pydantic import ValidationError

from products_api.domain.errors import ErrorKind, ProductApiError
from products_api.domain.models import (
    Product,
    ProductCreate,
    ProductQuery,
    ProductSearchQuery,
    ProductUpdate,
    SortOrder,
    parse_positive_int,
    parse_price,
)


def _create_payload(**overrides: object) -> dict:
    payload = {
        "name": "Laptop",
        "description": "Fast",
        "price": 10,
        "category": "electronics",
        "inStock": True,
    }
    payload.update(overrides)
    return payload


def test_product_serialises_in_camel_case() -> None:
    product = Product(
        id="1", name="Laptop", description="d", price=1.5, category="c", in_stock=True
    )
    assert product.model_dump(by_alias=True)["inStock"] is True


def test_product_is_frozen() -> None:
    product = Product(id="1", name="n", description="d", price=1, category="c", in_stock=True)
    with pytest.raises(ValidationError):
        product.name = "other"  # type: ignore[misc]


def test_create_trims_and_ignores_id() -> None:
    payload = ProductCreate.model_validate(
        _create_payload(id="client-id", name="  Laptop ", category=" electronics ")
    )

    assert payload.name == "Laptop"
    assert payload.category == "electronics"
    assert "id" not in payload.model_dump()


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"description": ""},
        {"price": -1},
        {"price": "10"},
        {"category": 5},
        {"inStock": "yes"},
        {"inStock": 1},
    ],
)
def test_create_rejects_invalid_fields(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        ProductCreate.model_validate(_create_payload(**overrides))


def test_create_requires_every_field() -> None:
    with pytest.raises(ValidationError) as exc_info:
        ProductCreate.model_validate({})
    assert len(exc_info.value.errors()) == 5


def test_update_tracks_only_given_fields() -> None:
    payload = ProductUpdate.model_validate({"price": 12.5, "id": "ignored"})
    assert payload.changes() == {"price": 12.5}
    assert ProductUpdate().changes() == {}


@pytest.mark.parametrize(
    "body", [{"name": None}, {"name": " "}, {"price": -0.5}, {"inStock": "true"}]
)
def test_update_rejects_invalid_fields(body: dict) -> None:
    with pytest.raises(ValidationError):
        ProductUpdate.model_validate(body)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("12.5", 12.5), ("0", 0.0), ("abc", None), ("", None), ("nan", None)],
)
def test_parse_price(raw: str | None, expected: float | None) -> None:
    assert parse_price(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"), [(None, 7), ("3", 3), ("0", 1), ("-4", 1), ("x", 7), ("2.5", 7)]
)
def test_parse_positive_int(raw: str | None, expected: int) -> None:
    assert parse_positive_int(raw, 7) == expected


def test_query_from_params_defaults() -> None:
    query = ProductQuery.from_params(default_limit=10)

    assert query.category is None
    assert query.in_stock is None
    assert (query.page, query.limit) == (1, 10)
    assert query.sort_by == "name"
    assert query.sort_order is SortOrder.ASC


@pytest.mark.parametrize(
    ("raw", "expected"), [("true", True), ("false", False), ("TRUE", False), ("", False)]
)
def test_query_stock_flag(raw: str, expected: bool) -> None:
    assert ProductQuery.from_params(in_stock=raw).in_stock is expected


def test_query_clamps_paging_and_caps_limit() -> None:
    query = ProductQuery.from_params(page="0", limit="-5", max_limit=50)
    assert (query.page, query.limit) == (1, 1)

    assert ProductQuery.from_params(limit="500", max_limit=50).limit == 50


def test_query_sort_order_falls_back_to_ascending() -> None:
    assert ProductQuery.from_params(sort_order="desc").sort_order is SortOrder.DESC
    assert ProductQuery.from_params(sort_order="sideways").sort_order is SortOrder.ASC


@pytest.mark.parametrize("q", [None, "", "   "])
def test_search_query_requires_term(q: str | None) -> None:
    with pytest.raises(ProductApiError) as exc_info:
        ProductSearchQuery.from_params(q=q)

    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert exc_info.value.message == "Search query is required"


def test_search_query_keeps_raw_term() -> None:
    assert ProductSearchQuery.from_params(q=" Laptop").q == " Laptop"


@pytest.mark.parametrize("price", [float("inf"), float("nan")])
def test_non_finite_prices_are_rejected(price: float) -> None:
    with pytest.raises(ValidationError):
        ProductCreate.model_validate(_create_payload(price=price))
    with pytest.raises(ValidationError):
        ProductUpdate.model_validate({"price": price})
