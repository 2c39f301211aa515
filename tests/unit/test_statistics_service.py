from datetime import UTC, datetime

from products_api.domain.models import Product
from products_api.repositories.product_repository import demo_products
from products_api.services.statistics_service import compute_statistics


def _product(pid: str, price: float, in_stock: bool = True, category: str = "misc") -> Product:
    return Product(
        id=pid, name=pid, description=pid, price=price, category=category, in_stock=in_stock
    )


def test_statistics_on_demo_catalog() -> None:
    now = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)

    stats = compute_statistics(demo_products(), now=now)

    assert stats.overview.total_products == 5
    assert stats.overview.in_stock_products == 4
    assert stats.overview.out_of_stock_products == 1
    assert stats.overview.stock_percentage == 80.0
    assert stats.pricing.min_price == 49.99
    assert stats.pricing.max_price == 999.99
    assert stats.pricing.average_price == 405.99
    assert stats.pricing.price_ranges.model_dump() == {
        "under50": 1,
        "between50and200": 2,
        "between200and500": 0,
        "over500": 2,
    }
    assert stats.categories == {"electronics": 2, "appliances": 1, "sports": 1, "books": 1}
    assert stats.last_updated == now


def test_statistics_on_empty_catalog() -> None:
    stats = compute_statistics([])

    assert stats.overview.total_products == 0
    assert stats.overview.stock_percentage == 0
    assert stats.pricing.min_price is None
    assert stats.pricing.max_price is None
    assert stats.pricing.average_price is None
    assert sum(stats.pricing.price_ranges.model_dump().values()) == 0
    assert stats.categories == {}


def test_bucket_boundaries() -> None:
    products = [
        _product("a", 0),
        _product("b", 49.99),
        _product("c", 50),
        _product("d", 199.99),
        _product("e", 200),
        _product("f", 499.99),
        _product("g", 500),
        _product("h", 10_000),
    ]

    ranges = compute_statistics(products).pricing.price_ranges

    assert (ranges.under50, ranges.between50and200) == (2, 2)
    assert (ranges.between200and500, ranges.over500) == (2, 2)


def test_buckets_sum_to_total_and_percentage_is_rounded() -> None:
    products = [_product(str(i), i * 37.5, in_stock=i % 3 == 0) for i in range(7)]

    stats = compute_statistics(products)

    assert sum(stats.pricing.price_ranges.model_dump().values()) == 7
    # 3 of 7 in stock (0, 3, 6)
    assert stats.overview.stock_percentage == 42.86


def test_statistics_serialise_with_camel_case_keys() -> None:
    data = compute_statistics(demo_products()).model_dump(by_alias=True)

    assert set(data) == {"overview", "pricing", "categories", "lastUpdated"}
    assert "stockPercentage" in data["overview"]
    assert "priceRanges" in data["pricing"]
