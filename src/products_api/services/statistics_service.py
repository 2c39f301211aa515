from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from products_api.domain.models import (
    PriceRanges,
    PricingSummary,
    Product,
    ProductStatistics,
    StockOverview,
)


def _bucket(price: float) -> str:
    if price < 50:
        return "under50"
    if price < 200:
        return "between50and200"
    if price < 500:
        return "between200and500"
    return "over500"


def compute_statistics(
    products: Sequence[Product], now: datetime | None = None
) -> ProductStatistics:
    """
    Aggregates the whole catalog. On an empty catalog the stock percentage is 0
    and min/max/average price are None.
    """
    total = len(products)
    in_stock = sum(1 for p in products if p.in_stock)
    prices = [p.price for p in products]

    stock_percentage = round(in_stock / total * 100, 2) if total > 0 else 0.0
    average = round(sum(prices) / total, 2) if total > 0 else None

    buckets = Counter(_bucket(price) for price in prices)

    return ProductStatistics(
        overview=StockOverview(
            total_products=total,
            in_stock_products=in_stock,
            out_of_stock_products=total - in_stock,
            stock_percentage=stock_percentage,
        ),
        pricing=PricingSummary(
            min_price=min(prices, default=None),
            max_price=max(prices, default=None),
            average_price=average,
            price_ranges=PriceRanges(**buckets),
        ),
        categories=dict(Counter(p.category for p in products)),
        last_updated=now or datetime.now(UTC),
    )
