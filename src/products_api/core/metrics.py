from prometheus_client import Counter, Gauge

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)

PRODUCT_MUTATIONS = Counter(
    "product_mutations_total",
    "Total number of successful product mutations",
    ["operation"],
)

PRODUCTS_IN_STORE = Gauge("products_in_store", "Number of products currently held in memory")
