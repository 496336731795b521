from prometheus_client import Counter, Histogram

# 低基数标签：仅使用 method 与 status，不带对象路径
REQUESTS = Counter(
    "storage_requests_total",
    "Total object storage requests",
    ["method", "status"],
)

LATENCY = Histogram(
    "storage_request_duration_seconds",
    "Object storage request latency in seconds",
    ["method"],
)
