"""
Prometheus metrics for the license shop.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Order metrics
orders_created_total = Counter(
    "orders_created_total",
    "Total orders created",
    ["tier"],
)

orders_cancelled_total = Counter(
    "orders_cancelled_total",
    "Total orders cancelled",
)

payments_confirmed_total = Counter(
    "payments_confirmed_total",
    "Total payments confirmed",
    ["tier", "method"],
)

revenue_total = Counter(
    "revenue_total",
    "Revenue booked from confirmed payments",
    ["tier"],
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["tier"],
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total activation slots taken",
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Licenses observed past expiry for the first time",
)

license_validations_total = Counter(
    "license_validations_total",
    "License validations by result",
    ["result"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

# Event bus metrics
event_handler_failures_total = Counter(
    "event_handler_failures_total",
    "Event deliveries whose handler raised",
    ["event_type", "handler"],
)
