"""
Prometheus metrics for the license authority.

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

# License lifecycle metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["has_expiration"],
)

licenses_extended_total = Counter(
    "licenses_extended_total",
    "Total license extensions",
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked (first revocation only)",
)

license_key_collisions_total = Counter(
    "license_key_collisions_total",
    "Generated license keys rejected because they were already taken",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
