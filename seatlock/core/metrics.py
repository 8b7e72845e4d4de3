"""
Prometheus metrics for the seat registry and the HTTP layer
"""

from prometheus_client import Counter, Histogram, REGISTRY


def _counter(name: str, documentation: str, labelnames=()) -> Counter:
    # Metrics may already be registered when the module is re-imported (tests, reload)
    try:
        return Counter(name, documentation, labelnames)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


def _histogram(name: str, documentation: str, labelnames=()) -> Histogram:
    try:
        return Histogram(name, documentation, labelnames)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUEST_COUNT = _counter(
    "app_requests_total",
    "Total requests",
    ["method", "endpoint", "status"]
)
REQUEST_DURATION = _histogram(
    "app_request_duration_seconds",
    "Request duration",
    ["method", "endpoint"]
)
SEAT_OPERATIONS = _counter(
    "seatlock_seat_operations_total",
    "Seat registry operations by outcome",
    ["operation", "outcome"]
)
SEAT_LOCKS_EXPIRED = _counter(
    "seatlock_seat_locks_expired_total",
    "Locks reclaimed by the expiry sweep"
)


def record_seat_operation(operation: str, outcome: str) -> None:
    """Count a registry operation, successful or rejected"""
    SEAT_OPERATIONS.labels(operation=operation, outcome=outcome).inc()


def record_expired_locks(count: int) -> None:
    if count:
        SEAT_LOCKS_EXPIRED.inc(count)


def record_request(method: str, endpoint: str, status: int, duration: float) -> None:
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
    REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def endpoint_label(scope) -> str:
    """Route template of the matched route, so seat ids never become label values"""
    route = scope.get("route")
    path = getattr(route, "path", None)
    return path if path else "unmatched"
