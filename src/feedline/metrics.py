"""
Prometheus metrics for feedline producers.

Registered on the global REGISTRY at import time.
"""

from prometheus_client import Counter, Histogram

from .settings import get_settings

DELIVERIES_TOTAL = Counter(
    "feedline_deliveries_total",
    "Delivery attempts by outcome (delivered, redirected, failed)",
    ["feeder", "outcome"],
)

DELIVERY_LATENCY_MS = Histogram(
    "feedline_delivery_latency_ms",
    "Time from delivery attempt to settled outcome, in milliseconds",
    ["feeder"],
    buckets=[1, 2.5, 5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000],
)

WATCHDOG_FIRES_TOTAL = Counter(
    "feedline_watchdog_fires_total",
    "Number of watchdog deadlines that elapsed",
)

ITERATOR_EXHAUSTED_TOTAL = Counter(
    "feedline_iterator_exhausted_total",
    "Number of iterator feed channels that reached the end of their source",
)


def record_delivery(feeder: str, outcome: str, elapsed_ms: float) -> None:
    if not get_settings().metrics_enabled:
        return
    DELIVERIES_TOTAL.labels(feeder=feeder, outcome=outcome).inc()
    DELIVERY_LATENCY_MS.labels(feeder=feeder).observe(elapsed_ms)


def record_watchdog_fire() -> None:
    if get_settings().metrics_enabled:
        WATCHDOG_FIRES_TOTAL.inc()


def record_iterator_exhausted() -> None:
    if get_settings().metrics_enabled:
        ITERATOR_EXHAUSTED_TOTAL.inc()
