"""
Prometheus Metrics for the marketplace backend.

DATA FLOW:
    This file                  presentation/api/metrics.py         Scraper
    ─────────                  ────────────────────────────         ───────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus / Alloy

METRIC TYPES:
    - Counter: Value only goes up (total count, e.g., total refunds)
    - Histogram: Distribution (for percentiles like P95, e.g., latency)
"""

from prometheus_client import (
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30],
)

ORDER_TRANSITIONS_TOTAL = Counter(
    "marketplace_order_transitions_total",
    "Order lifecycle operations that committed",
    ["operation"],
)

CREDITS_REFUNDED_TOTAL = Counter(
    "marketplace_credits_refunded_total",
    "Credits returned to bidders",
    ["reason"],
)

MESSAGES_BLOCKED_TOTAL = Counter(
    "marketplace_messages_blocked_total",
    "Chat messages rejected by the content policy",
)

NOTIFICATIONS_TOTAL = Counter(
    "marketplace_notifications_total",
    "Notification delivery attempts by channel and outcome",
    ["channel", "outcome"],
)

EVENTS_DISPATCHED_TOTAL = Counter(
    "marketplace_outbox_events_dispatched_total",
    "Outbox events marked dispatched",
    ["event_type"],
)

ERRORS_TOTAL = Counter(
    "marketplace_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class MetricsOutcome:
    """Outcome labels for marketplace_notifications_total."""

    SENT = "sent"
    FAILED = "failed"


class MetricsErrorType:
    """Error type labels for marketplace_errors_total."""

    UNHANDLED = "unhandled"
    FIRST_MESSAGE_FAILED = "first_message_failed"
    OUTBOX_GAVE_UP = "outbox_gave_up"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Call to record request latency. Integration point: fastapi_app.py middleware"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def increment_order_transition(operation: str):
    ORDER_TRANSITIONS_TOTAL.labels(operation=operation).inc()


def add_credits_refunded(reason: str, amount: int):
    if amount > 0:
        CREDITS_REFUNDED_TOTAL.labels(reason=reason).inc(amount)


def increment_messages_blocked():
    MESSAGES_BLOCKED_TOTAL.inc()


def increment_notification(channel: str, outcome: str):
    NOTIFICATIONS_TOTAL.labels(channel=channel, outcome=outcome).inc()


def increment_events_dispatched(event_type: str):
    EVENTS_DISPATCHED_TOTAL.labels(event_type=event_type).inc()


def increment_error(error_type: str):
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Called by: presentation/api/metrics.py

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "observe_request_latency",
    "increment_order_transition",
    "add_credits_refunded",
    "increment_messages_blocked",
    "increment_notification",
    "increment_events_dispatched",
    "increment_error",
    "get_metrics_content",
    "MetricsOutcome",
    "MetricsErrorType",
]
