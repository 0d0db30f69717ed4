"""Prometheus metrics helpers for outbound API observability."""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

CLIENT_REQUESTS_TOTAL = Counter(
    "podocare_client_requests_total",
    "Total number of requests sent to the clinic API.",
    ["method", "resource", "status_code"],
)

CLIENT_REQUEST_DURATION_SECONDS = Histogram(
    "podocare_client_request_duration_seconds",
    "Clinic API request latency in seconds.",
    ["method", "resource"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def resource_label(endpoint: str) -> str:
    """Reduce an endpoint to its first path segment, e.g. ``/patient/42`` -> ``/patient``."""
    path = endpoint.split("?", 1)[0].strip("/")
    if not path:
        return "/"
    return "/" + path.split("/", 1)[0]


def observe_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Track request count and latency for one round trip."""
    method_label = method.upper()
    resource = resource_label(endpoint)

    CLIENT_REQUESTS_TOTAL.labels(
        method=method_label,
        resource=resource,
        status_code=str(status_code),
    ).inc()
    CLIENT_REQUEST_DURATION_SECONDS.labels(
        method=method_label,
        resource=resource,
    ).observe(duration_seconds)


def build_metrics_payload() -> tuple[str, bytes]:
    """Return Prometheus exposition content type and payload."""
    return CONTENT_TYPE_LATEST, generate_latest()
