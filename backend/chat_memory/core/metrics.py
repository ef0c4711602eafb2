"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

BOT_EXPORTS = Counter(
    "chmem_bot_exports_total",
    "Bots exported",
    labelnames=("status",),
    registry=REGISTRY,
)

BOT_IMPORTS = Counter(
    "chmem_bot_imports_total",
    "Bots imported",
    labelnames=("status",),
    registry=REGISTRY,
)

BOT_RECORDS = Counter(
    "chmem_bot_memory_records_total",
    "Memory records moved by bot export/import",
    labelnames=("direction",),
    registry=REGISTRY,
)

BOT_DURATION = Histogram(
    "chmem_bot_duration_seconds",
    "Duration of bot export/import operations",
    labelnames=("operation",),
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "BOT_EXPORTS",
    "BOT_IMPORTS",
    "BOT_RECORDS",
    "BOT_DURATION",
    "metrics_response",
]
