"""Prometheus metrics definitions for pricestream.

All metric objects are centralized here as module-level singletons.
Import what you need from anywhere in the codebase:

    from pricestream.common.metrics import INGESTIONS_TOTAL, WINDOWS_DELIVERED_TOTAL

Exposing them (prometheus_client.start_http_server, a push gateway, ...) is
left to the process embedding the library.
"""

from __future__ import annotations

from prometheus_client import Counter, Info

# ─── App Info ───

APP_INFO = Info("pricestream_app", "Library metadata")

# ─── Ingestion ───

INGESTIONS_TOTAL = Counter(
    "pricestream_ingestions_total",
    "CSV ingestion attempts by outcome",
    labelnames=["outcome"],
)

PRICE_ROWS_INGESTED_TOTAL = Counter(
    "pricestream_price_rows_ingested_total",
    "Price rows parsed by successful ingestions",
)

# ─── Streaming ───

WINDOWS_DELIVERED_TOTAL = Counter(
    "pricestream_windows_delivered_total",
    "Trailing windows delivered to replay callbacks",
)


def set_app_info(version: str, environment: str) -> None:
    """Set the app_info metric values. Called once at startup."""
    APP_INFO.info({"version": version, "environment": environment})
