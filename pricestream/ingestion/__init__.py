"""Ingestion adapter — turns a CSV of OHLCV rows into an immutable PriceSeries.

Ingestion is strict and all-or-nothing: one malformed header or cell aborts
the whole load and no series is returned.
"""

from __future__ import annotations
