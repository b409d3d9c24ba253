"""pricestream — OHLCV ingestion and trailing-window delivery for backtests.

Loads historical price bars from CSV into an immutable series, then replays
that series to a simulation loop as a forward-only stream of fixed-size windows.

Usage:
    from pricestream import WindowedStream, load_series

    series = load_series("prices.csv")
    for window in WindowedStream(series, window_size=20):
        ...
"""

from __future__ import annotations

from pricestream.ingestion.csv_source import load_series
from pricestream.ingestion.schemas import PriceRecord, PriceSeries
from pricestream.streaming.replay import ReplaySummary, replay
from pricestream.streaming.window import Window, WindowedStream

__version__ = "0.1.0"

__all__ = [
    "PriceRecord",
    "PriceSeries",
    "ReplaySummary",
    "Window",
    "WindowedStream",
    "load_series",
    "replay",
]
