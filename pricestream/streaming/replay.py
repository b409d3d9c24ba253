"""Replay driver — runs a simulation callback over every window of a stream.

The engine is entirely synchronous: the series is already in memory and no
I/O occurs while replaying.

Usage:
    from pricestream.streaming.replay import replay

    summary = replay(WindowedStream(series, 20), strategy.on_window)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from pricestream.common.logging import get_logger
from pricestream.common.metrics import WINDOWS_DELIVERED_TOTAL
from pricestream.streaming.window import Window, WindowedStream

logger = get_logger("BACKTEST")


@dataclass(frozen=True)
class ReplaySummary:
    """Outcome of one replay run."""

    windows_delivered: int
    window_size: int
    series_length: int
    duration_seconds: float


def replay(stream: WindowedStream, on_window: Callable[[Window], object]) -> ReplaySummary:
    """Drive `stream` to exhaustion, passing each window to `on_window`.

    Starts from the stream's current position, so a partly consumed stream
    only replays its remaining windows.

    Args:
        stream: The stream to drain.
        on_window: Called once per window, oldest first. Its return value is ignored.

    Returns:
        ReplaySummary for this run.

    Raises:
        Whatever `on_window` raises; the stream is left at the failing step.
    """
    start_time = time.monotonic()
    logger.info(
        "Replay started",
        extra={
            "data": {
                "source": stream.series.source,
                "records": len(stream.series),
                "window_size": stream.window_size,
                "windows": stream.remaining,
            }
        },
    )

    delivered = 0
    while (window := stream.advance()) is not None:
        on_window(window)
        delivered += 1
        WINDOWS_DELIVERED_TOTAL.inc()

    summary = ReplaySummary(
        windows_delivered=delivered,
        window_size=stream.window_size,
        series_length=len(stream.series),
        duration_seconds=round(time.monotonic() - start_time, 6),
    )
    logger.info(
        "Replay complete",
        extra={
            "data": {
                "windows_delivered": summary.windows_delivered,
                "duration_seconds": summary.duration_seconds,
            }
        },
    )
    return summary
