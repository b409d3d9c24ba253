"""Trailing-window stream over a PriceSeries.

The stream holds the series and a cursor ``c`` (initially the window size W).
Each advance returns ``series[c-W : c]`` and moves the cursor one step, so a
series of N records yields exactly N - W + 1 windows, oldest first. When no
full window remains the stream is exhausted and stays exhausted.

The series is never mutated, so any number of streams (e.g. one per window
size) can share it. A single stream is single-consumer; concurrent advance()
calls must be serialized by the caller.

Usage:
    from pricestream.streaming.window import WindowedStream

    stream = WindowedStream(series, window_size=20)
    while (window := stream.advance()) is not None:
        strategy.on_window(window)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from pricestream.common.config import get_settings
from pricestream.common.logging import get_logger
from pricestream.ingestion.schemas import PriceRecord, PriceSeries, records_to_array
from pricestream.streaming.exceptions import StreamContractError

logger = get_logger("STREAM")


@dataclass(frozen=True)
class Window:
    """The latest W records as of one simulation step.

    Attributes:
        records: Records ordered oldest to newest; length is the window size.
        step: 0-based window index k; records == series[k : k + W].
    """

    records: tuple[PriceRecord, ...]
    step: int

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PriceRecord]:
        return iter(self.records)

    def __getitem__(self, index: int | slice) -> PriceRecord | tuple[PriceRecord, ...]:
        return self.records[index]

    @property
    def latest(self) -> PriceRecord:
        """The newest record in the window (the bar "as of" this step)."""
        return self.records[-1]

    @property
    def closes(self) -> tuple[float, ...]:
        return tuple(record.close for record in self.records)

    def as_array(self) -> np.ndarray:
        """Return the window as a (W, 5) float64 array (open, high, low, close, volume)."""
        return records_to_array(self.records)


class WindowedStream:
    """Forward-only stream of fixed-size trailing windows.

    Args:
        series: PriceSeries to replay. A list or tuple of PriceRecords is
            wrapped in a PriceSeries.
        window_size: Records per window (W >= 1). Defaults to
            settings.default_window_size.

    Raises:
        StreamContractError: If series is None or window_size is not a
            positive int.
    """

    def __init__(
        self,
        series: PriceSeries | Sequence[PriceRecord],
        window_size: int | None = None,
    ) -> None:
        if series is None:
            raise StreamContractError("WindowedStream requires a price series, got None")
        if isinstance(series, list | tuple):
            series = PriceSeries(series)
        elif not isinstance(series, PriceSeries):
            raise StreamContractError(
                "WindowedStream requires a PriceSeries",
                context={"type": type(series).__name__},
            )

        if window_size is None:
            window_size = get_settings().default_window_size
        if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
            raise StreamContractError(
                f"window_size must be a positive integer, got {window_size!r}",
                context={"window_size": window_size},
            )

        self._series = series
        self._window_size = window_size
        self._cursor = window_size
        self._exhaustion_logged = False

    @property
    def series(self) -> PriceSeries:
        return self._series

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def position(self) -> int:
        """Current cursor: number of records covered once the next window is delivered."""
        return self._cursor

    @property
    def total_windows(self) -> int:
        """Windows this stream produces over its whole life: max(0, N - W + 1)."""
        return max(0, len(self._series) - self._window_size + 1)

    @property
    def remaining(self) -> int:
        """Windows still deliverable."""
        return max(0, len(self._series) - self._cursor + 1)

    @property
    def exhausted(self) -> bool:
        return self._cursor > len(self._series)

    def advance(self) -> Window | None:
        """Return the next trailing window, or None once the stream is exhausted.

        Exhaustion is terminal: every call after the first None also
        returns None.
        """
        if self._cursor <= len(self._series):
            start = self._cursor - self._window_size
            window = Window(records=self._series[start : self._cursor], step=start)
            self._cursor += 1
            return window

        if not self._exhaustion_logged:
            self._exhaustion_logged = True
            logger.debug(
                "Window stream exhausted",
                extra={
                    "data": {
                        "source": self._series.source,
                        "records": len(self._series),
                        "window_size": self._window_size,
                        "windows_delivered": self.total_windows,
                    }
                },
            )
        return None

    def __iter__(self) -> Iterator[Window]:
        return self

    def __next__(self) -> Window:
        window = self.advance()
        if window is None:
            raise StopIteration
        return window

    def __repr__(self) -> str:
        return (
            f"WindowedStream(window_size={self._window_size}, "
            f"position={self._cursor}, records={len(self._series)})"
        )
