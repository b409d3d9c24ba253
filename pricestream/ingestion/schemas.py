"""Price data types produced by ingestion and consumed by the windowed stream."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np
from pydantic import BaseModel, ConfigDict

# Required CSV columns, in order
CSV_COLUMNS: tuple[str, ...] = ("open", "high", "low", "close", "volume")


class PriceRecord(BaseModel):
    """One OHLCV bar.

    Values are passed through as parsed; no range checks (negative prices are
    accepted) and no unit conversion.
    """

    model_config = ConfigDict(frozen=True)

    open: float
    high: float
    low: float
    close: float
    volume: float

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        """Values in CSV column order."""
        return (self.open, self.high, self.low, self.close, self.volume)


def records_to_array(records: Iterable[PriceRecord]) -> np.ndarray:
    """Stack records into an (N, 5) float64 array in CSV column order."""
    rows = [record.as_tuple() for record in records]
    if not rows:
        return np.empty((0, len(CSV_COLUMNS)), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


class PriceSeries:
    """Immutable, chronologically ordered sequence of PriceRecords.

    Index 0 is the earliest record. Safe to share between any number of
    WindowedStreams since nothing mutates it after construction.

    Attributes:
        source: Identifier the series was loaded from, if any.
    """

    __slots__ = ("_records", "source")

    def __init__(self, records: Iterable[PriceRecord], source: str | None = None) -> None:
        self._records: tuple[PriceRecord, ...] = tuple(records)
        self.source = source

    @property
    def records(self) -> tuple[PriceRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PriceRecord]:
        return iter(self._records)

    def __getitem__(self, index: int | slice) -> PriceRecord | tuple[PriceRecord, ...]:
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriceSeries):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"PriceSeries(records={len(self._records)}, source={self.source!r})"

    def as_array(self) -> np.ndarray:
        """Return the series as an (N, 5) float64 array (open, high, low, close, volume)."""
        return records_to_array(self._records)
