"""Streaming-specific exceptions."""

from __future__ import annotations

from pricestream.common.exceptions import PriceStreamError


class StreamContractError(PriceStreamError):
    """WindowedStream was constructed with an invalid window size or no series.

    A programming error, raised at construction and never during iteration.
    """
