"""Base exception for pricestream.

Every package-specific error (ingestion, streaming) derives from
PriceStreamError, so callers can catch one type at the boundary.
"""

from __future__ import annotations


class PriceStreamError(Exception):
    """Base exception for all pricestream errors.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured data for logging/debugging.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{super().__str__()} | context={self.context}"
        return super().__str__()
