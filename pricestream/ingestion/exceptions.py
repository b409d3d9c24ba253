"""Ingestion-specific exceptions.

All of them abort the ingestion: callers must not assume any prefix of the
source was loaded.
"""

from __future__ import annotations

from pricestream.common.exceptions import PriceStreamError


class IngestionError(PriceStreamError):
    """Base exception for all ingestion failures."""


class SourceUnavailableError(IngestionError):
    """The source could not be opened or read at all."""


class SchemaError(IngestionError):
    """Header is missing or does not name the required OHLCV columns in order."""


class ParseError(IngestionError):
    """A row is malformed or one of its cells is not a decimal number.

    Context carries the offending ``token``, its ``column`` and the source
    ``line`` so the caller can point the user at the exact cell.
    """
