"""CSV ingestion adapter — loads OHLCV rows into a PriceSeries.

Expected format:

    open,high,low,close,volume
    1,2,0.5,1.5,100
    1.5,2.5,1,2,150

The header is matched case-insensitively but in fixed order. Row order is
chronological order; no timestamp column is read. Every cell must be plain
decimal notation (optional sign, optional fraction, optional exponent).

Ingestion is all-or-nothing: the first bad header, row, or cell raises and no
series is returned.

Usage:
    from pricestream.ingestion.csv_source import load_series

    series = load_series("data/btc_1h.csv")
"""

from __future__ import annotations

import csv
import os
import re
from collections.abc import Iterable, Iterator
from typing import IO

from pricestream.common.config import get_settings
from pricestream.common.logging import get_logger
from pricestream.common.metrics import INGESTIONS_TOTAL, PRICE_ROWS_INGESTED_TOTAL
from pricestream.ingestion.exceptions import (
    IngestionError,
    ParseError,
    SchemaError,
    SourceUnavailableError,
)
from pricestream.ingestion.schemas import CSV_COLUMNS, PriceRecord, PriceSeries

logger = get_logger("INGEST")

# Decimal notation only: no inf/nan, no underscores, no surrounding whitespace
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Metric outcome label per error type
_OUTCOME_LABELS: dict[type[IngestionError], str] = {
    SourceUnavailableError: "source_unavailable",
    SchemaError: "schema_error",
    ParseError: "parse_error",
}


def open_source(source: str | os.PathLike, encoding: str | None = None) -> IO[str]:
    """Open a CSV source for text reading.

    Args:
        source: Path to the CSV file.
        encoding: Text encoding. Defaults to settings.csv_encoding.

    Returns:
        An open text stream; the caller owns closing it.

    Raises:
        SourceUnavailableError: If the file cannot be opened.
    """
    encoding = encoding or get_settings().csv_encoding
    try:
        return open(source, encoding=encoding, newline="")  # noqa: SIM115
    except (OSError, LookupError) as exc:
        raise SourceUnavailableError(
            f"Could not open price source: {exc}",
            context={"source": os.fspath(source), "encoding": encoding},
        ) from exc


def _next_record(reader: Iterator[list[str]]) -> list[str] | None:
    """Read the next non-blank CSV record, or None at end-of-source."""
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return None
        except csv.Error as exc:
            raise ParseError(f"Malformed CSV record: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise SourceUnavailableError(f"Price source could not be decoded: {exc}") from exc
        if row:
            return row


def read_header(reader: Iterator[list[str]]) -> list[str]:
    """Read the header record and check it names the OHLCV columns in order.

    Raises:
        SchemaError: If the header is missing or does not match CSV_COLUMNS.
    """
    expected = ",".join(CSV_COLUMNS)
    header = _next_record(reader)
    if header is None:
        raise SchemaError(
            f"Price source is empty; expected a header with columns {expected}",
            context={"expected": list(CSV_COLUMNS), "found": []},
        )

    if [column.lower() for column in header] != list(CSV_COLUMNS):
        raise SchemaError(
            f"Invalid header {','.join(header)!r}; expected columns {expected} in that order",
            context={"expected": list(CSV_COLUMNS), "found": header},
        )
    return header


def read_rows(reader: Iterator[list[str]]) -> Iterator[tuple[int, list[str]]]:
    """Lazily yield (line_number, cells) for every data row after the header.

    Blank lines are skipped. Forward-only; after an error the generator is
    finished and ingestion must restart from a fresh reader.

    Raises:
        ParseError: If a row does not have exactly one cell per column.
    """
    while (row := _next_record(reader)) is not None:
        line_number = getattr(reader, "line_num", None)
        if len(row) != len(CSV_COLUMNS):
            raise ParseError(
                f"Expected {len(CSV_COLUMNS)} cells on line {line_number}, found {len(row)}",
                context={"line": line_number, "cells": row},
            )
        yield line_number, row


def _parse_cell(token: str, column: str, line_number: int | None) -> float:
    if not _DECIMAL_PATTERN.fullmatch(token):
        raise ParseError(
            f"Invalid value {token!r} in column {column!r}; expected a decimal number",
            context={"token": token, "column": column, "line": line_number},
        )
    return float(token)


def parse_row(row: list[str], line_number: int | None = None) -> PriceRecord:
    """Convert the five cells of a data row into a PriceRecord.

    Args:
        row: Cells in CSV_COLUMNS order.
        line_number: Source line, used only for error context.

    Raises:
        ParseError: If any cell is not a decimal number.
    """
    if len(row) != len(CSV_COLUMNS):
        raise ParseError(
            f"Expected {len(CSV_COLUMNS)} cells, found {len(row)}",
            context={"line": line_number, "cells": row},
        )
    values = {
        column: _parse_cell(token, column, line_number)
        for column, token in zip(CSV_COLUMNS, row, strict=True)
    }
    return PriceRecord(**values)


def read_series(lines: Iterable[str], source: str | None = None) -> PriceSeries:
    """Parse CSV text lines (an open file or a list of strings) into a PriceSeries.

    Raises:
        SchemaError: Header missing or wrong.
        ParseError: Malformed row or non-numeric cell.
        SourceUnavailableError: Underlying text could not be decoded.
    """
    reader = csv.reader(lines)
    read_header(reader)
    records = [parse_row(row, line_number) for line_number, row in read_rows(reader)]
    return PriceSeries(records, source=source)


def load_series(source: str | os.PathLike, encoding: str | None = None) -> PriceSeries:
    """Load a complete PriceSeries from a CSV file.

    Opens and drains the source exactly once. On any failure no series is
    returned; the specific IngestionError propagates to the caller.

    Args:
        source: Path to the CSV file.
        encoding: Text encoding. Defaults to settings.csv_encoding.

    Returns:
        PriceSeries in source row order.

    Raises:
        SourceUnavailableError: File cannot be opened or decoded.
        SchemaError: Header missing or not open,high,low,close,volume.
        ParseError: Malformed row or non-numeric cell.
    """
    source_id = os.fspath(source)
    try:
        with open_source(source, encoding=encoding) as handle:
            series = read_series(handle, source=source_id)
    except IngestionError as exc:
        INGESTIONS_TOTAL.labels(outcome=_OUTCOME_LABELS.get(type(exc), "error")).inc()
        logger.error(
            "Price ingestion failed",
            extra={
                "data": {
                    "source": source_id,
                    "error": type(exc).__name__,
                    "detail": exc.message,
                    **exc.context,
                }
            },
        )
        raise

    INGESTIONS_TOTAL.labels(outcome="success").inc()
    PRICE_ROWS_INGESTED_TOTAL.inc(len(series))
    logger.info(
        "Price series loaded",
        extra={"data": {"source": source_id, "records": len(series)}},
    )
    return series
