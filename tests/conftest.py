"""Root test configuration — shared fixtures for all test modules.

IMPORTANT: Environment variables are set BEFORE any pricestream imports
so that config.py loads deterministic Settings regardless of the host env.
"""

from __future__ import annotations

import os

os.environ.setdefault("PRICESTREAM_ENVIRONMENT", "testing")
os.environ.setdefault("PRICESTREAM_DEFAULT_WINDOW_SIZE", "5")
os.environ.setdefault("PRICESTREAM_LOG_LEVEL", "DEBUG")

# Now safe to import pricestream modules
import io
import logging
from pathlib import Path

import pytest

from pricestream.common.config import Settings, get_settings
from pricestream.common.logging import MODULE_TAGS, StructuredFormatter, get_logger
from pricestream.ingestion.schemas import PriceRecord, PriceSeries

# ─── Clear cached settings so test env vars are used ───
get_settings.cache_clear()


# ─── Test Settings ───


@pytest.fixture
def test_settings() -> Settings:
    """Settings as loaded from the test environment."""
    return get_settings()


# ─── Log Capture ───


@pytest.fixture
def log_output() -> io.StringIO:
    """Collect formatted log lines from every pricestream logger during the test."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    loggers = [get_logger(tag).logger for tag in sorted(MODULE_TAGS)]
    for logger in loggers:
        logger.addHandler(handler)
    yield stream
    for logger in loggers:
        logger.removeHandler(handler)


# ─── Price Data ───

SAMPLE_CSV = """\
open,high,low,close,volume
1,2,0.5,1.5,100
1.5,2.5,1,2,150
2,3,1.5,2.5,200
"""


@pytest.fixture
def sample_csv_path(tmp_path: Path) -> Path:
    """A well-formed three-row OHLCV CSV on disk."""
    path = tmp_path / "prices.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def write_csv(tmp_path: Path):
    """Factory fixture: write CSV text under tmp_path and return its path."""

    def _write(text: str, name: str = "prices.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return path

    return _write


@pytest.fixture
def sample_records() -> list[PriceRecord]:
    """The three records of SAMPLE_CSV, in order."""
    return [
        PriceRecord(open=1.0, high=2.0, low=0.5, close=1.5, volume=100.0),
        PriceRecord(open=1.5, high=2.5, low=1.0, close=2.0, volume=150.0),
        PriceRecord(open=2.0, high=3.0, low=1.5, close=2.5, volume=200.0),
    ]


@pytest.fixture
def sample_series(sample_records) -> PriceSeries:
    return PriceSeries(sample_records, source="memory")
