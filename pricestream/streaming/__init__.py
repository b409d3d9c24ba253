"""Windowed stream — forward-only delivery of trailing OHLCV windows.

A WindowedStream owns a cursor over an immutable PriceSeries and hands the
simulation loop the latest N records, one step at a time, until exhausted.
"""

from __future__ import annotations
