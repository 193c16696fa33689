"""Normalization helpers.

Centralizes defensive parsing of raw sample fields.
"""

from __future__ import annotations

import math
from typing import Any

from pygesbox._constants import MAX_TIMESTAMP_SECONDS, MS_THRESHOLD


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, str):
        # Spreadsheet exports may use a decimal comma.
        value = value.strip().replace(",", ".")
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def normalize_timestamp_seconds(value: Any) -> int | None:
    """Normalize a raw timestamp to integer epoch seconds.

    - Empty/missing/unparseable -> None
    - Negative -> None
    - Milliseconds (> 1e11) -> seconds
    - Fractional seconds are truncated
    - Beyond year 9999 after the ms step -> None
    """

    ts = safe_float(value)
    if ts is None or ts < 0:
        return None
    if ts > MS_THRESHOLD:
        ts /= 1000.0
    if ts > MAX_TIMESTAMP_SECONDS:
        return None
    return int(ts)
