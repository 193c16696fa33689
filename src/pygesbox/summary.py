"""Latest-reading comparison between the two sources.

The summary is computed from the raw per-source sequences rather than
from aligned rows, so a sample that alignment could not pair still
counts as the latest reading of its source.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pygesbox.models.sample import Sample
from pygesbox.models.summary import Summary

_logger = logging.getLogger(__name__)


def discrepancy_ratio(last_a: float | None, last_b: float | None) -> float | None:
    """Relative difference ``|a - b| / max(a, b)``.

    ``None`` when either value is missing or both are zero.
    """
    if last_a is None or last_b is None:
        return None
    largest = max(last_a, last_b)
    if largest <= 0:
        return None
    return abs(last_a - last_b) / largest


def evaluate_summary(
    a: Sequence[Sample],
    b: Sequence[Sample],
    *,
    alert_threshold_percent: float,
) -> Summary:
    """Build the live status summary from two time-sorted sequences."""
    latest_a = a[-1] if a else None
    latest_b = b[-1] if b else None

    last_a = latest_a.volume if latest_a is not None else None
    last_b = latest_b.volume if latest_b is not None else None
    timestamps = [s.timestamp for s in (latest_a, latest_b) if s is not None]

    summary = Summary(
        last_a=last_a,
        last_b=last_b,
        last_timestamp=max(timestamps) if timestamps else None,
        discrepancy_ratio=discrepancy_ratio(last_a, last_b),
        alert_threshold_percent=alert_threshold_percent,
    )
    if summary.alert:
        _logger.info(
            "Discrepancy %.2f%% exceeds %.2f%% (A=%s, B=%s)",
            summary.discrepancy_percent,
            alert_threshold_percent,
            last_a,
            last_b,
        )
    return summary
