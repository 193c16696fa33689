"""Alignment strategies for two time-sorted sample sequences.

All strategies are pure functions of their inputs: they never mutate
the sequences and keep no state between calls.

Reference-based strategies emit exactly one row per sample of the
reference source and look up a value from the other source:

* ``nearest_forward``: first other sample at or *after* the reference
  timestamp, at most ``tolerance`` seconds later.  Uses a single
  forward pointer; other samples older than the current reference are
  never scanned again.
* ``nearest_symmetric``: other sample with the smallest absolute
  distance, at most ``tolerance``.  Equal distances resolve to the
  earlier sample.
* ``last_known``: most recent other sample at or *before* the
  reference timestamp, with no staleness limit.

``forward_fill`` merges both timelines instead: one row per input
sample, each carrying the last known value of the other source.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import StrEnum

from pygesbox.models.aligned import AlignedRow
from pygesbox.models.sample import Sample, SourceId

_logger = logging.getLogger(__name__)

# (reference samples, other samples, tolerance) -> other value per reference sample
_Matcher = Callable[[Sequence[Sample], Sequence[Sample], int], list[float | None]]


class AlignmentStrategy(StrEnum):
    NEAREST_FORWARD = "nearest_forward"
    NEAREST_SYMMETRIC = "nearest_symmetric"
    FORWARD_FILL = "forward_fill"
    LAST_KNOWN = "last_known"

    @property
    def uses_reference(self) -> bool:
        return self is not AlignmentStrategy.FORWARD_FILL


def _match_nearest_forward(ref: Sequence[Sample], other: Sequence[Sample], tolerance: int) -> list[float | None]:
    matches: list[float | None] = []
    index = 0
    for sample in ref:
        match: float | None = None
        while index < len(other):
            diff = other[index].timestamp - sample.timestamp
            if 0 <= diff <= tolerance:
                # Not consumed: the next reference sample may pair with it too.
                match = other[index].volume
                break
            if diff > tolerance:
                break
            index += 1
        matches.append(match)
    return matches


def _match_nearest_symmetric(ref: Sequence[Sample], other: Sequence[Sample], tolerance: int) -> list[float | None]:
    matches: list[float | None] = []
    start = 0
    for sample in ref:
        lower = sample.timestamp - tolerance
        upper = sample.timestamp + tolerance
        while start < len(other) and other[start].timestamp < lower:
            start += 1

        best: Sample | None = None
        best_distance = 0
        index = start
        while index < len(other) and other[index].timestamp <= upper:
            distance = abs(other[index].timestamp - sample.timestamp)
            if best is None or distance < best_distance:
                best = other[index]
                best_distance = distance
            index += 1
        matches.append(best.volume if best is not None else None)
    return matches


def _match_last_known(ref: Sequence[Sample], other: Sequence[Sample], _tolerance: int) -> list[float | None]:
    matches: list[float | None] = []
    index = 0
    last: float | None = None
    for sample in ref:
        while index < len(other) and other[index].timestamp <= sample.timestamp:
            last = other[index].volume
            index += 1
        matches.append(last)
    return matches


_MATCHERS: dict[AlignmentStrategy, _Matcher] = {
    AlignmentStrategy.NEAREST_FORWARD: _match_nearest_forward,
    AlignmentStrategy.NEAREST_SYMMETRIC: _match_nearest_symmetric,
    AlignmentStrategy.LAST_KNOWN: _match_last_known,
}


def _forward_fill(a: Sequence[Sample], b: Sequence[Sample]) -> list[AlignedRow]:
    rows: list[AlignedRow] = []
    i = j = 0
    last_a: float | None = None
    last_b: float | None = None
    while i < len(a) or j < len(b):
        # On equal timestamps A is emitted first.
        take_a = j >= len(b) or (i < len(a) and a[i].timestamp <= b[j].timestamp)
        if take_a:
            last_a = a[i].volume
            rows.append(AlignedRow(timestamp=a[i].timestamp, value_a=last_a, value_b=last_b))
            i += 1
        else:
            last_b = b[j].volume
            rows.append(AlignedRow(timestamp=b[j].timestamp, value_a=last_a, value_b=last_b))
            j += 1
    return rows


def align(
    a: Sequence[Sample],
    b: Sequence[Sample],
    *,
    strategy: AlignmentStrategy | str = AlignmentStrategy.NEAREST_FORWARD,
    tolerance_seconds: int = 10,
    reference_source: SourceId | str = SourceId.A,
) -> list[AlignedRow]:
    """Merge two time-sorted sample sequences into aligned rows.

    Parameters
    ----------
    a, b
        Samples of source A and source B, each sorted by timestamp.
    strategy
        Alignment strategy, see :class:`AlignmentStrategy`.
    tolerance_seconds
        Matching window for the nearest-match strategies.
    reference_source
        Source driving row cardinality for reference-based strategies.
        Ignored by ``forward_fill``.

    Returns
    -------
    list[AlignedRow]
        Rows with non-decreasing timestamps.

    Raises
    ------
    ValueError
        If ``tolerance_seconds`` is negative or the strategy is unknown.
    """
    if tolerance_seconds < 0:
        raise ValueError(f"tolerance_seconds must be >= 0, got {tolerance_seconds}")
    strategy = AlignmentStrategy(strategy)
    reference_source = SourceId(reference_source)

    if strategy is AlignmentStrategy.FORWARD_FILL:
        rows = _forward_fill(a, b)
    else:
        ref, other = (a, b) if reference_source is SourceId.A else (b, a)
        matches = _MATCHERS[strategy](ref, other, tolerance_seconds)
        if reference_source is SourceId.A:
            rows = [
                AlignedRow(timestamp=sample.timestamp, value_a=sample.volume, value_b=match)
                for sample, match in zip(ref, matches)
            ]
        else:
            rows = [
                AlignedRow(timestamp=sample.timestamp, value_a=match, value_b=sample.volume)
                for sample, match in zip(ref, matches)
            ]

    _logger.debug(
        "Aligned %d/%d samples into %d rows (strategy=%s, paired=%d)",
        len(a),
        len(b),
        len(rows),
        strategy,
        sum(1 for row in rows if row.is_paired),
    )
    return rows
