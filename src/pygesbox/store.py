"""Per-source sample store.

The store is rebuilt from scratch on every refresh and never mutated
afterwards: given the same samples it always produces the same
sequences.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pygesbox.models.sample import Sample, SourceId

_logger = logging.getLogger(__name__)


def _accumulate(samples: Sequence[Sample]) -> tuple[Sample, ...]:
    """Replace per-interval deltas by their running sum."""
    total = 0.0
    result: list[Sample] = []
    for sample in samples:
        total += sample.volume
        result.append(sample.model_copy(update={"volume": total}))
    return tuple(result)


class SampleStore:
    """Two time-sorted sample sequences, one per source.

    Usage::

        store = SampleStore.from_samples(parse_samples(payload))
        rows = align(store.a, store.b)
    """

    def __init__(self, a: Sequence[Sample] = (), b: Sequence[Sample] = ()) -> None:
        self._sequences: dict[SourceId, tuple[Sample, ...]] = {
            SourceId.A: tuple(a),
            SourceId.B: tuple(b),
        }

    @classmethod
    def from_samples(cls, samples: Iterable[Sample], *, accumulate: bool = False) -> SampleStore:
        """Partition samples by source and sort each part by timestamp.

        The sort is stable: samples sharing a timestamp keep their
        arrival order.

        Parameters
        ----------
        samples
            Samples in arrival order.
        accumulate
            When ``True`` each volume is a delta and is replaced by the
            cumulative sum of its source after sorting.
        """
        partitions: dict[SourceId, list[Sample]] = {SourceId.A: [], SourceId.B: []}
        for sample in samples:
            partitions[sample.source_id].append(sample)

        sequences: dict[SourceId, tuple[Sample, ...]] = {}
        for source, items in partitions.items():
            ordered = tuple(sorted(items, key=lambda s: s.timestamp))
            if accumulate:
                ordered = _accumulate(ordered)
            sequences[source] = ordered

        store = cls(sequences[SourceId.A], sequences[SourceId.B])
        for source in SourceId:
            resets = store.volume_resets(source)
            if resets:
                _logger.debug("Source %s cumulative volume decreased %d time(s)", source, resets)
        return store

    @property
    def a(self) -> tuple[Sample, ...]:
        return self._sequences[SourceId.A]

    @property
    def b(self) -> tuple[Sample, ...]:
        return self._sequences[SourceId.B]

    @property
    def is_empty(self) -> bool:
        return not self.a and not self.b

    def sequence(self, source: SourceId) -> tuple[Sample, ...]:
        return self._sequences[source]

    def latest(self, source: SourceId) -> Sample | None:
        """Most recent sample of *source*, or ``None`` when it has none."""
        sequence = self._sequences[source]
        return sequence[-1] if sequence else None

    def counts(self) -> dict[SourceId, int]:
        return {source: len(sequence) for source, sequence in self._sequences.items()}

    def volume_resets(self, source: SourceId) -> int:
        """Count places where the cumulative volume goes down (sensor resets)."""
        sequence = self._sequences[source]
        return sum(1 for prev, cur in zip(sequence, sequence[1:]) if cur.volume < prev.volume)

    def __repr__(self) -> str:
        return f"SampleStore(a={len(self.a)}, b={len(self.b)})"
