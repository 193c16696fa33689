from __future__ import annotations

from pygesbox.models.sample import Sample, SourceId
from pygesbox.store import SampleStore


def _s(source: SourceId, ts: int, volume: float) -> Sample:
    return Sample(source_id=source, timestamp=ts, volume=volume)


def test_partition_and_sort_by_timestamp() -> None:
    store = SampleStore.from_samples(
        [
            _s(SourceId.B, 30, 3.0),
            _s(SourceId.A, 20, 2.0),
            _s(SourceId.B, 10, 1.0),
            _s(SourceId.A, 5, 0.5),
        ]
    )

    assert [s.timestamp for s in store.a] == [5, 20]
    assert [s.timestamp for s in store.b] == [10, 30]
    assert store.counts() == {SourceId.A: 2, SourceId.B: 2}


def test_sort_is_stable_for_equal_timestamps() -> None:
    first = _s(SourceId.A, 10, 1.0)
    second = _s(SourceId.A, 10, 2.0)

    store = SampleStore.from_samples([first, _s(SourceId.A, 5, 0.1), second])

    assert [s.volume for s in store.a] == [0.1, 1.0, 2.0]


def test_empty_input_gives_two_empty_sequences() -> None:
    store = SampleStore.from_samples([])

    assert store.a == ()
    assert store.b == ()
    assert store.is_empty
    assert store.latest(SourceId.A) is None


def test_latest_and_sequence_accessors() -> None:
    store = SampleStore.from_samples([_s(SourceId.B, 10, 1.0), _s(SourceId.B, 20, 2.0)])

    assert store.sequence(SourceId.B) == store.b
    latest = store.latest(SourceId.B)
    assert latest is not None
    assert latest.timestamp == 20
    assert not store.is_empty


def test_accumulate_recomputes_cumulative_after_sorting() -> None:
    store = SampleStore.from_samples(
        [
            _s(SourceId.A, 20, 2.0),
            _s(SourceId.A, 10, 1.0),
            _s(SourceId.B, 15, 0.5),
            _s(SourceId.A, 30, 0.5),
        ],
        accumulate=True,
    )

    assert [s.volume for s in store.a] == [1.0, 3.0, 3.5]
    assert [s.volume for s in store.b] == [0.5]


def test_volume_reset_is_tolerated() -> None:
    store = SampleStore.from_samples(
        [_s(SourceId.A, 10, 100.0), _s(SourceId.A, 20, 3.0), _s(SourceId.A, 30, 5.0)]
    )

    assert [s.volume for s in store.a] == [100.0, 3.0, 5.0]
    assert store.volume_resets(SourceId.A) == 1
    assert store.volume_resets(SourceId.B) == 0
