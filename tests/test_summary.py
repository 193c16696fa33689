from __future__ import annotations

import pytest

from pygesbox.models.sample import Sample, SourceId
from pygesbox.models.summary import Summary
from pygesbox.summary import discrepancy_ratio, evaluate_summary


def _seq(source: SourceId, *points: tuple[int, float]) -> list[Sample]:
    return [Sample(source_id=source, timestamp=ts, volume=v) for ts, v in points]


def test_latest_values_and_timestamp() -> None:
    a = _seq(SourceId.A, (100, 5.0), (130, 6.0))
    b = _seq(SourceId.B, (105, 5.1), (140, 6.2))

    summary = evaluate_summary(a, b, alert_threshold_percent=8.0)

    assert summary.last_a == 6.0
    assert summary.last_b == 6.2
    assert summary.last_timestamp == 140
    assert summary.discrepancy_ratio == pytest.approx(0.2 / 6.2)


def test_ratio_at_threshold_does_not_alert() -> None:
    summary = evaluate_summary(
        _seq(SourceId.A, (1, 100.0)),
        _seq(SourceId.B, (1, 92.0)),
        alert_threshold_percent=8.0,
    )

    assert summary.discrepancy_ratio == pytest.approx(0.08)
    assert summary.discrepancy_percent == 8.0
    assert summary.alert is False


def test_ratio_above_threshold_alerts() -> None:
    summary = evaluate_summary(
        _seq(SourceId.A, (1, 100.0)),
        _seq(SourceId.B, (1, 91.0)),
        alert_threshold_percent=8.0,
    )

    assert summary.discrepancy_ratio == pytest.approx(0.09)
    assert summary.alert is True


def test_ratio_uses_larger_value_as_denominator() -> None:
    assert discrepancy_ratio(91.0, 100.0) == pytest.approx(0.09)
    assert discrepancy_ratio(100.0, 91.0) == pytest.approx(0.09)


def test_equal_positive_values_give_zero_ratio() -> None:
    summary = evaluate_summary(
        _seq(SourceId.A, (1, 12.5)),
        _seq(SourceId.B, (2, 12.5)),
        alert_threshold_percent=0.0,
    )

    assert summary.discrepancy_ratio == 0
    assert summary.alert is False


def test_both_zero_gives_no_ratio() -> None:
    assert discrepancy_ratio(0.0, 0.0) is None


def test_one_empty_source_has_no_ratio() -> None:
    summary = evaluate_summary(_seq(SourceId.A, (50, 3.0)), [], alert_threshold_percent=8.0)

    assert summary.last_a == 3.0
    assert summary.last_b is None
    assert summary.last_timestamp == 50
    assert summary.discrepancy_ratio is None
    assert summary.alert is False


def test_both_empty() -> None:
    summary = evaluate_summary([], [], alert_threshold_percent=8.0)

    assert summary == Summary(alert_threshold_percent=8.0)
    assert summary.last_timestamp is None
    assert summary.last_datetime_utc is None


def test_uses_latest_sample_even_if_unpaired() -> None:
    # The B sample at 500 has no A partner within any tolerance, yet it
    # is B's latest reading.
    a = _seq(SourceId.A, (100, 10.0))
    b = _seq(SourceId.B, (100, 10.0), (500, 20.0))

    summary = evaluate_summary(a, b, alert_threshold_percent=8.0)

    assert summary.last_b == 20.0
    assert summary.last_timestamp == 500
    assert summary.alert is True
