from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pygesbox.models.aligned import AlignedRow
from pygesbox.models.snapshot import MonitorSnapshot
from pygesbox.presentation import build_chart_series, build_table_rows, format_status, format_utc

ROWS = [
    AlignedRow(timestamp=1_700_000_000, value_a=100.0, value_b=92.0),
    AlignedRow(timestamp=1_700_000_030, value_a=101.0, value_b=None),
    AlignedRow(timestamp=1_700_000_060, value_a=0.0, value_b=0.0),
]


def test_format_utc() -> None:
    assert format_utc(1_700_000_000) == "2023-11-14 22:13:20"
    assert format_utc(1_700_000_000, "%H:%M:%S") == "22:13:20"


def test_table_rows_difference_columns() -> None:
    table = build_table_rows(ROWS)

    assert table[0].time_label == "2023-11-14 22:13:20"
    assert table[0].difference == pytest.approx(8.0)
    assert table[0].difference_percent == pytest.approx(8.0)

    assert table[1].value_b is None
    assert table[1].difference is None
    assert table[1].difference_percent is None

    # No percentage relative to a zero reading.
    assert table[2].difference == 0.0
    assert table[2].difference_percent is None


def test_chart_series_keeps_gaps() -> None:
    chart = build_chart_series(ROWS, label_a="GesBox1", label_b="GesBox2")

    assert chart.labels == ["22:13:20", "22:13:50", "22:14:20"]
    assert chart.series_a == [100.0, 101.0, 0.0]
    assert chart.series_b == [92.0, None, 0.0]
    assert chart.label_a == "GesBox1"


def test_empty_rows() -> None:
    assert build_table_rows([]) == []
    assert build_chart_series([]).labels == []


def test_format_status_variants() -> None:
    fetched_at = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    assert format_status(None).startswith("Waiting")
    assert format_status(MonitorSnapshot(fetched_at=fetched_at)) == "No synchronized data to display."
    assert format_status(MonitorSnapshot(rows=ROWS, fetched_at=fetched_at)) == "Last update: 2026-01-01 12:00:00 UTC"
    assert format_status(None, RuntimeError("boom")) == "Update failed: boom"
