"""Display adapters for aligned rows.

These helpers only emit data.  Whatever draws the table or chart owns
its own render target and replaces it with the new data every cycle.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from pygesbox.models.aligned import AlignedRow
from pygesbox.models.presentation import ChartSeries, TableRow
from pygesbox.models.snapshot import MonitorSnapshot

TABLE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
CHART_TIME_FORMAT = "%H:%M:%S"


def format_utc(timestamp: int, fmt: str = TABLE_TIME_FORMAT) -> str:
    return datetime.fromtimestamp(timestamp, tz=UTC).strftime(fmt)


def _difference(row: AlignedRow) -> tuple[float | None, float | None]:
    if row.value_a is None or row.value_b is None:
        return None, None
    difference = row.value_a - row.value_b
    percent = difference / row.value_a * 100 if row.value_a > 0 else None
    return difference, percent


def build_table_rows(rows: Sequence[AlignedRow]) -> list[TableRow]:
    """One table line per aligned row, with the A-minus-B difference columns."""
    table: list[TableRow] = []
    for row in rows:
        difference, percent = _difference(row)
        table.append(
            TableRow(
                timestamp=row.timestamp,
                time_label=format_utc(row.timestamp),
                value_a=row.value_a,
                value_b=row.value_b,
                difference=difference,
                difference_percent=percent,
            )
        )
    return table


def build_chart_series(
    rows: Sequence[AlignedRow],
    *,
    label_a: str = "A",
    label_b: str = "B",
) -> ChartSeries:
    return ChartSeries(
        labels=[format_utc(row.timestamp, CHART_TIME_FORMAT) for row in rows],
        series_a=[row.value_a for row in rows],
        series_b=[row.value_b for row in rows],
        label_a=label_a,
        label_b=label_b,
    )


def format_status(snapshot: MonitorSnapshot | None, error: BaseException | None = None) -> str:
    """Single human-readable status line for the latest refresh."""
    if error is not None:
        return f"Update failed: {error}"
    if snapshot is None:
        return "Waiting for the first update..."
    if not snapshot.rows:
        return "No synchronized data to display."
    return f"Last update: {snapshot.fetched_at.astimezone(UTC).strftime(TABLE_TIME_FORMAT)} UTC"
