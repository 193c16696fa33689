"""Display-ready models built from aligned rows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TableRow(BaseModel):
    """One line of the synchronized volume table.

    Parameters
    ----------
    timestamp : int
        Row timestamp (Unix seconds).
    time_label : str
        ``timestamp`` formatted as ``YYYY-MM-DD HH:MM:SS`` in UTC.
    value_a : float or None
        Source A volume.
    value_b : float or None
        Source B volume.
    difference : float or None
        ``value_a - value_b`` when both are present.
    difference_percent : float or None
        ``difference`` relative to ``value_a``, in percent, when
        ``value_a`` is positive and ``value_b`` is present.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: int
    time_label: str
    value_a: float | None = None
    value_b: float | None = None
    difference: float | None = None
    difference_percent: float | None = None


class ChartSeries(BaseModel):
    """Line chart data: one label per row and one point list per source.

    Missing readings stay ``None`` so the chart shows a gap instead of
    a drop to zero.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    labels: list[str] = Field(default_factory=list)
    series_a: list[float | None] = Field(default_factory=list)
    series_b: list[float | None] = Field(default_factory=list)
    label_a: str = "A"
    label_b: str = "B"
