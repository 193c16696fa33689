"""Result of one complete refresh cycle."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pygesbox.models.aligned import AlignedRow
from pygesbox.models.presentation import ChartSeries, TableRow
from pygesbox.models.sample import SourceId
from pygesbox.models.summary import Summary


class MonitorSnapshot(BaseModel):
    """Everything published by a successful refresh.

    A snapshot is only ever replaced as a whole; a failed refresh never
    produces a partial one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rows: list[AlignedRow] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    table: list[TableRow] = Field(default_factory=list)
    chart: ChartSeries = Field(default_factory=ChartSeries)
    sample_counts: dict[SourceId, int] = Field(default_factory=dict)
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
