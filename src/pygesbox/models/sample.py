"""Raw sample model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SourceId(StrEnum):
    """The two compared sensor sources."""

    A = "A"
    B = "B"

    @property
    def other(self) -> SourceId:
        return SourceId.B if self is SourceId.A else SourceId.A


class Sample(BaseModel):
    """One cumulative volume reading from a single source.

    Parameters
    ----------
    source_id : SourceId
        Source that produced the reading.
    timestamp : int
        Unix epoch seconds (UTC).
    volume : float
        Cumulative volume reported at ``timestamp``.  Expected to be
        non-decreasing within a source, but sensor resets are tolerated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_id: SourceId
    timestamp: int
    volume: float = Field(ge=0)
