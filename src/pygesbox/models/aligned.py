"""Aligned row model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pygesbox.models.sample import SourceId


class AlignedRow(BaseModel):
    """One row of the synchronized timeline.

    ``None`` means "no reading available" and is distinct from a
    reading of ``0.0``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: int
    value_a: float | None = None
    value_b: float | None = None

    def value(self, source: SourceId) -> float | None:
        return self.value_a if source is SourceId.A else self.value_b

    @property
    def is_paired(self) -> bool:
        """Whether both sources have a value on this row."""
        return self.value_a is not None and self.value_b is not None
