"""Configured aligner bound to a sample store."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from pygesbox.alignment.strategies import AlignmentStrategy, align
from pygesbox.exceptions import GesboxConfigError
from pygesbox.models.aligned import AlignedRow
from pygesbox.models.sample import SourceId

if TYPE_CHECKING:
    from pygesbox.config import GesboxConfig
    from pygesbox.store import SampleStore


@dataclasses.dataclass(frozen=True)
class Aligner:
    """Alignment settings applied to every refresh."""

    strategy: AlignmentStrategy = AlignmentStrategy.NEAREST_FORWARD
    tolerance_seconds: int = 10
    reference_source: SourceId = SourceId.A

    def __post_init__(self) -> None:
        if self.tolerance_seconds < 0:
            raise GesboxConfigError(f"tolerance_seconds must be >= 0, got {self.tolerance_seconds}")
        object.__setattr__(self, "strategy", AlignmentStrategy(self.strategy))
        object.__setattr__(self, "reference_source", SourceId(self.reference_source))

    @classmethod
    def from_config(cls, config: GesboxConfig) -> Aligner:
        return cls(
            strategy=config.strategy,
            tolerance_seconds=config.tolerance_seconds,
            reference_source=config.reference_source,
        )

    def align(self, store: SampleStore) -> list[AlignedRow]:
        return align(
            store.a,
            store.b,
            strategy=self.strategy,
            tolerance_seconds=self.tolerance_seconds,
            reference_source=self.reference_source,
        )
