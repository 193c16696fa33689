"""Live status summary model."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

# Percentages are compared after rounding so that e.g. 8/100 is not
# considered greater than an 8.0 % threshold because of float noise.
_PERCENT_DIGITS = 9


class Summary(BaseModel):
    """Latest reading per source and their relative discrepancy.

    Parameters
    ----------
    last_a : float or None
        Volume of the most recent source A sample.
    last_b : float or None
        Volume of the most recent source B sample.
    last_timestamp : int or None
        Most recent timestamp across both sources; ``None`` only when
        both sources are empty.
    discrepancy_ratio : float or None
        ``|last_a - last_b| / max(last_a, last_b)``; ``None`` when a source
        is empty or both latest values are zero.
    alert_threshold_percent : float
        Threshold the ratio is compared against.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    last_a: float | None = None
    last_b: float | None = None
    last_timestamp: int | None = None
    discrepancy_ratio: float | None = None
    alert_threshold_percent: float = Field(default=0.0, ge=0)

    @property
    def discrepancy_percent(self) -> float | None:
        if self.discrepancy_ratio is None:
            return None
        return round(self.discrepancy_ratio * 100, _PERCENT_DIGITS)

    @property
    def alert(self) -> bool:
        """Whether the discrepancy strictly exceeds the threshold."""
        percent = self.discrepancy_percent
        if percent is None:
            return False
        return percent > self.alert_threshold_percent

    @property
    def last_datetime_utc(self) -> datetime | None:
        if self.last_timestamp is None:
            return None
        return datetime.fromtimestamp(self.last_timestamp, tz=UTC)
