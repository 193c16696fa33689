"""Monitor configuration for pygesbox."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pygesbox._constants import (
    DEFAULT_ALERT_THRESHOLD_PERCENT,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TOLERANCE_SECONDS,
    ENDPOINT_URL,
    SOURCE_A_ID,
    SOURCE_B_ID,
)
from pygesbox.alignment.strategies import AlignmentStrategy
from pygesbox.exceptions import GesboxConfigError
from pygesbox.models.sample import SourceId


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class FieldMapping:
    """Key names used by the data source for each raw sample.

    The volume field was renamed across data source revisions, so
    several candidate keys may be given; the first one present in a
    sample wins.
    """

    source_key: str = "gesBoxId"
    timestamp_key: str = "timestamp"
    volume_keys: tuple[str, ...] = ("volume", "volume_cumule")
    source_a: str = SOURCE_A_ID
    source_b: str = SOURCE_B_ID

    def __post_init__(self) -> None:
        if not self.volume_keys:
            raise GesboxConfigError("volume_keys must name at least one field")
        if self.source_a == self.source_b:
            raise GesboxConfigError(f"source ids must differ, both are {self.source_a!r}")

    def source_for(self, raw_id: Any) -> SourceId | None:
        """Map a raw source identifier to :class:`SourceId` (``None`` if unknown)."""
        if raw_id == self.source_a:
            return SourceId.A
        if raw_id == self.source_b:
            return SourceId.B
        return None


@dataclasses.dataclass(frozen=True)
class GesboxConfig:
    """Monitor configuration.

    Parameters
    ----------
    endpoint_url : str
        URL of the data source returning the JSON sample array.
    tolerance_seconds : int
        Maximum timestamp distance for two samples to be paired by the
        nearest-match strategies.
    alert_threshold_percent : float
        Discrepancy (in percent of the larger latest reading) above which
        the alert fires.
    poll_interval : float
        Seconds between two refresh cycles.
    fetch_timeout : float
        Total timeout in seconds for one fetch.  Expiry is reported as a
        network failure.
    strategy : AlignmentStrategy
        Alignment strategy used to build the synchronized rows.
    reference_source : SourceId
        Source that drives row cardinality for reference-based strategies.
    accumulate_deltas : bool
        Treat sample volumes as per-interval deltas and recompute the
        cumulative volume client-side.
    fields : FieldMapping
        Raw payload key names.
    """

    endpoint_url: str = ENDPOINT_URL
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS
    alert_threshold_percent: float = DEFAULT_ALERT_THRESHOLD_PERCENT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    strategy: AlignmentStrategy = AlignmentStrategy.NEAREST_FORWARD
    reference_source: SourceId = SourceId.A
    accumulate_deltas: bool = False
    fields: FieldMapping = dataclasses.field(default_factory=FieldMapping)

    def __post_init__(self) -> None:
        if not self.endpoint_url:
            raise GesboxConfigError("endpoint_url must be non-empty")
        if self.tolerance_seconds < 0:
            raise GesboxConfigError(f"tolerance_seconds must be >= 0, got {self.tolerance_seconds}")
        if self.alert_threshold_percent < 0:
            raise GesboxConfigError(f"alert_threshold_percent must be >= 0, got {self.alert_threshold_percent}")
        if self.poll_interval <= 0:
            raise GesboxConfigError(f"poll_interval must be > 0, got {self.poll_interval}")
        if self.fetch_timeout <= 0:
            raise GesboxConfigError(f"fetch_timeout must be > 0, got {self.fetch_timeout}")
        # Accept plain strings (env vars, CLI) for the enum fields.
        try:
            object.__setattr__(self, "strategy", AlignmentStrategy(self.strategy))
        except ValueError as exc:
            choices = ", ".join(s.value for s in AlignmentStrategy)
            raise GesboxConfigError(f"unknown strategy {self.strategy!r} (expected one of: {choices})") from exc
        try:
            object.__setattr__(self, "reference_source", SourceId(str(self.reference_source).upper()))
        except ValueError as exc:
            raise GesboxConfigError(f"reference_source must be 'A' or 'B', got {self.reference_source!r}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> GesboxConfig:
        """Create configuration from environment variables.

        Reads optional ``GESBOX_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        GesboxConfig
            Populated configuration.

        Raises
        ------
        GesboxConfigError
            If a numeric variable cannot be parsed or a value is invalid.
        """
        env = os.environ

        field_kwargs: dict[str, Any] = {}
        _ENV_FIELD_MAP = {
            "GESBOX_SOURCE_KEY": "source_key",
            "GESBOX_TIMESTAMP_KEY": "timestamp_key",
            "GESBOX_SOURCE_A": "source_a",
            "GESBOX_SOURCE_B": "source_b",
        }
        for env_key, field_name in _ENV_FIELD_MAP.items():
            val = env.get(env_key)
            if val is not None:
                field_kwargs[field_name] = val

        volume_env = env.get("GESBOX_VOLUME_KEY")
        if volume_env is not None:
            field_kwargs["volume_keys"] = tuple(key.strip() for key in volume_env.split(",") if key.strip())

        # Allow overriding mapping fields via a nested dict
        field_overrides = overrides.pop("fields", None)
        if isinstance(field_overrides, dict):
            field_kwargs.update(field_overrides)
        elif isinstance(field_overrides, FieldMapping):
            field_kwargs = dataclasses.asdict(field_overrides)

        fields = FieldMapping(**field_kwargs) if field_kwargs else FieldMapping()

        config_kwargs: dict[str, Any] = {"fields": fields}
        _ENV_CONFIG_MAP = {
            "GESBOX_ENDPOINT_URL": "endpoint_url",
            "GESBOX_STRATEGY": "strategy",
            "GESBOX_REFERENCE_SOURCE": "reference_source",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "GESBOX_TOLERANCE_SECONDS": ("tolerance_seconds", int),
            "GESBOX_ALERT_THRESHOLD_PERCENT": ("alert_threshold_percent", float),
            "GESBOX_POLL_INTERVAL": ("poll_interval", float),
            "GESBOX_FETCH_TIMEOUT": ("fetch_timeout", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = cast(val)
            except ValueError as exc:
                raise GesboxConfigError(f"{env_key} is not a valid {cast.__name__}: {val!r}") from exc

        if "accumulate_deltas" not in overrides:
            config_kwargs["accumulate_deltas"] = _env_bool(env.get("GESBOX_ACCUMULATE_DELTAS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
