"""Raw payload to :class:`Sample` conversion."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pygesbox.config import FieldMapping
from pygesbox.exceptions import GesboxMalformedDataError
from pygesbox.ingestion.normalize import normalize_timestamp_seconds, safe_float, safe_str
from pygesbox.models.sample import Sample

_logger = logging.getLogger(__name__)


def decode_payload(text: str) -> list[Any]:
    """Decode the data source body into a list of raw sample objects."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GesboxMalformedDataError(f"Invalid JSON from data source: {text[:200]}") from exc
    if not isinstance(payload, list):
        raise GesboxMalformedDataError(f"Expected a JSON array of samples, got {type(payload).__name__}")
    return payload


def _volume_value(item: Mapping[str, Any], mapping: FieldMapping) -> tuple[str, Any] | None:
    for key in mapping.volume_keys:
        if key in item:
            return key, item[key]
    return None


def parse_samples(payload: Any, mapping: FieldMapping | None = None) -> list[Sample]:
    """Validate raw sample objects and tag them with their source.

    Samples whose source identifier is missing or unknown are dropped.
    Samples from a known source must carry a usable timestamp and volume.

    Parameters
    ----------
    payload : list
        Decoded JSON array from the data source.
    mapping : FieldMapping or None
        Raw key names. Defaults to :class:`FieldMapping`.

    Returns
    -------
    list[Sample]
        Samples in arrival order.

    Raises
    ------
    GesboxMalformedDataError
        If the payload is not a list or a known-source sample lacks a
        timestamp or a non-negative volume.
    """
    if mapping is None:
        mapping = FieldMapping()
    if not isinstance(payload, list):
        raise GesboxMalformedDataError(f"Expected a list of samples, got {type(payload).__name__}")

    samples: list[Sample] = []
    dropped = 0
    for index, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise GesboxMalformedDataError(
                f"Sample #{index} is not an object: {item!r:.100}",
                index=index,
            )

        source = mapping.source_for(safe_str(item.get(mapping.source_key)))
        if source is None:
            dropped += 1
            _logger.debug("Dropping sample #%d with source %r", index, item.get(mapping.source_key))
            continue

        timestamp = normalize_timestamp_seconds(item.get(mapping.timestamp_key))
        if timestamp is None:
            raise GesboxMalformedDataError(
                f"Sample #{index} has no usable '{mapping.timestamp_key}': {item.get(mapping.timestamp_key)!r}",
                index=index,
            )

        found = _volume_value(item, mapping)
        if found is None:
            raise GesboxMalformedDataError(
                f"Sample #{index} has none of the volume fields {list(mapping.volume_keys)}",
                index=index,
            )
        volume_key, raw_volume = found
        volume = safe_float(raw_volume)
        if volume is None or volume < 0:
            raise GesboxMalformedDataError(
                f"Sample #{index} has an invalid '{volume_key}': {raw_volume!r}",
                index=index,
            )

        samples.append(Sample(source_id=source, timestamp=timestamp, volume=volume))

    if dropped:
        _logger.debug("Dropped %d sample(s) with unknown source", dropped)
    return samples
