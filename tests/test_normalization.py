from __future__ import annotations

import pytest

from pygesbox.config import FieldMapping
from pygesbox.exceptions import GesboxMalformedDataError
from pygesbox.ingestion.normalize import normalize_timestamp_seconds, safe_float, safe_str
from pygesbox.ingestion.samples import decode_payload, parse_samples
from pygesbox.models.sample import SourceId


def test_safe_float_handles_placeholders_and_decimal_comma() -> None:
    assert safe_float("12,5") == 12.5
    assert safe_float(" 3.25 ") == 3.25
    assert safe_float("") is None
    assert safe_float(None) is None
    assert safe_float("abc") is None
    assert safe_float(float("nan")) is None
    assert safe_float(True) is None


def test_safe_str_strips_and_drops_empty() -> None:
    assert safe_str(" GesBox1 ") == "GesBox1"
    assert safe_str("   ") is None
    assert safe_str(None) is None


def test_timestamp_milliseconds_normalized_to_seconds() -> None:
    assert normalize_timestamp_seconds(1_770_928_447_000) == 1_770_928_447
    assert normalize_timestamp_seconds("1770928447") == 1_770_928_447
    assert normalize_timestamp_seconds(1_770_928_447.9) == 1_770_928_447
    assert normalize_timestamp_seconds(-5) is None
    assert normalize_timestamp_seconds(None) is None


def test_timestamp_beyond_datetime_range_rejected() -> None:
    assert normalize_timestamp_seconds(253_402_300_799_000) == 253_402_300_799
    assert normalize_timestamp_seconds(253_402_300_800_000) is None
    assert normalize_timestamp_seconds(1e15) is None
    assert normalize_timestamp_seconds(1e300) is None


def test_parse_samples_out_of_range_timestamp_is_malformed() -> None:
    with pytest.raises(GesboxMalformedDataError, match="timestamp"):
        parse_samples([{"gesBoxId": "GesBox1", "timestamp": 1e15, "volume": 1.0}])


def test_decode_payload_requires_json_array() -> None:
    assert decode_payload("[]") == []
    with pytest.raises(GesboxMalformedDataError, match="Invalid JSON"):
        decode_payload("<html>error</html>")
    with pytest.raises(GesboxMalformedDataError, match="JSON array"):
        decode_payload('{"error": "quota"}')


def test_parse_samples_maps_sources_and_drops_unknown() -> None:
    payload = [
        {"gesBoxId": "GesBox1", "timestamp": 100, "volume": 5.0},
        {"gesBoxId": "GesBox2", "timestamp": 105, "volume": "5.1"},
        {"gesBoxId": "GesBox3", "timestamp": 106, "volume": 9.9},
        {"timestamp": 107, "volume": 1.0},
    ]

    samples = parse_samples(payload)

    assert [(s.source_id, s.timestamp, s.volume) for s in samples] == [
        (SourceId.A, 100, 5.0),
        (SourceId.B, 105, 5.1),
    ]


def test_parse_samples_accepts_renamed_volume_field() -> None:
    samples = parse_samples([{"gesBoxId": "GesBox1", "timestamp": 100, "volume_cumule": 42.0}])

    assert samples[0].volume == 42.0


def test_parse_samples_custom_mapping() -> None:
    mapping = FieldMapping(
        source_key="box",
        timestamp_key="ts",
        volume_keys=("liters",),
        source_a="north",
        source_b="south",
    )

    samples = parse_samples(
        [
            {"box": "south", "ts": 10, "liters": 1.5},
            {"box": "north", "ts": 11, "liters": 2.5},
            {"box": "GesBox1", "ts": 12, "liters": 3.5},
        ],
        mapping,
    )

    assert [s.source_id for s in samples] == [SourceId.B, SourceId.A]


def test_parse_samples_missing_timestamp_is_malformed() -> None:
    with pytest.raises(GesboxMalformedDataError, match="timestamp") as excinfo:
        parse_samples([{"gesBoxId": "GesBox1", "volume": 1.0}])

    assert excinfo.value.index == 0


def test_parse_samples_missing_volume_is_malformed() -> None:
    with pytest.raises(GesboxMalformedDataError, match="volume"):
        parse_samples([{"gesBoxId": "GesBox2", "timestamp": 1}])


def test_parse_samples_negative_volume_is_malformed() -> None:
    with pytest.raises(GesboxMalformedDataError, match="invalid 'volume'"):
        parse_samples([{"gesBoxId": "GesBox2", "timestamp": 1, "volume": -3}])


def test_parse_samples_rejects_non_list_and_non_object_items() -> None:
    with pytest.raises(GesboxMalformedDataError):
        parse_samples({"gesBoxId": "GesBox1"})
    with pytest.raises(GesboxMalformedDataError, match="not an object"):
        parse_samples(["GesBox1"])


def test_parse_samples_empty_payload() -> None:
    assert parse_samples([]) == []
