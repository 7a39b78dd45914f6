"""Tests for the persistence codec."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from exceptions.exceptions import PersistedStateFormatException
from runtime.store.codec import decode_state, encode_state, format_timestamp, parse_timestamp


class TestTimestamps:
    """Tests for the ISO-8601 helpers."""

    def test_format_uses_z_suffix(self):
        """UTC datetimes are written with a Z suffix."""
        value = datetime(2023, 4, 15, tzinfo=timezone.utc)

        assert format_timestamp(value) == "2023-04-15T00:00:00Z"

    def test_format_converts_offsets_to_utc(self):
        """Offset datetimes are converted to UTC before formatting."""
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2023, 4, 15, 2, 0, tzinfo=plus_two)

        assert format_timestamp(value) == "2023-04-15T00:00:00Z"

    def test_format_treats_naive_as_utc(self):
        """Naive datetimes are assumed to be UTC."""
        assert format_timestamp(datetime(2023, 4, 15, 12, 0)) == "2023-04-15T12:00:00Z"

    def test_parse_z_suffix(self):
        """Z-suffixed strings parse to aware UTC datetimes."""
        value = parse_timestamp("2023-04-15T00:00:00.000Z")

        assert value == datetime(2023, 4, 15, tzinfo=timezone.utc)
        assert value.tzinfo is not None

    def test_parse_offset_converted_to_utc(self):
        value = parse_timestamp("2023-04-15T02:00:00+02:00")

        assert value == datetime(2023, 4, 15, tzinfo=timezone.utc)
        assert value.utcoffset() == timedelta(0)

    def test_parse_invalid(self):
        """Garbage strings raise ValueError."""
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestEncodeDecode:
    """Tests for encode_state / decode_state."""

    def test_only_date_fields_are_converted(self):
        """Date fields become strings, other fields pass through."""
        when = datetime(2023, 5, 1, tzinfo=timezone.utc)
        state = {"plants": [{"id": "1", "plantedDate": when, "name": "Basil"}]}

        blob = encode_state(state, ("plantedDate",))
        raw = json.loads(blob)

        assert raw["plants"][0]["plantedDate"] == "2023-05-01T00:00:00Z"
        assert raw["plants"][0]["name"] == "Basil"

    def test_string_in_non_date_field_stays_string(self):
        """Only listed keys are revived as datetimes."""
        blob = '{"plants": [{"notes": "2023-05-01T00:00:00Z"}]}'

        state = decode_state(blob, ("plantedDate",))

        assert state["plants"][0]["notes"] == "2023-05-01T00:00:00Z"

    def test_round_trip_equal_by_instant(self):
        """decode(encode(s)) reproduces s, comparing datetimes by instant."""
        plus_five = timezone(timedelta(hours=5))
        state = {
            "activities": [
                {"id": "1", "date": datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=plus_five)},
                {"id": "2", "date": datetime(2024, 2, 1, tzinfo=timezone.utc), "notes": None},
            ],
            "version": 0,
        }

        decoded = decode_state(encode_state(state, ("date",)), ("date",))

        assert decoded == state

    def test_invalid_json(self):
        """Unparseable blobs raise PersistedStateFormatException."""
        with pytest.raises(PersistedStateFormatException) as exc_info:
            decode_state("{not json", storage_key="garden-plants-storage")

        assert exc_info.value.storage_key == "garden-plants-storage"

    def test_top_level_must_be_object(self):
        """A JSON array at the top level is rejected."""
        with pytest.raises(PersistedStateFormatException):
            decode_state("[1, 2, 3]")

    def test_invalid_timestamp(self):
        """A date field holding a non-timestamp string is rejected."""
        with pytest.raises(PersistedStateFormatException):
            decode_state('{"activities": [{"date": "soon"}]}', ("date",))
