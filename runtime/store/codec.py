"""Persistence codec for store state.

Stores hold native ``datetime`` values in memory but persist a JSON string.
The codec walks the state and converts every field whose key is listed in
``date_fields``:

    encode: datetime -> "2023-04-15T00:00:00Z"
    decode: "2023-04-15T00:00:00Z" -> datetime (UTC)

All other values pass through unchanged. ``decode_state(encode_state(s))``
reproduces ``s`` with datetimes equal by instant.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from pydantic import TypeAdapter

from exceptions.exceptions import PersistedStateFormatException


_DATETIME = TypeAdapter(datetime)


def format_timestamp(value: datetime) -> str:
    """Return an ISO-8601 UTC timestamp with a 'Z' suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Raises
    ------
    pydantic.ValidationError
        If the string is not a valid ISO-8601 timestamp (a ValueError).
    """
    value = _DATETIME.validate_python(text)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _encode_value(key: Optional[str], value: Any, date_fields: frozenset) -> Any:
    if key in date_fields and isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, dict):
        return {k: _encode_value(k, v, date_fields) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_value(None, item, date_fields) for item in value]
    return value


def encode_state(state: Dict[str, Any], date_fields: Iterable[str] = ()) -> str:
    """Serialise a store state dict to its persisted string form."""
    fields = frozenset(date_fields)
    return json.dumps(_encode_value(None, state, fields), ensure_ascii=False)


def decode_state(
    blob: str,
    date_fields: Iterable[str] = (),
    storage_key: str = "<unknown>",
) -> Dict[str, Any]:
    """Parse a persisted string back into a store state dict.

    Raises
    ------
    PersistedStateFormatException
        If the blob is not JSON, is not an object at the top level, or a
        date field holds an unparseable timestamp.
    """
    fields = frozenset(date_fields)

    def _revive(obj: Dict[str, Any]) -> Dict[str, Any]:
        for key in fields.intersection(obj):
            value = obj[key]
            if isinstance(value, str):
                try:
                    obj[key] = parse_timestamp(value)
                except ValueError as e:
                    raise PersistedStateFormatException(
                        storage_key, f"Invalid timestamp in field {key!r}: {value!r}"
                    ) from e
        return obj

    try:
        state = json.loads(blob, object_hook=_revive)
    except json.JSONDecodeError as e:
        raise PersistedStateFormatException(storage_key, f"Invalid JSON: {e}") from e

    if not isinstance(state, dict):
        raise PersistedStateFormatException(
            storage_key,
            f"Expected a JSON object at the top level, got {type(state).__name__}",
        )
    return state
