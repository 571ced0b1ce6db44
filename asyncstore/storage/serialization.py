"""JSON serialization for stored values.

Every value is held as canonical JSON text. Encoding is strict and raises
:class:`SerializationError`; decoding is fallible and reports failure through a
:class:`Decoded` result so that readers can fall back to the raw text.
"""

import math
from typing import Any

import msgspec

from .exceptions import SerializationError

_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder()


class Decoded(msgspec.Struct, frozen=True):
    """Outcome of decoding one stored value."""

    ok: bool
    value: Any


def _check_json_value(key: str, value: Any, active: set[int]) -> None:
    """Reject anything outside the JSON data model.

    The encoder also accepts types such as bytes, sets and datetimes, but they
    read back as different values.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(key, f"non-finite float {value!r}")
        return
    if isinstance(value, (list, tuple, dict)):
        if id(value) in active:
            raise SerializationError(key, "circular reference")
        active.add(id(value))
        if isinstance(value, dict):
            for k, v in value.items():
                if not isinstance(k, str):
                    raise SerializationError(
                        key, f"object keys must be strings, got {type(k).__name__}"
                    )
                _check_json_value(key, v, active)
        else:
            for item in value:
                _check_json_value(key, item, active)
        active.discard(id(value))
        return
    raise SerializationError(key, f"unsupported type {type(value).__name__}")


def encode(key: str, value: Any) -> str:
    """Serialize ``value`` to JSON text.

    Raises:
        SerializationError: If the value is not plain JSON data (None, bool,
            int, finite float, str, list, tuple, str-keyed dict) or contains
            cycles.
    """
    try:
        _check_json_value(key, value, set())
    except RecursionError as e:
        raise SerializationError(key, "value is nested too deeply") from e

    try:
        return _encoder.encode(value).decode("utf-8")
    except (TypeError, OverflowError, msgspec.EncodeError, RecursionError) as e:
        raise SerializationError(key, str(e)) from e


def try_decode(raw: Any) -> Decoded:
    """Decode stored JSON text, returning the raw value when it does not parse."""
    if not isinstance(raw, str):
        return Decoded(ok=False, value=raw)
    try:
        return Decoded(ok=True, value=_decoder.decode(raw))
    except msgspec.DecodeError:
        return Decoded(ok=False, value=raw)


def decode_lenient(raw: Any) -> Any:
    """Return the decoded value, or ``raw`` unchanged if it cannot be parsed."""
    return try_decode(raw).value
