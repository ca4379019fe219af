"""Translation between open values and wire values.

`encode_value` and `decode_value` are inverse over the open value model:
`decode_value(encode_value(v)) == v` for every supported `v`, with empty lists
and empty dicts kept as empty containers rather than collapsed to None.

Timestamps are canonicalized to UTC and decode as timezone-aware datetimes.
Naive datetimes are encoded as if they were UTC, so they fall outside the
round-trip law: `decode_value(encode_value(naive))` is the aware UTC equivalent
and does not compare equal to the naive input.
"""

import math
import re
from collections.abc import Mapping
from datetime import UTC, datetime

from pydantic import TypeAdapter, ValidationError

from docstore_dal.errors import DalError, ErrorKind, MalformedWireValue, UnsupportedValueType
from docstore_dal.types.documents import Document
from docstore_dal.types.values import (
    ArrayBody,
    ArrayValue,
    BooleanValue,
    DoubleValue,
    IntegerValue,
    MapBody,
    MapValue,
    NullValue,
    OpenValue,
    StringValue,
    TimestampValue,
    WireValue,
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_WIRE_VALUE_ADAPTER: TypeAdapter[WireValue] = TypeAdapter(WireValue)

_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})$"
)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as a UTC RFC 3339 string with microseconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    try:
        utc = value.astimezone(UTC).replace(tzinfo=None)
    except (OverflowError, ValueError) as e:
        msg = f"Timestamp out of range in UTC: {value!r}"
        raise DalError(msg, kind=ErrorKind.INVALID_INPUT, source=e) from e
    return f"{utc.isoformat(timespec='microseconds')}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    The store reports up to nanosecond precision; digits past microseconds
    are truncated.
    """
    match = _TIMESTAMP_RE.match(text)
    if match is None:
        msg = f"Invalid timestamp value: {text!r}"
        raise MalformedWireValue(msg)
    fraction = (match["fraction"] or "0")[:6].ljust(6, "0")
    offset = "+00:00" if match["offset"] == "Z" else match["offset"]
    try:
        parsed = datetime.fromisoformat(f"{match['base']}.{fraction}{offset}")
    except ValueError as e:
        msg = f"Invalid timestamp value: {text!r}"
        raise MalformedWireValue(msg, source=e) from e
    return parsed.astimezone(UTC)


def encode_value(value: object) -> WireValue:
    """Encode an open value into its wire representation.

    Raises `UnsupportedValueType` on the first value outside the open value
    model; nothing partial is returned.
    """
    if value is None:
        return NullValue()
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return BooleanValue(value=value)
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            msg = f"Integer out of 64-bit range: {value}"
            raise DalError(msg, kind=ErrorKind.INVALID_INPUT)
        return IntegerValue(value=str(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"Non-finite float is not representable: {value}"
            raise DalError(msg, kind=ErrorKind.INVALID_INPUT)
        return DoubleValue(value=value)
    if isinstance(value, str):
        return StringValue(value=value)
    if isinstance(value, datetime):
        return TimestampValue(value=format_timestamp(value))
    if isinstance(value, list | tuple):
        return ArrayValue(value=ArrayBody(values=[encode_value(v) for v in value]))
    if isinstance(value, Mapping):
        return MapValue(value=MapBody(fields=encode_fields(value)))
    raise UnsupportedValueType(type(value))


def encode_fields(data: Mapping[str, object]) -> dict[str, WireValue]:
    fields: dict[str, WireValue] = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise UnsupportedValueType(type(key))
        fields[key] = encode_value(value)
    return fields


def decode_value(value: WireValue) -> OpenValue:
    """Decode a wire value back into an open value."""
    match value:
        case NullValue():
            return None
        case StringValue(value=text):
            return text
        case BooleanValue(value=flag):
            return flag
        case IntegerValue(value=digits):
            return int(digits)
        case DoubleValue(value=number):
            return number
        case TimestampValue(value=text):
            return parse_timestamp(text)
        case ArrayValue(value=body):
            return [decode_value(v) for v in body.values]
        case MapValue(value=body):
            return decode_fields(body.fields)
        case _:
            msg = f"Not a wire value: {type(value).__name__}"
            raise MalformedWireValue(msg)


def decode_fields(fields: Mapping[str, WireValue]) -> dict[str, OpenValue]:
    return {key: decode_value(value) for key, value in fields.items()}


def encode_document(data: Mapping[str, object], name: str | None = None) -> Document:
    """Build a fresh wire document from a top-level mapping."""
    return Document(name=name, fields=encode_fields(data))


def decode_document(document: Document) -> dict[str, OpenValue]:
    """Decode a wire document's fields into a plain dict."""
    return decode_fields(document.fields)


def parse_wire_value(raw: object) -> WireValue:
    """Validate a raw REST JSON value (e.g. `{"stringValue": "x"}`).

    Raises `MalformedWireValue` when the input does not carry exactly one
    known tag or the tag's payload is invalid.
    """
    try:
        return _WIRE_VALUE_ADAPTER.validate_python(raw)
    except ValidationError as e:
        msg = f"Malformed wire value: {e.error_count()} error(s)"
        raise MalformedWireValue(msg, source=e) from e


def parse_document(raw: object) -> Document:
    """Validate a raw REST JSON document."""
    try:
        return Document.model_validate(raw)
    except ValidationError as e:
        msg = f"Malformed document: {e.error_count()} error(s)"
        raise MalformedWireValue(msg, source=e) from e
