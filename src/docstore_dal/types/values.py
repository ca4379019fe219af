"""Value types exchanged with the document store.

Two value models live here:
- `OpenValue`, the caller-facing dynamic value (plain Python objects)
- `WireValue`, the store's closed tagged union, one pydantic model per tag

Wire models serialize to the REST JSON shape (`stringValue`, `arrayValue`, ...)
with `model_dump(by_alias=True)`.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal, TypeAlias, Union

from pydantic import BaseModel, Discriminator, Field, Tag, field_validator

# Caller-facing value model. Containers are recursive, timestamps are datetimes.
OpenValue: TypeAlias = Union[  # noqa: UP007
    str,
    bool,
    int,
    float,
    datetime,
    None,
    list["OpenValue"],
    dict[str, "OpenValue"],
]

NULL_VALUE = "NULL_VALUE"


class _Tagged(BaseModel, frozen=True, populate_by_name=True):
    """Shared configuration for wire value variants."""

    TAG: ClassVar[str]


class NullValue(_Tagged, frozen=True):
    """Wire null."""

    TAG: ClassVar[str] = "nullValue"

    value: Literal["NULL_VALUE"] = Field(default=NULL_VALUE, alias="nullValue")

    @field_validator("value", mode="before")
    @classmethod
    def _accept_json_null(cls, value: object) -> object:
        return NULL_VALUE if value is None else value


class StringValue(_Tagged, frozen=True):
    """Wire string, passed through verbatim."""

    TAG: ClassVar[str] = "stringValue"

    value: str = Field(alias="stringValue")


class BooleanValue(_Tagged, frozen=True):
    """Wire boolean."""

    TAG: ClassVar[str] = "booleanValue"

    value: bool = Field(alias="booleanValue")


class IntegerValue(_Tagged, frozen=True):
    """Wire 64-bit integer, carried as a base-10 string."""

    TAG: ClassVar[str] = "integerValue"

    value: str = Field(alias="integerValue", pattern=r"^-?\d+$")

    @field_validator("value", mode="before")
    @classmethod
    def _accept_json_number(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class DoubleValue(_Tagged, frozen=True):
    """Wire 64-bit float."""

    TAG: ClassVar[str] = "doubleValue"

    value: float = Field(alias="doubleValue")


class TimestampValue(_Tagged, frozen=True):
    """Wire timestamp as an RFC 3339 string."""

    TAG: ClassVar[str] = "timestampValue"

    value: str = Field(alias="timestampValue")


class ArrayBody(BaseModel, frozen=True):
    """Payload of an array value. A missing `values` key is the empty array."""

    values: list["WireValue"] = Field(default_factory=list)


class MapBody(BaseModel, frozen=True):
    """Payload of a map value. A missing `fields` key is the empty map."""

    fields: dict[str, "WireValue"] = Field(default_factory=dict)


class ArrayValue(_Tagged, frozen=True):
    """Wire ordered sequence."""

    TAG: ClassVar[str] = "arrayValue"

    value: ArrayBody = Field(default_factory=ArrayBody, alias="arrayValue")


class MapValue(_Tagged, frozen=True):
    """Wire string-keyed map."""

    TAG: ClassVar[str] = "mapValue"

    value: MapBody = Field(default_factory=MapBody, alias="mapValue")


WIRE_VALUE_TYPES: tuple[type[_Tagged], ...] = (
    NullValue,
    StringValue,
    BooleanValue,
    IntegerValue,
    DoubleValue,
    TimestampValue,
    ArrayValue,
    MapValue,
)
WIRE_TAGS: frozenset[str] = frozenset(t.TAG for t in WIRE_VALUE_TYPES)


def wire_tag(value: Any) -> str | None:
    """Return the single populated tag of a raw or parsed wire value.

    Returns None for input with zero, several or unknown tags, which pydantic
    reports as a validation error.
    """
    if isinstance(value, _Tagged):
        return value.TAG
    if isinstance(value, dict) and len(value) == 1:
        (key,) = value
        if key in WIRE_TAGS:
            return key
    return None


WireValue = Annotated[
    Union[  # noqa: UP007
        Annotated[NullValue, Tag(NullValue.TAG)],
        Annotated[StringValue, Tag(StringValue.TAG)],
        Annotated[BooleanValue, Tag(BooleanValue.TAG)],
        Annotated[IntegerValue, Tag(IntegerValue.TAG)],
        Annotated[DoubleValue, Tag(DoubleValue.TAG)],
        Annotated[TimestampValue, Tag(TimestampValue.TAG)],
        Annotated[ArrayValue, Tag(ArrayValue.TAG)],
        Annotated[MapValue, Tag(MapValue.TAG)],
    ],
    Discriminator(wire_tag),
]

_ = ArrayBody.model_rebuild()
_ = MapBody.model_rebuild()
_ = ArrayValue.model_rebuild()
_ = MapValue.model_rebuild()
