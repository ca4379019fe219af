"""Types flowing through the codec, repository and providers."""

from docstore_dal.types.documents import Document, IdentifiedItem, RunQueryResponse
from docstore_dal.types.params import RepositoryParams
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

__all__ = [
    # Values
    "ArrayBody",
    "ArrayValue",
    "BooleanValue",
    "DoubleValue",
    "IntegerValue",
    "MapBody",
    "MapValue",
    "NullValue",
    "OpenValue",
    "StringValue",
    "TimestampValue",
    "WireValue",
    # Documents
    "Document",
    "IdentifiedItem",
    "RunQueryResponse",
    # Configuration
    "RepositoryParams",
]
