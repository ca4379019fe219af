"""Document repository over a REST document store."""

from docstore_dal.codec import decode_document, decode_value, encode_document, encode_value
from docstore_dal.errors import (
    AlreadyExistsError,
    DalError,
    ErrorKind,
    MalformedWireValue,
    NotFoundError,
    UnsupportedValueType,
)
from docstore_dal.protocols import IdGenerator, Provider, QueryBuilder, Transport
from docstore_dal.query import (
    AllQuery,
    CollectionQueryBuilder,
    FieldFilter,
    FieldOperator,
    WhereQuery,
)
from docstore_dal.repository import DocumentRepository, JsonDocumentRepository
from docstore_dal.types import Document, IdentifiedItem, RepositoryParams

__all__ = [
    "AllQuery",
    "AlreadyExistsError",
    "CollectionQueryBuilder",
    "DalError",
    "Document",
    "DocumentRepository",
    "ErrorKind",
    "FieldFilter",
    "FieldOperator",
    "IdGenerator",
    "IdentifiedItem",
    "JsonDocumentRepository",
    "MalformedWireValue",
    "NotFoundError",
    "Provider",
    "QueryBuilder",
    "RepositoryParams",
    "Transport",
    "UnsupportedValueType",
    "WhereQuery",
    "decode_document",
    "decode_value",
    "encode_document",
    "encode_value",
]
