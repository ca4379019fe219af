"""In-process document transport.

Stores documents in a dict keyed by resource name and follows the same
contract as the REST provider: absent reads raise `NotFoundError`, duplicate
creates raise `AlreadyExistsError`, and `exists=True` patches refuse to
create. Queries select the direct children of a parent in one collection and
support field filters.
"""

import operator
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from types import TracebackType
from typing import Any, ClassVar, Self

from pydantic import BaseModel

from docstore_dal.codec import decode_fields, decode_value, parse_wire_value
from docstore_dal.errors import AlreadyExistsError, DalError, ErrorKind, NotFoundError
from docstore_dal.types.documents import Document, RunQueryResponse
from docstore_dal.types.values import OpenValue


class MemoryCredentials(BaseModel, frozen=True):
    """No credentials are needed for the in-process store."""


class MemoryParams(BaseModel, frozen=True):
    """Parameters for the in-process store."""


def _same_kind(left: object, right: object) -> bool:
    # booleans never match numbers, unlike Python's True == 1
    return isinstance(left, bool) is isinstance(right, bool)


def _equal(left: object, right: object) -> bool:
    return _same_kind(left, right) and left == right


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    return lambda field, value: _same_kind(field, value) and compare(field, value)


_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "EQUAL": _equal,
    "NOT_EQUAL": lambda field, value: not _equal(field, value),
    "LESS_THAN": _ordered(operator.lt),
    "LESS_THAN_OR_EQUAL": _ordered(operator.le),
    "GREATER_THAN": _ordered(operator.gt),
    "GREATER_THAN_OR_EQUAL": _ordered(operator.ge),
    "ARRAY_CONTAINS": lambda field, value: (
        isinstance(field, list) and any(_equal(item, value) for item in field)
    ),
    "IN": lambda field, value: (
        isinstance(value, list) and any(_equal(field, item) for item in value)
    ),
}

_MISSING = object()


def _now() -> str:
    return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _lookup(data: Mapping[str, OpenValue], field_path: str) -> object:
    current: object = data
    for part in field_path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _matches(data: Mapping[str, OpenValue], where: Mapping[str, Any] | None) -> bool:
    if not where:
        return True
    if "compositeFilter" in where:
        composite = where["compositeFilter"]
        if composite.get("op") != "AND":
            msg = f"Unsupported composite operator: {composite.get('op')}"
            raise DalError(msg, kind=ErrorKind.INVALID_INPUT)
        return all(_matches(data, f) for f in composite.get("filters", []))
    if "fieldFilter" in where:
        condition = where["fieldFilter"]
        compare = _COMPARATORS.get(condition["op"])
        if compare is None:
            msg = f"Unsupported field operator: {condition['op']}"
            raise DalError(msg, kind=ErrorKind.INVALID_INPUT)
        field = _lookup(data, condition["field"]["fieldPath"])
        if field is _MISSING:
            return False
        expected = decode_value(parse_wire_value(condition["value"]))
        try:
            return compare(field, expected)
        except TypeError:
            # values of different types never compare as ordered
            return False
    msg = f"Unsupported filter: {sorted(where)}"
    raise DalError(msg, kind=ErrorKind.INVALID_INPUT)


class MemoryProvider:
    """Document transport that keeps everything in memory.

    Implements Provider[MemoryCredentials, MemoryParams] and Transport.
    """

    __slots__: ClassVar[tuple[str]] = ("_documents",)

    _documents: dict[str, Document]

    def __init__(self) -> None:
        self._documents = {}

    @classmethod
    async def connect(
        cls,
        credentials: MemoryCredentials,  # noqa: ARG003
        params: MemoryParams,  # noqa: ARG003
    ) -> Self:
        return cls()

    async def disconnect(self) -> None:
        """Drop all stored documents."""
        self._documents.clear()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, name: object) -> bool:
        return name in self._documents

    async def get_document(self, name: str) -> Document:
        try:
            return self._documents[name].model_copy(deep=True)
        except KeyError as e:
            msg = f"Document '{name}' not found"
            raise NotFoundError(msg, source=e) from e

    async def create_document(
        self,
        parent: str,
        collection_id: str,
        document_id: str,
        document: Document,
    ) -> Document:
        name = f"{parent}/{collection_id}/{document_id}"
        if name in self._documents:
            raise AlreadyExistsError(document_id)
        now = _now()
        stored = document.model_copy(
            update={"name": name, "create_time": now, "update_time": now},
            deep=True,
        )
        self._documents[name] = stored
        return stored.model_copy(deep=True)

    async def patch_document(
        self,
        name: str,
        document: Document,
        *,
        exists: bool | None = None,
    ) -> Document:
        current = self._documents.get(name)
        if exists is True and current is None:
            msg = f"Document '{name}' not found"
            raise NotFoundError(msg)
        if exists is False and current is not None:
            msg = f"Document '{name}' already exists"
            raise DalError(msg, kind=ErrorKind.ALREADY_EXISTS)
        now = _now()
        stored = document.model_copy(
            update={
                "name": name,
                "create_time": current.create_time if current else now,
                "update_time": now,
            },
            deep=True,
        )
        self._documents[name] = stored
        return stored.model_copy(deep=True)

    async def delete_document(self, name: str) -> None:
        _ = self._documents.pop(name, None)

    async def run_query(self, request: dict[str, Any], parent: str) -> Sequence[RunQueryResponse]:
        structured = request.get("structuredQuery", {})
        collections = {selector["collectionId"] for selector in structured.get("from", [])}
        where = structured.get("where")
        limit = structured.get("limit")

        results: list[RunQueryResponse] = []
        for name, document in sorted(self._documents.items()):
            if limit is not None and len(results) >= limit:
                break
            head, _, _ = name.rpartition("/")
            owner, _, collection = head.rpartition("/")
            if owner != parent or collection not in collections:
                continue
            if not _matches(decode_fields(document.fields), where):
                continue
            results.append(
                RunQueryResponse(document=document.model_copy(deep=True), read_time=_now())
            )

        if not results:
            # the REST API answers an empty query with a single progress entry
            results.append(RunQueryResponse(read_time=_now()))
        return results


Provider = MemoryProvider
