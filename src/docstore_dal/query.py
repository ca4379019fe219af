"""Abstract query filters and the default `runQuery` request builder."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from docstore_dal.codec import encode_value


class FieldOperator(StrEnum):
    """Comparison operators understood by the store's field filters."""

    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    ARRAY_CONTAINS = "ARRAY_CONTAINS"
    IN = "IN"


class FieldFilter(BaseModel, frozen=True):
    """A single `field <op> value` condition. Dotted fields address nested maps."""

    field: str
    op: FieldOperator = FieldOperator.EQUAL
    value: Any = None


class AllQuery(BaseModel, frozen=True):
    """Every document of the collection."""

    limit: int | None = None


class WhereQuery(BaseModel, frozen=True):
    """Documents matching all of the given filters."""

    filters: tuple[FieldFilter, ...]
    limit: int | None = None


Query = AllQuery | WhereQuery


def _field_filter(condition: FieldFilter) -> dict[str, Any]:
    return {
        "fieldFilter": {
            "field": {"fieldPath": condition.field},
            "op": condition.op.value,
            "value": encode_value(condition.value).model_dump(mode="json", by_alias=True),
        }
    }


class CollectionQueryBuilder:
    """Builds `runQuery` bodies selecting from one collection id."""

    __slots__ = ("_collection_id",)

    def __init__(self, collection_id: str) -> None:
        self._collection_id = collection_id

    def build(self, query: Query) -> dict[str, Any]:
        structured: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}

        if isinstance(query, WhereQuery) and query.filters:
            if len(query.filters) == 1:
                structured["where"] = _field_filter(query.filters[0])
            else:
                structured["where"] = {
                    "compositeFilter": {
                        "op": "AND",
                        "filters": [_field_filter(f) for f in query.filters],
                    }
                }

        if query.limit is not None:
            structured["limit"] = query.limit

        return {"structuredQuery": structured}
