"""Document-level types: wire documents, query results and identified items."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from docstore_dal.types.values import WireValue

T = TypeVar("T")


class Document(BaseModel, populate_by_name=True):
    """A named bag of top-level wire fields.

    `name` is the full resource name; it is unset on documents that are about
    to be created, since the store assigns it from the parent and document id.
    """

    name: str | None = None
    """Full resource name of the document."""

    fields: dict[str, WireValue] = Field(default_factory=dict)
    """Top-level fields keyed by field name."""

    create_time: str | None = Field(default=None, alias="createTime")
    """Server-assigned creation time (output only)."""

    update_time: str | None = Field(default=None, alias="updateTime")
    """Server-assigned last update time (output only)."""

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the REST request body, dropping output-only fields."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"create_time", "update_time"},
        )


class RunQueryResponse(BaseModel, populate_by_name=True):
    """One entry of a `runQuery` response stream.

    Entries that only report progress carry no document.
    """

    document: Document | None = None
    read_time: str | None = Field(default=None, alias="readTime")
    skipped_results: int | None = Field(default=None, alias="skippedResults")


@dataclass(frozen=True, slots=True)
class IdentifiedItem(Generic[T]):
    """An item paired with the document id it is stored under."""

    id: str
    item: T
