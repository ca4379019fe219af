"""Collaborator protocols consumed by the document repository."""

from collections.abc import Sequence
from typing import Any, Protocol, Self, TypeVar, runtime_checkable

from docstore_dal.types.documents import Document, RunQueryResponse

T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)
Q_contra = TypeVar("Q_contra", contravariant=True)
Cred_contra = TypeVar("Cred_contra", contravariant=True)
Params_contra = TypeVar("Params_contra", contravariant=True)


@runtime_checkable
class Transport(Protocol):
    """Protocol for the network side of a document store.

    Absence is signalled with `NotFoundError`, create conflicts with
    `AlreadyExistsError`. Other failures surface as `DalError`.
    """

    async def get_document(self, name: str) -> Document:
        """Fetch a document by full resource name."""
        ...

    async def create_document(
        self,
        parent: str,
        collection_id: str,
        document_id: str,
        document: Document,
    ) -> Document:
        """Create a document; fails if the id is already taken."""
        ...

    async def patch_document(
        self,
        name: str,
        document: Document,
        *,
        exists: bool | None = None,
    ) -> Document:
        """Replace a document's fields.

        With `exists=True` the write only applies if the document exists.
        """
        ...

    async def delete_document(self, name: str) -> None:
        """Delete a document; deleting an absent document succeeds."""
        ...

    async def run_query(self, request: dict[str, Any], parent: str) -> Sequence[RunQueryResponse]:
        """Run a structured query under a parent resource."""
        ...


@runtime_checkable
class QueryBuilder(Protocol[Q_contra]):
    """Maps an abstract filter onto the transport's query request."""

    def build(self, query: Q_contra) -> dict[str, Any]: ...


@runtime_checkable
class IdGenerator(Protocol):
    """Source of fresh document ids."""

    def generate(self) -> str: ...


class ToWire(Protocol[T_contra]):
    """Converts an item (and its id, when known) into a wire document."""

    def __call__(self, item: T_contra, id: str | None, /) -> Document: ...  # noqa: A002


class FromWire(Protocol[T_co]):
    """Converts a wire document back into an item."""

    def __call__(self, document: Document, /) -> T_co: ...


@runtime_checkable
class Provider(Protocol[Cred_contra, Params_contra]):
    """Protocol for provider lifecycle management."""

    @classmethod
    async def connect(cls, credentials: Cred_contra, params: Params_contra) -> Self:
        """Establish connection to the document store."""
        ...

    async def disconnect(self) -> None:
        """Release resources and close connections."""
        ...
