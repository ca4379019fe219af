"""Item-level CRUD and queries over one collection of a document store."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterable
from typing import Generic, TypeVar

from docstore_dal.codec import decode_document, encode_document
from docstore_dal.errors import AlreadyExistsError, NotFoundError
from docstore_dal.ids import RandomIdGenerator
from docstore_dal.protocols import FromWire, IdGenerator, QueryBuilder, ToWire, Transport
from docstore_dal.query import AllQuery, CollectionQueryBuilder, Query
from docstore_dal.types.documents import Document, IdentifiedItem
from docstore_dal.types.params import RepositoryParams
from docstore_dal.types.values import OpenValue

logger = logging.getLogger(__name__)

T = TypeVar("T")

JsonObject = dict[str, OpenValue]


class DocumentRepository(Generic[T]):
    """Repository for items of type T stored as documents of one collection.

    Items are converted to and from wire documents by the injected converters.
    The repository does not own the transport; closing it is up to the caller.

    `update` is read-modify-write guarded only by an existence precondition:
    concurrent updates to the same id may overwrite each other.
    """

    __slots__ = (
        "_from_wire",
        "_id_generator",
        "_params",
        "_query_builder",
        "_to_wire",
        "_transport",
    )

    def __init__(
        self,
        transport: Transport,
        params: RepositoryParams,
        *,
        to_wire: ToWire[T],
        from_wire: FromWire[T],
        query_builder: QueryBuilder[Query] | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._transport = transport
        self._params = params
        self._to_wire = to_wire
        self._from_wire = from_wire
        self._query_builder = query_builder or CollectionQueryBuilder(params.collection_id)
        self._id_generator = id_generator or RandomIdGenerator()

    @property
    def path(self) -> str:
        return self._params.path

    @property
    def collection_id(self) -> str:
        return self._params.collection_id

    @property
    def collection_parent_path(self) -> str:
        return self._params.collection_parent_path

    @property
    def documents_path(self) -> str:
        return self._params.documents_path

    def resource_name(self, item_id: str) -> str:
        return self._params.resource_name(item_id)

    async def get(self, item_id: str) -> T:
        """Fetch one item by id."""
        try:
            document = await self._transport.get_document(self.resource_name(item_id))
        except NotFoundError as e:
            msg = f"Item with id {item_id} not found"
            raise NotFoundError(msg, source=e) from e
        return self._from_wire(document)

    async def add(self, item: IdentifiedItem[T]) -> T:
        """Create a document under the item's id; fails if the id is taken."""
        document = self._to_wire(item.item, item.id).model_copy(update={"name": None})
        try:
            created = await self._transport.create_document(
                self._params.parent_resource,
                self.collection_id,
                item.id,
                document,
            )
        except AlreadyExistsError as e:
            raise AlreadyExistsError(item.id, source=e) from e
        return self._from_wire(created)

    def auto_identify(
        self,
        item: T,
        update_object_with_id: Callable[[T, str], T] | None = None,
    ) -> IdentifiedItem[T]:
        """Pair an item with a freshly generated id. Performs no I/O."""
        item_id = self._id_generator.generate()
        if update_object_with_id is not None:
            item = update_object_with_id(item, item_id)
        return IdentifiedItem(item_id, item)

    async def add_auto_identified(
        self,
        item: T,
        update_object_with_id: Callable[[T, str], T] | None = None,
    ) -> T:
        return await self.add(self.auto_identify(item, update_object_with_id))

    async def update(self, item_id: str, updater: Callable[[T], T]) -> T:
        """Read the item, apply `updater` and write it back if it still exists."""
        existing = await self.get(item_id)
        updated = updater(existing)
        name = self.resource_name(item_id)
        document = self._to_wire(updated, item_id).model_copy(update={"name": name})
        try:
            patched = await self._transport.patch_document(name, document, exists=True)
        except NotFoundError as e:
            msg = f"Item with id {item_id} not found"
            raise NotFoundError(msg, source=e) from e
        return self._from_wire(patched)

    async def delete(self, item_id: str) -> None:
        await self._transport.delete_document(self.resource_name(item_id))

    async def query(self, query: Query | None = None) -> list[T]:
        """Run a query over the collection. Entries without a document are skipped."""
        request = self._query_builder.build(AllQuery() if query is None else query)
        responses = await self._transport.run_query(request, self._params.parent_resource)
        return [self._from_wire(r.document) for r in responses if r.document is not None]

    async def add_all(self, items: Iterable[IdentifiedItem[T]]) -> list[T]:
        return list(await asyncio.gather(*(self.add(item) for item in items)))

    async def update_all(self, items: Iterable[IdentifiedItem[T]]) -> list[T]:
        """Replace the stored value of each existing item."""
        return list(
            await asyncio.gather(
                *(self.update(entry.id, _replace_with(entry.item)) for entry in items)
            )
        )

    async def delete_all(self, ids: Iterable[str]) -> None:
        _ = await asyncio.gather(*(self.delete(item_id) for item_id in ids))

    async def stream(self, item_id: str) -> AsyncIterator[T]:
        """Yield the current item once; the REST API has no realtime listeners."""
        logger.warning("Streaming is not supported over REST; yielding a single snapshot")
        yield await self.get(item_id)

    async def stream_query(self, query: Query | None = None) -> AsyncIterator[list[T]]:
        """Yield the current query result once."""
        logger.warning("Streaming queries are not supported over REST; yielding a single result")
        yield await self.query(query)


def _replace_with(item: T) -> Callable[[T], T]:
    return lambda _existing: item


def _json_to_wire(item: JsonObject, item_id: str | None) -> Document:  # noqa: ARG001
    return encode_document(item)


class JsonDocumentRepository(DocumentRepository[JsonObject]):
    """Schema-less repository storing plain dicts through the value codec."""

    __slots__ = ()

    def __init__(
        self,
        transport: Transport,
        params: RepositoryParams,
        *,
        query_builder: QueryBuilder[Query] | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        super().__init__(
            transport,
            params,
            to_wire=_json_to_wire,
            from_wire=decode_document,
            query_builder=query_builder,
            id_generator=id_generator,
        )
