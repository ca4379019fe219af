"""Firestore REST provider using httpx."""

import logging
import os
from collections.abc import Sequence
from types import TracebackType
from typing import Any, ClassVar, Self

import httpx
from pydantic import BaseModel, ValidationError

from docstore_dal.codec import parse_document
from docstore_dal.errors import (
    AlreadyExistsError,
    DalError,
    ErrorKind,
    MalformedWireValue,
    NotFoundError,
)
from docstore_dal.types.documents import Document, RunQueryResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://firestore.googleapis.com/v1"
EMULATOR_HOST_ENV = "FIRESTORE_EMULATOR_HOST"


class FirestoreCredentials(BaseModel, frozen=True):
    """Credentials for the Firestore REST API.

    Token acquisition and refresh happen outside this package.
    """

    access_token: str | None = None
    """OAuth 2.0 bearer token. None for the emulator."""

    @classmethod
    def emulator(cls) -> Self:
        return cls()


class FirestoreParams(BaseModel, frozen=True):
    """Parameters for the REST client."""

    base_url: str = DEFAULT_BASE_URL
    """API root, including the version segment."""

    timeout: float = 30.0
    """Per-request timeout in seconds."""

    @classmethod
    def from_env(cls, **overrides: Any) -> Self:
        """Point at the emulator when `FIRESTORE_EMULATOR_HOST` is set."""
        host = os.environ.get(EMULATOR_HOST_ENV)
        if host and "base_url" not in overrides:
            overrides["base_url"] = f"http://{host}/v1"
        return cls(**overrides)


class FirestoreProvider:
    """Document transport backed by the Firestore REST API.

    Implements Provider[FirestoreCredentials, FirestoreParams] and Transport.
    """

    __slots__: ClassVar[tuple[str, str]] = ("_client", "_params")

    _client: httpx.AsyncClient
    _params: FirestoreParams

    def __init__(self, client: httpx.AsyncClient, params: FirestoreParams) -> None:
        self._client = client
        self._params = params

    @classmethod
    async def connect(
        cls,
        credentials: FirestoreCredentials,
        params: FirestoreParams,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        """Create the HTTP client. No request is made until the first call."""
        headers = {"Accept": "application/json"}
        if credentials.access_token:
            headers["Authorization"] = f"Bearer {credentials.access_token}"
        client = httpx.AsyncClient(
            base_url=params.base_url.rstrip("/") + "/",
            headers=headers,
            timeout=params.timeout,
            transport=transport,
        )
        return cls(client, params)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    async def get_document(self, name: str) -> Document:
        response = await self._request("GET", name)
        return parse_document(response.json())

    async def create_document(
        self,
        parent: str,
        collection_id: str,
        document_id: str,
        document: Document,
    ) -> Document:
        response = await self._request(
            "POST",
            f"{parent}/{collection_id}",
            params={"documentId": document_id},
            json=document.model_copy(update={"name": None}).to_wire(),
            conflict_id=document_id,
        )
        return parse_document(response.json())

    async def patch_document(
        self,
        name: str,
        document: Document,
        *,
        exists: bool | None = None,
    ) -> Document:
        params: dict[str, str] = {}
        if exists is not None:
            params["currentDocument.exists"] = "true" if exists else "false"
        response = await self._request("PATCH", name, params=params, json=document.to_wire())
        return parse_document(response.json())

    async def delete_document(self, name: str) -> None:
        _ = await self._request("DELETE", name)

    async def run_query(self, request: dict[str, Any], parent: str) -> Sequence[RunQueryResponse]:
        response = await self._request("POST", f"{parent}:runQuery", json=request)
        payload = response.json()
        if not isinstance(payload, list):
            msg = "runQuery response is not a list"
            raise MalformedWireValue(msg)
        try:
            return [RunQueryResponse.model_validate(entry) for entry in payload]
        except ValidationError as e:
            msg = f"Malformed runQuery response: {e.error_count()} error(s)"
            raise MalformedWireValue(msg, source=e) from e

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        conflict_id: str | None = None,
    ) -> httpx.Response:
        """Send a request and map error statuses onto DalError subclasses."""
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.TimeoutException as e:
            msg = f"Request to Firestore timed out: {method} {path}"
            raise DalError(msg, kind=ErrorKind.TIMEOUT, source=e) from e
        except httpx.TransportError as e:
            msg = f"Failed to reach Firestore: {e}"
            raise DalError(msg, kind=ErrorKind.CONNECTION, source=e) from e

        try:
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == httpx.codes.NOT_FOUND:
                msg = f"Document '{path}' not found"
                raise NotFoundError(msg, source=e) from e
            if status == httpx.codes.CONFLICT and conflict_id is not None:
                raise AlreadyExistsError(conflict_id, source=e) from e
            if status == httpx.codes.PRECONDITION_FAILED and method == "PATCH":
                # failed `currentDocument.exists` precondition
                msg = f"Document '{path}' not found"
                raise NotFoundError(msg, source=e) from e
            detail = _error_message(e.response)
            msg = f"Firestore request failed: {method} {path} -> {status} {detail}"
            raise DalError(msg, source=e) from e

        return response


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and "message" in error:
            return str(error["message"])
    return response.text


Provider = FirestoreProvider
