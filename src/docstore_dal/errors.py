"""Error types for codec, repository and provider operations."""

from enum import StrEnum
from typing import final


class ErrorKind(StrEnum):
    """Classification of repository errors."""

    CONNECTION = "connection"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_INPUT = "invalid_input"
    MALFORMED = "malformed"
    TIMEOUT = "timeout"
    PROVIDER = "provider"


class DalError(Exception):
    """Base error for all document repository operations."""

    __slots__ = ("kind", "message", "source")

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.PROVIDER,
        source: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.source = source

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind!r})"


@final
class UnsupportedValueType(DalError):
    """A value outside the open value model was handed to the encoder."""

    __slots__ = ("value_type",)

    def __init__(self, value_type: type) -> None:
        super().__init__(
            f"Unsupported value type: {value_type.__name__}",
            kind=ErrorKind.INVALID_INPUT,
        )
        self.value_type = value_type


@final
class MalformedWireValue(DalError):
    """A wire value with zero or several populated tags."""

    def __init__(self, message: str, source: BaseException | None = None) -> None:
        super().__init__(message, kind=ErrorKind.MALFORMED, source=source)


@final
class NotFoundError(DalError):
    """The addressed document does not exist."""

    def __init__(self, message: str, source: BaseException | None = None) -> None:
        super().__init__(message, kind=ErrorKind.NOT_FOUND, source=source)


@final
class AlreadyExistsError(DalError):
    """A document with the requested id already exists."""

    __slots__ = ("item_id",)

    def __init__(self, item_id: str, source: BaseException | None = None) -> None:
        super().__init__(
            f"Item with id {item_id} already exists",
            kind=ErrorKind.ALREADY_EXISTS,
            source=source,
        )
        self.item_id = item_id
