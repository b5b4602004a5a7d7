"""Application errors, their HTTP status mapping and request-input parsing."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any, Mapping
from uuid import UUID

logger = logging.getLogger(__name__)


def _debug_str(text: str) -> str:
    """Quote a string the way a debug formatter does: in double quotes, escaped."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


class AppError(Exception):
    """Base class for errors that turn into an HTTP response."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def to_response(self) -> tuple[int, str]:
        """Return the HTTP status code and message text for this error."""
        logger.debug("%r", self)
        return int(self.status), str(self)


class JsonBodyError(AppError):
    """The request body could not be read as the expected JSON."""

    status = HTTPStatus.BAD_REQUEST


class ValidationErrors(AppError):
    """One or more fields failed validation."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self) -> None:
        super().__init__()
        self.errors: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> "ValidationErrors":
        """Record a failure message for a field."""
        self.errors.setdefault(field, []).append(message)
        return self

    def __str__(self) -> str:
        return "\n".join(
            f"{field}: {', '.join(messages)}" for field, messages in self.errors.items()
        )


class DatabaseError(AppError):
    """A storage operation failed."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR


class NotFoundError(DatabaseError):
    """The requested record does not exist."""

    status = HTTPStatus.NOT_FOUND

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class QueryBuilderError(DatabaseError):
    """A query could not be built, e.g. an update with nothing to change."""

    status = HTTPStatus.OK

    def __init__(
        self, message: str = "There are no changes to save. This query cannot be built"
    ) -> None:
        super().__init__(message)


class ForeignKeyViolationError(DatabaseError):
    """A write referenced, or removed, a row that another row depends on."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY


class BodyMiddlewareError(AppError):
    """A request or response body could not be buffered."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, direction: str, body: str) -> None:
        super().__init__(
            f"failed to read {_debug_str(direction)} body: {_debug_str(body)}"
        )
        self.direction = direction
        self.body = body


class OtherError(AppError):
    """Any other failure."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR


def wrap_other(err: BaseException) -> OtherError:
    """Wrap an arbitrary exception as an OtherError, keeping it as the cause."""
    wrapped = OtherError(str(err))
    wrapped.__cause__ = err
    return wrapped


class PathError(Exception):
    """A path parameter could not be extracted."""

    def __init__(
        self,
        message: str,
        location: str | None = None,
        status: HTTPStatus = HTTPStatus.BAD_REQUEST,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = location
        self.status = status

    def to_response(self) -> tuple[int, dict[str, Any]]:
        """Return the HTTP status code and JSON body for this error."""
        return int(self.status), {"message": self.message, "location": self.location}


def parse_json_body(body: bytes | str) -> Any:
    """Parse a request body as JSON, raising JsonBodyError on failure."""
    try:
        text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise JsonBodyError(
            f"Failed to parse the request body as JSON: {exc}"
        ) from exc


def parse_uuid_path(params: Mapping[str, str], key: str) -> UUID:
    """Read a UUID path parameter, raising PathError on failure."""
    if key not in params:
        raise PathError(
            "No paths parameters found for matched route",
            None,
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
    value = params[key]
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise PathError(
            f"Cannot parse `{key}` with value `{_debug_str(str(value))}` to a `Uuid`",
            key,
        ) from exc