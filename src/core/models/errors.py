"""Custom exception classes for the image handler.

Every failure of the request pipeline is one of the closed set of
``ImageHandlerError`` subclasses below. Each subclass fixes the HTTP status it
maps to, so callers can turn any of them into a response without inspecting
the concrete type.
"""

from http import HTTPStatus
from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_CANNOT_ACCESS_BUCKET,
    ERROR_CODE_CANNOT_DECODE_REQUEST,
    ERROR_CODE_CANNOT_FIND_BUCKET,
    ERROR_CODE_CANNOT_FIND_IMAGE,
    ERROR_CODE_NO_SOURCE_BUCKETS,
    ERROR_CODE_NO_SUCH_KEY,
    ERROR_CODE_STORAGE,
    ERROR_CODE_UNRECOGNIZED_REQUEST_TYPE,
)


class ImageHandlerError(Exception):
    """
    Base exception for all image handler errors.

    Subclasses set ``status`` and a default ``error_code``.
    Optional contextual information can be supplied via `details`;
    it is logged but never sent to the client.
    """

    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code: ClassVar[str] = ERROR_CODE_STORAGE

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation returned to the client."""
        return {
            "status": self.status.value,
            "code": self.error_code,
            "message": self.message,
        }


class ConfigurationError(ImageHandlerError):
    """Raised when the source bucket whitelist is not configured."""

    status = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_NO_SOURCE_BUCKETS


class UnrecognizedRequestTypeError(ImageHandlerError):
    """Raised when a request cannot be classified."""

    status = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_UNRECOGNIZED_REQUEST_TYPE


class AccessDeniedError(ImageHandlerError):
    """Raised when the requested bucket is not whitelisted."""

    status = HTTPStatus.FORBIDDEN
    default_error_code = ERROR_CODE_CANNOT_ACCESS_BUCKET


class BucketNotFoundError(ImageHandlerError):
    """Raised when no bucket can be resolved for the request type."""

    status = HTTPStatus.NOT_FOUND
    default_error_code = ERROR_CODE_CANNOT_FIND_BUCKET


class ImageNotFoundError(ImageHandlerError):
    """Raised when the request path does not name an object."""

    status = HTTPStatus.NOT_FOUND
    default_error_code = ERROR_CODE_CANNOT_FIND_IMAGE


class EditsParseError(ImageHandlerError):
    """Raised when the edits payload cannot be decoded."""

    status = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_CANNOT_DECODE_REQUEST


class NotFoundError(ImageHandlerError):
    """Raised when the storage object does not exist."""

    status = HTTPStatus.NOT_FOUND
    default_error_code = ERROR_CODE_NO_SUCH_KEY


class StorageError(ImageHandlerError):
    """Raised when any other storage operation fails."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code = ERROR_CODE_STORAGE
