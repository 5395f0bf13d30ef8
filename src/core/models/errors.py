"""Custom exception classes for the image gateway."""

from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_OBJECT_READ_FAILED,
    ERROR_CODE_OBJECT_WRITE_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORE,
    ERROR_CODE_TRANSFORM_FAILED,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image gateway errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when an upload request is malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class AuthenticationError(ImageServiceError):
    """Raised when upload credentials are missing or wrong."""

    def __init__(
        self,
        *,
        message: str = "Unauthorized",
        error_code: str = ERROR_CODE_UNAUTHORIZED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(ImageServiceError):
    """Raised when no object exists for a key."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreError(ImageServiceError):
    """Raised when an object store operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ObjectWriteFailedError(StoreError):
    """Raised when writing an object to the store fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_OBJECT_WRITE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ObjectReadFailedError(StoreError):
    """Raised when reading an object from the store fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_OBJECT_READ_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class TransformError(ImageServiceError):
    """Raised when the transform engine cannot produce a variant.

    `status` is the HTTP status the failure is surfaced with.
    """

    status: HTTPStatus

    def __init__(
        self,
        *,
        message: str,
        status: HTTPStatus = HTTPStatus.BAD_GATEWAY,
        error_code: str = ERROR_CODE_TRANSFORM_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status = status
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(ImageServiceError):
    """Raised when required configuration is missing or invalid."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
