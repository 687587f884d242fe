"""Custom exception classes for the AWS wrapper clients."""

from typing import Any

from awswrap.core.constants import (
    ERROR_CODE_CLOUDSEARCH,
    ERROR_CODE_CLOUDWATCH,
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_S3,
    ERROR_CODE_VALIDATION_FAILED,
)


class AWSWrapError(Exception):
    """
    Base exception for all wrapper errors.

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


class ConfigurationError(AWSWrapError):
    """Raised when client configuration cannot be resolved."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class ValidationError(AWSWrapError):
    """Raised when call arguments are rejected before reaching AWS."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class NotFoundError(AWSWrapError):
    """Raised when a requested AWS resource does not exist."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class S3Error(AWSWrapError):
    """Raised when an S3 operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_S3,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class CloudWatchError(AWSWrapError):
    """Raised when a CloudWatch operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CLOUDWATCH,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


class CloudSearchError(AWSWrapError):
    """Raised when a CloudSearch request fails or returns an error body."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CLOUDSEARCH,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)
