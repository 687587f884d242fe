"""
Shared plumbing for the async service clients.

Adapters are mechanical and let botocore errors bubble up. The service
layer awaits the adapter call on the executor and translates
`ClientError` into the package's error hierarchy.
"""

from collections.abc import Callable
from concurrent.futures import Executor
from typing import Any, ClassVar, TypeVar

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from awswrap.core.constants import NOT_FOUND_ERROR_CODES
from awswrap.core.errors import AWSWrapError, NotFoundError
from awswrap.core.futures import wrap_async_method

logger = Logger(UTC=True)

T = TypeVar("T")


def error_code_of(exc: ClientError) -> str:
    """Return the AWS error code carried by a botocore ClientError."""
    return str(exc.response.get("Error", {}).get("Code", "Unknown"))


def translate_client_error(
    exc: ClientError,
    *,
    operation: str,
    service_error: type[AWSWrapError],
    details: dict[str, Any] | None = None,
) -> AWSWrapError:
    """Map a botocore ClientError onto NotFoundError or the service error."""
    code = error_code_of(exc)
    aws_message = exc.response.get("Error", {}).get("Message") or str(exc)
    context = {**(details or {}), "operation": operation, "aws_message": aws_message}

    if code in NOT_FOUND_ERROR_CODES:
        return NotFoundError(
            message=f"{operation}: resource not found",
            error_code=code,
            details=context,
        )

    return service_error(
        message=f"{operation} failed",
        error_code=code,
        details=context,
    )


class ServiceArea:
    """Base class for one area of an AWS service API (buckets, alarms, ...)."""

    service_error: ClassVar[type[AWSWrapError]] = AWSWrapError

    def __init__(self, adapter: Any, executor: Executor | None = None) -> None:
        self._adapter = adapter
        self._executor = executor

    async def _call(
        self,
        operation: str,
        method: Callable[..., T],
        /,
        *,
        details: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> T:
        """Await an adapter method and translate vendor failures."""
        logger.debug(f"Calling {operation}", extra={"operation": operation, **(details or {})})

        try:
            return await wrap_async_method(method, executor=self._executor, **kwargs)

        except ClientError as exc:
            error = translate_client_error(
                exc,
                operation=operation,
                service_error=self.service_error,
                details=details,
            )
            logger.error(
                f"{operation} failed",
                extra={"operation": operation, "error_code": error.error_code, **(details or {})},
            )
            raise error from exc

        except BotoCoreError as exc:
            logger.exception(f"Unexpected SDK error in {operation}")
            raise self.service_error(
                message=f"{operation} failed",
                details={**(details or {}), "operation": operation, "error": str(exc)},
            ) from exc
