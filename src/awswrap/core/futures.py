"""
Bridge blocking SDK calls onto the running event loop.

boto3 and requests are synchronous; every wrapper operation runs its
vendor call on an executor and hands the completion back to the awaiting
coroutine. Exceptions from the call propagate unchanged.
"""

import asyncio
import functools
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, TypeVar

from awswrap.core.config import AWSSettings

T = TypeVar("T")


async def wrap_async_method(
    method: Callable[..., T],
    /,
    *,
    executor: Executor | None = None,
    **kwargs: Any,
) -> T:
    """Run `method(**kwargs)` on `executor` and await its result."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, functools.partial(method, **kwargs))


async def wrap_void_async_method(
    method: Callable[..., Any],
    /,
    *,
    executor: Executor | None = None,
    **kwargs: Any,
) -> None:
    """Run `method(**kwargs)` on `executor`, discarding its result."""
    await wrap_async_method(method, executor=executor, **kwargs)


class ExecutorOwner:
    """Mixin for clients that may own a thread pool.

    A caller-supplied executor is never shut down by the client.
    """

    _executor: Executor | None
    _owns_executor: bool

    def _init_executor(self, settings: AWSSettings, executor: Executor | None) -> None:
        if executor is not None:
            self._executor = executor
            self._owns_executor = False
        elif settings.max_workers:
            self._executor = ThreadPoolExecutor(
                max_workers=settings.max_workers,
                thread_name_prefix=type(self).__name__,
            )
            self._owns_executor = True
        else:
            self._executor = None
            self._owns_executor = False

    def _shutdown_executor(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            self._owns_executor = False
