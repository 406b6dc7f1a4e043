"""
Timeout Decorator
=================

Adds timeout support to coroutine functions using asyncio.
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, Optional
import logging

logger = logging.getLogger(__name__)


class FetchTimeoutError(TimeoutError):
    """Raised when a coroutine exceeds its timeout."""
    pass


async def call_with_timeout(
    func: Callable[..., Awaitable[Any]],
    timeout_seconds: Optional[float],
    *args,
    **kwargs
) -> Any:
    """
    Await func(*args, **kwargs), bounded by timeout_seconds.

    Args:
        func: Coroutine function to call
        timeout_seconds: Maximum execution time in seconds, None for no bound

    Returns:
        Result of the call

    Raises:
        FetchTimeoutError: If the call did not finish in time. Errors raised
            by the call itself, TimeoutError included, propagate unchanged.
    """
    name = getattr(func, "__name__", repr(func))

    if timeout_seconds is None:
        return await func(*args, **kwargs)

    task = asyncio.ensure_future(func(*args, **kwargs))
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task not in done:
        task.cancel()
        await asyncio.wait({task})
        logger.error(f"Function '{name}' exceeded timeout of {timeout_seconds}s")
        raise FetchTimeoutError(
            f"Function '{name}' execution exceeded {timeout_seconds}s timeout"
        )

    return task.result()


def with_timeout(timeout_seconds: Optional[float]):
    """
    Decorator to add timeout to a coroutine function.

    The wrapped call is cancelled once timeout_seconds elapse and
    FetchTimeoutError is raised instead.

    Example:
        >>> @with_timeout(5.0)
        ... async def slow_function():
        ...     await asyncio.sleep(10)
        ...     return "done"
        >>>
        >>> await slow_function()  # Raises FetchTimeoutError after 5s

    Args:
        timeout_seconds: Maximum execution time in seconds, None for no bound

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            return await call_with_timeout(func, timeout_seconds, *args, **kwargs)
        return wrapper
    return decorator


def with_configurable_timeout(get_timeout: Callable[[], Optional[float]]):
    """
    Decorator with dynamic timeout from callable.

    Useful when timeout should come from configuration.

    Example:
        >>> config = LoaderConfig(remote_timeout=2.0)
        >>> @with_configurable_timeout(lambda: config.remote_timeout)
        ... async def fetch():
        ...     pass

    Args:
        get_timeout: Callable that returns timeout in seconds (or None)

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            return await call_with_timeout(func, get_timeout(), *args, **kwargs)
        return wrapper
    return decorator
