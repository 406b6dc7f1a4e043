"""
Async Call Executor
===================

Runs sync or async callables from a coroutine without blocking the event loop.
"""

import asyncio
import inspect
import logging
from typing import Any, AsyncIterator, Callable

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class AsyncCallExecutor:
    """
    Async executor for user supplied callables.

    Supports both async and sync callables:
    - Async callables: Called directly with await
    - Sync callables: Wrapped with asyncio.to_thread

    Errors are not converted here, callers decide what a failure means.
    """

    async def execute(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Execute single callable (async).

        Args:
            func: Callable to execute
            *args: Positional arguments
            **kwargs: Keyword arguments

        Returns:
            Call result (awaited if the callable produced an awaitable)
        """
        name = getattr(func, "__name__", repr(func))
        logger.debug(f"[AsyncExecutor] Executing: {name}")

        if inspect.iscoroutinefunction(func):
            result = await func(*args, **kwargs)
        else:
            result = await asyncio.to_thread(func, *args, **kwargs)
            if inspect.isawaitable(result):
                result = await result

        logger.debug(f"[AsyncExecutor] {name} completed")
        return result

    async def iterate(self, iterable: Any) -> AsyncIterator[Any]:
        """
        Iterate a sync or async iterable asynchronously.

        Each next() on a sync iterator runs in a worker thread, so blocking
        cursors do not stall the loop.

        Args:
            iterable: Async iterable, sync iterable, or awaitable resolving to one

        Yields:
            Items in source order
        """
        if inspect.isawaitable(iterable):
            iterable = await iterable

        if hasattr(iterable, "__aiter__"):
            stream = iterable.__aiter__()
            try:
                async for item in stream:
                    yield item
            finally:
                aclose = getattr(stream, "aclose", None)
                if aclose is not None:
                    await aclose()
            return

        iterator = iter(iterable)
        try:
            while True:
                item = await asyncio.to_thread(next, iterator, _EXHAUSTED)
                if item is _EXHAUSTED:
                    break
                yield item
        finally:
            close = getattr(iterator, "close", None)
            if close is not None:
                close()
