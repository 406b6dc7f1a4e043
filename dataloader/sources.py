"""
Data Sources
============

The capabilities a loader needs from its caller: a remote fetch, a local
fetch (or a local subscription) and a persist operation.

Implement DataSource (or ObservableDataSource for live storage) per use case.
Add attributes to your implementation when a fetch needs arguments, and read
them from fetch_remote() / fetch_local().
"""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Callable, Generic, Optional, TypeVar

from core.executor_async import AsyncCallExecutor

logger = logging.getLogger(__name__)

N = TypeVar("N")
S = TypeVar("S")


class EmptySourceError(LookupError):
    """Raised when a local stream completes before emitting a value."""
    pass


async def open_stream(stream: Any) -> AsyncIterator[Any]:
    """Resolve what observe_local() returned into an async iterator."""
    if inspect.isawaitable(stream):
        stream = await stream
    return stream.__aiter__()


async def close_stream(stream: AsyncIterator[Any]):
    """Close an async iterator early, if it supports it."""
    aclose = getattr(stream, "aclose", None)
    if aclose is not None:
        await aclose()


class DataSource(ABC, Generic[N, S]):
    """
    Remote + local data source used by DataLoader.

    Every method may raise; the loader turns failures into Data envelopes.
    Methods must not switch threads themselves unless they need to, the
    loader awaits them in order on the current event loop.
    """

    @abstractmethod
    async def fetch_remote(self) -> N:
        """Fetch fresh data from the network API."""
        pass

    @abstractmethod
    async def fetch_local(self) -> S:
        """Fetch the cached data from local storage."""
        pass

    @abstractmethod
    async def persist(self, local_model: S) -> S:
        """
        Save a freshly fetched value to local storage.

        IMPORTANT: return the value actually stored (e.g. re-read from the
        database), not the argument.
        """
        pass


class ObservableDataSource(DataSource[N, S]):
    """
    Data source whose local storage can be observed for changes.

    fetch_local() is served by the first value of a fresh observe_local()
    subscription.
    """

    @abstractmethod
    def observe_local(self) -> AsyncIterator[S]:
        """
        Subscribe to local storage.

        Each call opens a new subscription. The first value is the current
        snapshot, later values are updates. The stream may be infinite.
        """
        pass

    async def fetch_local(self) -> S:
        stream = await open_stream(self.observe_local())
        try:
            async for value in stream:
                return value
        finally:
            await close_stream(stream)
        raise EmptySourceError("Local stream completed without emitting a value")


class CallableDataSource(ObservableDataSource):
    """
    Data source assembled from plain callables.

    Each callable may be sync or async; sync ones run in a worker thread.
    observe_local may return a sync or async iterable.

    Example:
        >>> source = CallableDataSource(
        ...     fetch_remote=api.get_users,
        ...     fetch_local=dao.load_users,
        ...     persist=dao.save_users,
        ... )
        >>> loader = DataLoader(Strategy.LOCAL_FIRST, source)
    """

    def __init__(
        self,
        fetch_remote: Callable[[], Any],
        fetch_local: Optional[Callable[[], Any]] = None,
        persist: Optional[Callable[[Any], Any]] = None,
        observe_local: Optional[Callable[[], Any]] = None,
        executor: Optional[AsyncCallExecutor] = None
    ):
        """
        Args:
            fetch_remote: Remote fetch
            fetch_local: Local fetch; defaults to the first observed value
            persist: Save function returning the stored value; when omitted
                the value is surfaced as given
            observe_local: Factory returning an iterable of local snapshots
            executor: Executor used to run the callables
        """
        self._fetch_remote = fetch_remote
        self._fetch_local = fetch_local
        self._persist = persist
        self._observe_local = observe_local
        self.executor = executor or AsyncCallExecutor()

    async def fetch_remote(self):
        return await self.executor.execute(self._fetch_remote)

    async def fetch_local(self):
        if self._fetch_local is not None:
            return await self.executor.execute(self._fetch_local)
        if self._observe_local is not None:
            return await super().fetch_local()
        raise NotImplementedError("No local fetch configured for this source")

    async def persist(self, local_model):
        if self._persist is None:
            return local_model
        return await self.executor.execute(self._persist, local_model)

    def observe_local(self) -> AsyncIterator[Any]:
        if self._observe_local is None:
            raise NotImplementedError("No local observation configured for this source")
        return self._observe()

    async def _observe(self) -> AsyncIterator[Any]:
        # the factory runs on first iteration, not when observe_local() is called
        items = self.executor.iterate(await self.executor.execute(self._observe_local))
        try:
            async for item in items:
                yield item
        finally:
            await items.aclose()
