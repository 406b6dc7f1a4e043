"""
Data Loader
===========

Strategy-based cached data loading: remote first, local first, or remote only.

The loader talks to a DataSource and emits a sequence of Data envelopes, so
callers can render a loading state and get the updated model as soon as it
is received.

How-to:
    1) Implement DataSource (fetch_remote, fetch_local, persist).
    2) Optionally provide a DataMapper when network, storage and domain
       models differ.
    3) Create DataLoader with a strategy and consume get_data().

Example:
    >>> loader = DataLoader(Strategy.REMOTE_FIRST, source, config=LoaderConfig(remote_timeout=5))
    >>> async for data in loader.get_data():
    ...     if data.is_ready():
    ...         render(data.content)
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Callable, Dict, Generic, List, Optional, TypeVar, Union

from core.loader_config import LoaderConfig, DEFAULT_CONFIG
from core.schemas import Data, Strategy
from core.timeout_decorator import call_with_timeout
from dataloader.mapper import DataMapper, IdentityMapper
from dataloader.sources import DataSource

logger = logging.getLogger("DataLoader")

D = TypeVar("D")


class DummyLogger:
    """No-op logger for disabled logging."""
    def __getattr__(self, name):
        return lambda *args, **kwargs: None


class DataLoader(Generic[D]):
    """
    Reconciles a remote and a local source according to a Strategy.

    Emission rules per strategy:
    - REMOTE_FIRST: Loading, then the persisted remote value; on remote
      failure the local value (if any) followed by the remote error.
    - LOCAL_FIRST: the local value (or Loading when it fails), then the
      persisted remote value or the remote error.
    - REMOTE_ONLY: Loading, then the remote value or error. Storage is
      never touched.

    Persist failures and local fallback failures are logged, not emitted.
    Source calls inside a run are sequential; runs share no state.
    """

    def __init__(
        self,
        strategy: Union[Strategy, str],
        source: DataSource,
        mapper: Optional[DataMapper] = None,
        config: Optional[LoaderConfig] = None
    ):
        """
        Initialize loader.

        Args:
            strategy: Caching strategy (enum member or its value)
            source: Remote/local data source
            mapper: Model mapper (identity if None)
            config: Loader configuration (remote timeout, logging)

        Raises:
            ValueError: If strategy is unknown
        """
        self.strategy = Strategy(strategy)
        self.source = source
        self.mapper = mapper or IdentityMapper()
        self.config = config or DEFAULT_CONFIG
        self.logger = logger if self.config.enable_logging else DummyLogger()

        self._handlers: Dict[Strategy, Callable[[], AsyncIterator[Data]]] = {
            Strategy.REMOTE_FIRST: self._get_remote_first,
            Strategy.LOCAL_FIRST: self._get_local_first,
            Strategy.REMOTE_ONLY: self._get_remote_only,
        }

    def get_data(self) -> AsyncIterator[Data[D]]:
        """
        Loader's entry point for data access.

        Every call starts a new run from scratch. The iterator is lazy: no
        source is called before the first element is requested.

        Returns:
            Async iterator of Data envelopes holding domain models
        """
        return self._handlers[self.strategy]()

    async def collect(self) -> List[Data[D]]:
        """Run once and return every emitted envelope."""
        return [data async for data in self.get_data()]

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    async def _get_remote_first(self) -> AsyncIterator[Data[D]]:
        self.logger.info(f"[DataLoader] Run started ({self.strategy.value})")
        yield Data.loading()

        remote_result = await self._get_remote_result()
        if remote_result.is_ready():
            yield self._to_domain(await self._get_saved_result(remote_result))
            return

        local_result = await self._get_local_result()
        if local_result.is_ready():
            yield self._to_domain(local_result)
        else:
            self.logger.warning(
                f"[DataLoader] Local fallback failed, discarding: {local_result.error!r}"
            )

        if remote_result.is_failed():
            yield Data.failed(remote_result.error)

    async def _get_local_first(self) -> AsyncIterator[Data[D]]:
        self.logger.info(f"[DataLoader] Run started ({self.strategy.value})")

        local_result = await self._get_local_result()
        if local_result.is_ready():
            yield self._to_domain(local_result)
        else:
            self.logger.debug(f"[DataLoader] No local snapshot: {local_result.error!r}")
            yield Data.loading()

        remote_result = await self._get_remote_result()
        if remote_result.is_ready():
            yield self._to_domain(await self._get_saved_result(remote_result))
        else:
            yield Data.failed(remote_result.error)

    async def _get_remote_only(self) -> AsyncIterator[Data[D]]:
        self.logger.info(f"[DataLoader] Run started ({self.strategy.value})")
        yield Data.loading()

        remote_result = await self._get_remote_result()
        if remote_result.is_ready():
            yield self._to_domain(remote_result)
        else:
            yield Data.failed(remote_result.error)

    # -------------------------------------------------------------------------
    # Source access
    # -------------------------------------------------------------------------

    async def _get_remote_result(self) -> Data:
        """Fetch remote (timeout-bounded) and convert it to the storage model."""
        try:
            remote_model = await call_with_timeout(
                self.source.fetch_remote, self.config.remote_timeout
            )
            return Data.ready(self.mapper.remote_to_local(remote_model))
        except Exception as e:
            self.logger.warning(f"[DataLoader] Remote fetch failed: {e!r}")
            return Data.failed(e)

    async def _get_local_result(self) -> Data:
        try:
            return Data.ready(await self.source.fetch_local())
        except Exception as e:
            return Data.failed(e)

    async def _get_saved_result(self, remote_result: Data) -> Data:
        """Persist a ready remote result, falling back to it when saving fails."""
        try:
            return Data.ready(await self.source.persist(remote_result.content))
        except Exception as e:
            self.logger.warning(f"[DataLoader] Persist failed, surfacing unsaved value: {e!r}")
            return remote_result

    def _to_domain(self, result: Data) -> Data[D]:
        try:
            return result.map_data(self.mapper.local_to_domain)
        except Exception as e:
            self.logger.error(f"[DataLoader] Domain mapping failed: {e!r}")
            return Data.failed(e)
