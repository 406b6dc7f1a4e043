"""
Infinite Data Loader
====================

The same as DataLoader, but keeps observing local storage after the initial
result to emit the updates that appear afterwards.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional, Union

from core.loader_config import LoaderConfig
from core.schemas import Data, Strategy
from dataloader.loader import DataLoader, D
from dataloader.mapper import DataMapper
from dataloader.sources import ObservableDataSource, close_stream, open_stream


class InfiniteDataLoader(DataLoader[D]):
    """
    DataLoader that splices a live local subscription onto the one-shot result.

    The one-shot sequence is emitted unchanged, with fetch_local() served by
    the first value of observe_local(). Then a new subscription is opened, its
    first value (the snapshot already delivered) is dropped, and every later
    value is emitted as Ready. A failing subscription ends the sequence with a
    single Failed envelope; it is not retried.

    Values are not deduplicated across subscriptions: whatever the fresh
    subscription yields from its second value on is emitted.

    Every strategy gets the live tail. Under REMOTE_ONLY the one-shot part
    never reads or writes local storage; only the tail subscription does.
    """

    def __init__(
        self,
        strategy: Union[Strategy, str],
        source: ObservableDataSource,
        mapper: Optional[DataMapper] = None,
        config: Optional[LoaderConfig] = None
    ):
        """
        Raises:
            TypeError: If source cannot be observed
            ValueError: If strategy is unknown
        """
        if not isinstance(source, ObservableDataSource):
            raise TypeError(
                f"InfiniteDataLoader requires an ObservableDataSource, got {type(source).__name__}"
            )
        super().__init__(strategy, source, mapper=mapper, config=config)

    def get_data(self) -> AsyncIterator[Data[D]]:
        """
        Loader's entry point for data access.

        Unlike DataLoader.get_data(), the iterator keeps running after the
        fetch to emit new local items; stop consuming (or aclose()) to end it.
        """
        return self._get_data_infinite(super().get_data())

    async def _get_data_infinite(self, one_shot: AsyncIterator[Data[D]]) -> AsyncIterator[Data[D]]:
        try:
            async for data in one_shot:
                yield data
        finally:
            await one_shot.aclose()

        self.logger.info("[InfiniteDataLoader] Initial result delivered, observing local updates")
        updates = self._observe_updates()
        try:
            async for data in updates:
                yield data
        finally:
            # close the subscription now, not when the generator is collected
            await updates.aclose()

    async def _observe_updates(self) -> AsyncIterator[Data[D]]:
        stream = None
        try:
            stream = await open_stream(self.source.observe_local())
            is_first = True
            async for local_model in stream:
                if is_first:
                    is_first = False
                    continue
                yield Data.ready(self.mapper.local_to_domain(local_model))
        except Exception as e:
            self.logger.warning(f"[InfiniteDataLoader] Local subscription failed: {e!r}")
            yield Data.failed(e)
        finally:
            if stream is not None:
                await close_stream(stream)
