"""
Pytest fixtures for loader tests.
"""

from dataclasses import dataclass
from unittest.mock import AsyncMock, MagicMock

import pytest

from dataloader.mapper import FunctionMapper
from dataloader.sources import DataSource, ObservableDataSource


@dataclass(frozen=True)
class NetworkModel:
    id: int


@dataclass(frozen=True)
class StorageModel:
    id: int


@dataclass(frozen=True)
class DomainModel:
    id: int


class MockSource(DataSource):
    """DataSource delegating to AsyncMocks so calls can be verified."""

    def __init__(self):
        self.remote = AsyncMock(name="fetch_remote")
        self.local = AsyncMock(name="fetch_local")
        self.save = AsyncMock(name="persist", side_effect=lambda model: model)

    async def fetch_remote(self):
        return await self.remote()

    async def fetch_local(self):
        return await self.local()

    async def persist(self, local_model):
        return await self.save(local_model)


class MockObservableSource(ObservableDataSource):
    """ObservableDataSource whose observe_local() replays a fresh stream per call."""

    def __init__(self):
        self.remote = AsyncMock(name="fetch_remote")
        self.save = AsyncMock(name="persist", side_effect=lambda model: model)
        self.observe = MagicMock(name="observe_local", side_effect=lambda: stream_of())

    async def fetch_remote(self):
        return await self.remote()

    async def persist(self, local_model):
        return await self.save(local_model)

    def observe_local(self):
        return self.observe()


async def stream_of(*items):
    """Async stream yielding items; exceptions in items are raised when reached."""
    for item in items:
        if isinstance(item, BaseException):
            raise item
        yield item


@pytest.fixture
def source():
    return MockSource()


@pytest.fixture
def observable_source():
    return MockObservableSource()


@pytest.fixture
def mapper():
    return FunctionMapper(
        remote_to_local=lambda net: StorageModel(net.id),
        local_to_domain=lambda row: DomainModel(row.id),
    )
