"""
Example: Cached Repository
==========================

Demonstrates the three loading strategies and the infinite loader against an
in-memory "network" that fails randomly and an in-memory "database" that
notifies observers when rows change.
"""

import sys
import os
import asyncio
import random
from dataclasses import dataclass
from typing import AsyncIterator, Dict, List

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.loader_config import LoaderConfig
from core.logging_setup import setup_logging
from core.schemas import Strategy
from dataloader import DataLoader, InfiniteDataLoader, ObservableDataSource, FunctionMapper


# =============================================================================
# 1. Models
# =============================================================================

@dataclass(frozen=True)
class ArticleRow:
    id: int
    title: str
    version: int


@dataclass(frozen=True)
class Article:
    title: str
    revision: str


# =============================================================================
# 2. In-memory network + database
# =============================================================================

class ArticleDatabase:
    """Tiny observable table."""

    def __init__(self):
        self.rows: Dict[int, ArticleRow] = {}
        self._subscribers: List[asyncio.Queue] = []

    def save(self, row: ArticleRow) -> ArticleRow:
        stored = ArticleRow(row.id, row.title, self.rows.get(row.id, row).version + 1)
        self.rows[row.id] = stored
        for queue in self._subscribers:
            queue.put_nowait(stored)
        return stored

    async def observe(self, article_id: int) -> AsyncIterator[ArticleRow]:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.append(queue)
        try:
            if article_id not in self.rows:
                raise LookupError(f"Article {article_id} not cached")
            yield self.rows[article_id]
            while True:
                row = await queue.get()
                if row.id == article_id:
                    yield row
        finally:
            self._subscribers.remove(queue)


class ArticleSource(ObservableDataSource):
    """Article #id from a flaky API, cached in ArticleDatabase."""

    def __init__(self, db: ArticleDatabase, article_id: int, failure_rate: float = 0.3):
        self.db = db
        self.article_id = article_id
        self.failure_rate = failure_rate

    async def fetch_remote(self) -> dict:
        await asyncio.sleep(random.uniform(0.05, 0.4))
        if random.random() < self.failure_rate:
            raise ConnectionError("Random network failure!")
        return {"id": self.article_id, "title": f"Article {self.article_id}"}

    def observe_local(self) -> AsyncIterator[ArticleRow]:
        return self.db.observe(self.article_id)

    async def persist(self, row: ArticleRow) -> ArticleRow:
        return self.db.save(row)


mapper = FunctionMapper(
    remote_to_local=lambda payload: ArticleRow(payload["id"], payload["title"], 0),
    local_to_domain=lambda row: Article(row.title, f"v{row.version}"),
)


# =============================================================================
# 3. Examples
# =============================================================================

async def example_strategies(config: LoaderConfig):
    """Run every strategy once."""
    print("\n" + "=" * 60)
    print("Example 1: One-shot strategies")
    print("=" * 60)

    db = ArticleDatabase()
    db.save(ArticleRow(1, "Article 1 (cached)", 0))

    for strategy in Strategy:
        loader = DataLoader(strategy, ArticleSource(db, 1), mapper=mapper, config=config)
        print(f"\n{strategy.value}:")
        async for data in loader.get_data():
            print(f"   {data.state.value:8} {data.content or data.error or ''}")


async def example_infinite(config: LoaderConfig):
    """Keep observing the database after the initial result."""
    print("\n" + "=" * 60)
    print("Example 2: Infinite loader")
    print("=" * 60)

    db = ArticleDatabase()
    db.save(ArticleRow(2, "Article 2 (cached)", 0))
    loader = InfiniteDataLoader(Strategy.LOCAL_FIRST, ArticleSource(db, 2), mapper=mapper, config=config)

    async def edit_later():
        await asyncio.sleep(0.6)
        db.save(ArticleRow(2, "Article 2 (edited)", 0))

    editor = asyncio.create_task(edit_later())
    stream = loader.get_data()
    try:
        received = 0
        async for data in stream:
            print(f"   {data.state.value:8} {data.content or data.error or ''}")
            received += 1
            if received == 3:
                break
    finally:
        await stream.aclose()
        await editor


async def main():
    config = LoaderConfig.from_env()
    setup_logging(config.log_level, config.log_file)

    await example_strategies(config)
    await example_infinite(config)


if __name__ == "__main__":
    asyncio.run(main())
