"""
Unit of work - several repository calls in one transaction

PostgreSQL: one pooled connection is held inside ``conn.transaction()``.
The repositories handed to the block all run on that connection, so
their own ``conn.transaction()`` blocks become savepoints of the outer
transaction.

Memory: the store is snapshotted on entry and restored when the block
raises. In-memory repository calls never suspend, so nothing else writes
to the store in between.
"""
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

import asyncpg

from .memory import MemoryStore

if TYPE_CHECKING:
    from . import Repositories

logger = logging.getLogger(__name__)


class BoundConnection:
    """Pool stand-in that always hands out the same acquired connection"""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        yield self.conn


class PostgresUnitOfWork:

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator['Repositories']:
        from . import Repositories

        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                yield Repositories.postgres(BoundConnection(conn))


class MemoryUnitOfWork:

    def __init__(self, store: MemoryStore):
        self.store = store

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator['Repositories']:
        from . import Repositories

        snapshot = self.store.snapshot()
        try:
            yield Repositories.in_memory(self.store)
        except BaseException:
            self.store.restore(snapshot)
            logger.warning("Rolled back in-memory transaction")
            raise
