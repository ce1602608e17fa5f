"""
Repository Pattern - Storage abstraction layer

Repositories hide storage details (PostgreSQL, in-memory) from business logic.
Consumers work with domain models, not storage-specific types.

Storage backends (STORAGE_BACKEND setting):
- postgres: asyncpg pool shared by all requests
- memory: one process-wide MemoryStore, for local runs and tests
"""
import logging
from dataclasses import dataclass
from typing import Optional

import asyncpg

from config import get_settings
from .protocols import (
    ArticleRepository,
    ThemeRepository,
    CommentRepository,
    UserRepository,
    UnitOfWork,
)
from .memory import (
    MemoryStore,
    InMemoryArticleRepository,
    InMemoryThemeRepository,
    InMemoryCommentRepository,
    InMemoryUserRepository,
)
from .article_repository import PostgresArticleRepository
from .theme_repository import PostgresThemeRepository
from .comment_repository import PostgresCommentRepository
from .user_repository import PostgresUserRepository
from .unit_of_work import MemoryUnitOfWork, PostgresUnitOfWork

logger = logging.getLogger(__name__)

# Shared database connection pool (initialized on first use)
db_pool: Optional[asyncpg.Pool] = None

# Shared in-memory store (STORAGE_BACKEND=memory)
memory_store: Optional[MemoryStore] = None


@dataclass
class Repositories:
    """One repository per entity, all over the same store, plus a unit of work for multi-step writes"""
    articles: ArticleRepository
    themes: ThemeRepository
    comments: CommentRepository
    users: UserRepository
    unit_of_work: UnitOfWork

    @classmethod
    def postgres(cls, pool: asyncpg.Pool) -> 'Repositories':
        return cls(
            articles=PostgresArticleRepository(pool),
            themes=PostgresThemeRepository(pool),
            comments=PostgresCommentRepository(pool),
            users=PostgresUserRepository(pool),
            unit_of_work=PostgresUnitOfWork(pool),
        )

    @classmethod
    def in_memory(cls, store: MemoryStore) -> 'Repositories':
        return cls(
            articles=InMemoryArticleRepository(store),
            themes=InMemoryThemeRepository(store),
            comments=InMemoryCommentRepository(store),
            users=InMemoryUserRepository(store),
            unit_of_work=MemoryUnitOfWork(store),
        )


async def get_db_pool() -> asyncpg.Pool:
    """Get or create shared database connection pool"""
    global db_pool
    if db_pool is None:
        from config import create_postgres_pool
        db_pool = await create_postgres_pool()
    return db_pool


def get_memory_store() -> MemoryStore:
    """Get or create the process-wide in-memory store"""
    global memory_store
    if memory_store is None:
        memory_store = MemoryStore()
        logger.info("Using in-memory storage")
    return memory_store


async def get_repositories() -> Repositories:
    """FastAPI dependency: repositories for the configured backend"""
    if get_settings().storage_backend == "memory":
        return Repositories.in_memory(get_memory_store())
    return Repositories.postgres(await get_db_pool())


__all__ = [
    'ArticleRepository',
    'ThemeRepository',
    'CommentRepository',
    'UserRepository',
    'UnitOfWork',
    'MemoryStore',
    'Repositories',
    'db_pool',
    'get_db_pool',
    'get_memory_store',
    'get_repositories',
]
