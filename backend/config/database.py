"""
Database Configuration
======================

PostgreSQL connection configuration for the API process.
"""
from dataclasses import dataclass

from .settings import get_settings


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""
    host: str
    port: int
    user: str
    password: str
    database: str
    min_size: int = 2
    max_size: int = 10

    @classmethod
    def from_settings(cls) -> 'PostgresConfig':
        """Create config from application settings (env vars / .env)."""
        settings = get_settings()
        return cls(
            host=settings.postgres_host,
            port=settings.postgres_port,
            user=settings.postgres_user,
            password=settings.postgres_password,
            database=settings.postgres_db,
            min_size=settings.postgres_pool_min,
            max_size=settings.postgres_pool_max,
        )

    def to_asyncpg_kwargs(self) -> dict:
        """Convert to asyncpg.create_pool kwargs."""
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database,
            'min_size': self.min_size,
            'max_size': self.max_size,
        }


def get_postgres_config() -> PostgresConfig:
    """Get PostgreSQL configuration from settings."""
    return PostgresConfig.from_settings()


async def create_postgres_pool():
    """Create PostgreSQL connection pool from settings."""
    import asyncpg
    config = get_postgres_config()
    return await asyncpg.create_pool(**config.to_asyncpg_kwargs())
