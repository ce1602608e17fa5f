"""
Theme Repository - PostgreSQL storage for themes

Storage: PostgreSQL (themes table, UNIQUE(name))
"""
import logging
from typing import List, Optional

import asyncpg

from models.domain.theme import Theme
from services.exceptions import ConcurrencyConflict
from utils.id_generator import generate_theme_id

logger = logging.getLogger(__name__)


class PostgresThemeRepository:
    """
    Repository for Theme domain model

    Themes are created lazily by the theme registry and never deleted.
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def list_all(self) -> List[Theme]:
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch("SELECT id, name FROM themes ORDER BY name")
            return [Theme(id=row['id'], name=row['name']) for row in rows]

    async def get_by_id(self, theme_id: str) -> Optional[Theme]:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("SELECT id, name FROM themes WHERE id = $1", theme_id)
            return Theme(id=row['id'], name=row['name']) if row else None

    async def get_by_name(self, name: str) -> Optional[Theme]:
        """
        Retrieve theme by its normalized name.

        Args:
            name: Lowercase theme name

        Returns:
            Theme model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("SELECT id, name FROM themes WHERE name = $1", name)
            return Theme(id=row['id'], name=row['name']) if row else None

    # =========================================================================
    # CREATE OPERATION
    # =========================================================================

    async def insert(self, theme: Theme) -> Theme:
        """
        Create a new theme.

        Raises:
            ConcurrencyConflict: another writer already inserted this name
        """
        if not theme.id:
            theme.id = generate_theme_id()

        async with self.db_pool.acquire() as conn:
            try:
                await conn.execute("""
                    INSERT INTO themes (id, name) VALUES ($1, $2)
                """, theme.id, theme.name)
            except asyncpg.UniqueViolationError as e:
                raise ConcurrencyConflict(f"Theme '{theme.name}' already exists") from e

        logger.info(f"Created theme {theme.id} ({theme.name})")
        return theme
