"""
User Repository - PostgreSQL storage for user accounts

Storage: PostgreSQL (users, user_preferred_themes, user_forbidden_themes)

Read-only from this service's point of view: accounts and preferences are
written by the account system.
"""
import logging
import uuid
from collections import defaultdict
from typing import Dict, List, Optional

import asyncpg

from models.domain.theme import Theme
from models.domain.user import User

logger = logging.getLogger(__name__)


class PostgresUserRepository:
    """
    Repository for User domain model with theme preferences loaded
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    async def list_all(self) -> List[User]:
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT user_id, email, name, roles
                FROM users
                ORDER BY email
            """)
            return await self._hydrate(conn, rows)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve user by ID.

        Args:
            user_id: User UUID

        Returns:
            User model or None (also for ids that are not UUIDs)
        """
        try:
            uuid.UUID(str(user_id))
        except ValueError:
            return None

        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                SELECT user_id, email, name, roles
                FROM users
                WHERE user_id = $1
            """, user_id)

            if not row:
                return None

            users = await self._hydrate(conn, [row])
            return users[0]

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve user by email.

        Args:
            email: User email address

        Returns:
            User model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                SELECT user_id FROM users WHERE email = $1
            """, email)

            if not row:
                return None

        return await self.get_by_id(str(row['user_id']))

    async def _hydrate(self, conn: asyncpg.Connection, rows) -> List[User]:
        if not rows:
            return []

        ids = [row['user_id'] for row in rows]

        pref_rows = await conn.fetch("""
            SELECT 'prefer' AS kind, p.user_id, t.id, t.name
            FROM user_preferred_themes p
            JOIN themes t ON t.id = p.theme_id
            WHERE p.user_id = ANY($1::uuid[])
            UNION ALL
            SELECT 'forbid' AS kind, f.user_id, t.id, t.name
            FROM user_forbidden_themes f
            JOIN themes t ON t.id = f.theme_id
            WHERE f.user_id = ANY($1::uuid[])
        """, ids)

        prefer: Dict[str, List[Theme]] = defaultdict(list)
        forbid: Dict[str, List[Theme]] = defaultdict(list)
        for r in pref_rows:
            target = prefer if r['kind'] == 'prefer' else forbid
            target[str(r['user_id'])].append(Theme(id=r['id'], name=r['name']))

        users = []
        for row in rows:
            user_id = str(row['user_id'])
            users.append(User(
                user_id=user_id,
                email=row['email'],
                name=row['name'],
                prefer=prefer[user_id],
                forbid=forbid[user_id],
                roles=set(row['roles'] or []),
            ))
        return users
