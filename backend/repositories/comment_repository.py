"""
Comment Repository - PostgreSQL storage for comments

Storage: PostgreSQL (comments table)

Comments are inserted through the article update path
(PostgresArticleRepository.update); this repository reads and deletes them.
"""
import logging
from typing import Optional

import asyncpg

from models.domain.comment import Comment
from services.exceptions import NotFound

logger = logging.getLogger(__name__)


def comment_from_row(row) -> Comment:
    return Comment(
        id=row['id'],
        text=row['text'],
        user_id=str(row['user_id']),
        article_id=row['article_id'],
        created_at=row['created_at'],
    )


class PostgresCommentRepository:
    """
    Repository for Comment domain model
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    async def get_by_id(self, comment_id: str) -> Optional[Comment]:
        """
        Retrieve comment by ID.

        Args:
            comment_id: Comment ID (cm_xxxxxxxx)

        Returns:
            Comment model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                SELECT id, article_id, user_id, text, created_at
                FROM comments
                WHERE id = $1
            """, comment_id)

            return comment_from_row(row) if row else None

    async def delete_by_id(self, comment_id: str) -> None:
        """
        Delete a comment.

        Raises:
            NotFound: no comment with this id
        """
        async with self.db_pool.acquire() as conn:
            result = await conn.execute("""
                DELETE FROM comments WHERE id = $1
            """, comment_id)

            # Check if delete happened
            rows_deleted = int(result.split()[-1])
            if rows_deleted == 0:
                raise NotFound("comment", comment_id)

            logger.info(f"Deleted comment {comment_id}")
