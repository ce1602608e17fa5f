"""
Article Repository - PostgreSQL storage for articles

Storage: PostgreSQL
- articles: one row per article
- article_themes: theme links, ordered by position
- article_likes: one row per (article, user)
- comments: owned comments, ordered by insertion (seq)

Every write runs in one transaction. Likes change only through toggle_like,
which touches the single (article, user) row, so an edit or a new comment
never rewrites a concurrent like.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional

import asyncpg

from models.domain.article import Article
from models.domain.comment import Comment
from models.domain.theme import Theme
from services.exceptions import ConcurrencyConflict, NotFound
from utils.id_generator import generate_article_id, generate_comment_id
from .comment_repository import comment_from_row

logger = logging.getLogger(__name__)


class PostgresArticleRepository:
    """
    Repository for Article domain model

    Articles are always returned fully loaded (themes, likes, comments).
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def list_all(self) -> List[Article]:
        """All articles, unordered; the feed decides ordering."""
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT id, header, content, image_url, created_at
                FROM articles
            """)
            return await self._hydrate(conn, rows)

    async def get_by_id(self, article_id: str) -> Optional[Article]:
        """
        Retrieve article by ID.

        Args:
            article_id: Article ID (ar_xxxxxxxx)

        Returns:
            Article model or None
        """
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                SELECT id, header, content, image_url, created_at
                FROM articles
                WHERE id = $1
            """, article_id)

            if not row:
                return None

            articles = await self._hydrate(conn, [row])
            return articles[0]

    async def _hydrate(self, conn: asyncpg.Connection, rows) -> List[Article]:
        """Attach themes, likes and comments to article rows (3 batched queries)"""
        if not rows:
            return []

        ids = [row['id'] for row in rows]

        theme_rows = await conn.fetch("""
            SELECT at.article_id, t.id, t.name
            FROM article_themes at
            JOIN themes t ON t.id = at.theme_id
            WHERE at.article_id = ANY($1::text[])
            ORDER BY at.article_id, at.position
        """, ids)

        like_rows = await conn.fetch("""
            SELECT article_id, user_id
            FROM article_likes
            WHERE article_id = ANY($1::text[])
        """, ids)

        comment_rows = await conn.fetch("""
            SELECT id, article_id, user_id, text, created_at
            FROM comments
            WHERE article_id = ANY($1::text[])
            ORDER BY seq
        """, ids)

        themes: Dict[str, List[Theme]] = defaultdict(list)
        for r in theme_rows:
            themes[r['article_id']].append(Theme(id=r['id'], name=r['name']))

        likes: Dict[str, set] = defaultdict(set)
        for r in like_rows:
            likes[r['article_id']].add(str(r['user_id']))

        comments: Dict[str, List[Comment]] = defaultdict(list)
        for r in comment_rows:
            comments[r['article_id']].append(comment_from_row(r))

        return [
            Article(
                id=row['id'],
                header=row['header'],
                content=row['content'],
                image_url=row['image_url'],
                created_at=row['created_at'],
                themes=themes[row['id']],
                comments=comments[row['id']],
                likes=likes[row['id']],
            )
            for row in rows
        ]

    # =========================================================================
    # CREATE OPERATION
    # =========================================================================

    async def insert(self, article: Article) -> Article:
        """
        Create a new article with its theme links.

        Args:
            article: Article model (id assigned here if empty)

        Returns:
            Stored article
        """
        if not article.id:
            article.id = generate_article_id()

        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                try:
                    await conn.execute("""
                        INSERT INTO articles (id, header, content, image_url, created_at)
                        VALUES ($1, $2, $3, $4, $5)
                    """,
                        article.id,
                        article.header,
                        article.content,
                        article.image_url,
                        article.created_at
                    )
                except asyncpg.UniqueViolationError as e:
                    raise ConcurrencyConflict(f"Article {article.id} already exists") from e

                await self._write_themes(conn, article)
                await self._write_likes(conn, article)
                await self._insert_new_comments(conn, article)

        logger.info(f"Created article {article.id}")
        return await self.get_by_id(article.id)

    # =========================================================================
    # UPDATE OPERATION
    # =========================================================================

    async def update(self, article: Article) -> Article:
        """
        Persist the full article state.

        Row fields and theme links are replaced; comments without an id are
        inserted. Stored likes are not touched. Runs in one transaction
        holding the article row lock.

        Raises:
            NotFound: article row does not exist
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                locked = await conn.fetchrow("""
                    SELECT id FROM articles WHERE id = $1 FOR UPDATE
                """, article.id)

                if not locked:
                    raise NotFound("article", article.id)

                await conn.execute("""
                    UPDATE articles
                    SET header = $2,
                        content = $3,
                        image_url = $4,
                        created_at = $5
                    WHERE id = $1
                """,
                    article.id,
                    article.header,
                    article.content,
                    article.image_url,
                    article.created_at
                )

                await self._write_themes(conn, article)
                await self._insert_new_comments(conn, article)

        logger.info(f"Updated article {article.id}")
        return await self.get_by_id(article.id)

    async def _write_themes(self, conn: asyncpg.Connection, article: Article) -> None:
        await conn.execute("DELETE FROM article_themes WHERE article_id = $1", article.id)
        if article.themes:
            await conn.executemany("""
                INSERT INTO article_themes (article_id, theme_id, position)
                VALUES ($1, $2, $3)
                ON CONFLICT DO NOTHING
            """, [(article.id, theme.id, i) for i, theme in enumerate(article.themes)])

    async def _write_likes(self, conn: asyncpg.Connection, article: Article) -> None:
        if article.likes:
            await conn.executemany("""
                INSERT INTO article_likes (article_id, user_id)
                VALUES ($1, $2)
                ON CONFLICT DO NOTHING
            """, [(article.id, user_id) for user_id in article.likes])

    async def _insert_new_comments(self, conn: asyncpg.Connection, article: Article) -> None:
        for comment in article.comments:
            if comment.id:
                continue
            comment.id = generate_comment_id()
            comment.article_id = article.id
            await conn.execute("""
                INSERT INTO comments (id, article_id, user_id, text, created_at)
                VALUES ($1, $2, $3, $4, $5)
            """,
                comment.id,
                article.id,
                comment.user_id,
                comment.text,
                comment.created_at
            )

    # =========================================================================
    # LIKES
    # =========================================================================

    async def toggle_like(self, article_id: str, user_id: str) -> bool:
        """
        Flip one user's like: delete the (article, user) row, or insert it
        when there was none. Other users' likes are never read or written.

        Returns:
            True if the user likes the article afterwards

        Raises:
            NotFound: article row does not exist
        """
        async with self.db_pool.acquire() as conn:
            async with conn.transaction():
                locked = await conn.fetchrow("""
                    SELECT id FROM articles WHERE id = $1 FOR UPDATE
                """, article_id)

                if not locked:
                    raise NotFound("article", article_id)

                result = await conn.execute("""
                    DELETE FROM article_likes
                    WHERE article_id = $1 AND user_id = $2
                """, article_id, user_id)

                if int(result.split()[-1]) > 0:
                    return False

                await conn.execute("""
                    INSERT INTO article_likes (article_id, user_id)
                    VALUES ($1, $2)
                    ON CONFLICT DO NOTHING
                """, article_id, user_id)
                return True

    # =========================================================================
    # DELETE OPERATION
    # =========================================================================

    async def delete_by_id(self, article_id: str) -> None:
        """
        Delete an article row (theme links and likes go with it).

        Raises:
            NotFound: article row does not exist
            ConcurrencyConflict: comments still reference the article
        """
        async with self.db_pool.acquire() as conn:
            try:
                result = await conn.execute("""
                    DELETE FROM articles WHERE id = $1
                """, article_id)
            except asyncpg.ForeignKeyViolationError as e:
                raise ConcurrencyConflict(
                    f"Article {article_id} still owns comments"
                ) from e

            rows_deleted = int(result.split()[-1])
            if rows_deleted == 0:
                raise NotFound("article", article_id)

            logger.info(f"Deleted article {article_id}")
