"""
PostgreSQL schema for the newspaper store

Constraints carry the invariants the services rely on:
- themes.name UNIQUE: concurrent first sight of a theme cannot create two rows
- article_likes PRIMARY KEY (article_id, user_id): a user likes at most once
- comments.article_id REFERENCES articles without ON DELETE CASCADE:
  an article row cannot disappear while it still owns comments
"""
import logging

import asyncpg

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    user_id     UUID PRIMARY KEY,
    email       TEXT NOT NULL UNIQUE,
    name        TEXT,
    roles       TEXT[] NOT NULL DEFAULT '{}'
);

CREATE TABLE IF NOT EXISTS themes (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS user_preferred_themes (
    user_id     UUID NOT NULL REFERENCES users (user_id) ON DELETE CASCADE,
    theme_id    TEXT NOT NULL REFERENCES themes (id),
    PRIMARY KEY (user_id, theme_id)
);

CREATE TABLE IF NOT EXISTS user_forbidden_themes (
    user_id     UUID NOT NULL REFERENCES users (user_id) ON DELETE CASCADE,
    theme_id    TEXT NOT NULL REFERENCES themes (id),
    PRIMARY KEY (user_id, theme_id)
);

CREATE TABLE IF NOT EXISTS articles (
    id          TEXT PRIMARY KEY,
    header      TEXT NOT NULL,
    content     TEXT NOT NULL,
    image_url   TEXT,
    created_at  TIMESTAMPTZ NOT NULL
);

CREATE TABLE IF NOT EXISTS article_themes (
    article_id  TEXT NOT NULL REFERENCES articles (id) ON DELETE CASCADE,
    theme_id    TEXT NOT NULL REFERENCES themes (id),
    position    INTEGER NOT NULL,
    PRIMARY KEY (article_id, theme_id)
);

CREATE TABLE IF NOT EXISTS article_likes (
    article_id  TEXT NOT NULL REFERENCES articles (id) ON DELETE CASCADE,
    user_id     UUID NOT NULL,
    PRIMARY KEY (article_id, user_id)
);

CREATE TABLE IF NOT EXISTS comments (
    id          TEXT PRIMARY KEY,
    article_id  TEXT NOT NULL REFERENCES articles (id),
    user_id     UUID NOT NULL,
    text        TEXT NOT NULL,
    created_at  TIMESTAMPTZ NOT NULL,
    seq         BIGSERIAL
);

CREATE INDEX IF NOT EXISTS idx_comments_article ON comments (article_id, seq);
CREATE INDEX IF NOT EXISTS idx_articles_created_at ON articles (created_at DESC);
"""


async def create_schema(pool: asyncpg.Pool) -> None:
    """Create tables and indexes if they do not exist yet"""
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("Newspaper schema ready")
