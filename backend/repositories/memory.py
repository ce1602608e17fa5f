"""
In-memory repositories

Same contracts as the PostgreSQL repositories, backed by plain dicts.
Used by the test suite and by ``STORAGE_BACKEND=memory`` local runs.

Objects are deep-copied on the way in and out so callers can only change
stored state through the repository methods, like with a real database.
The store also applies the relational constraints the schema declares:
unique theme names and no article removal while comments still point at it.
"""
import copy
import logging
from typing import Dict, List, Optional, Tuple

from models.domain.article import Article
from models.domain.comment import Comment
from models.domain.theme import Theme
from models.domain.user import User
from services.exceptions import ConcurrencyConflict, NotFound
from utils.id_generator import (
    generate_article_id,
    generate_comment_id,
    generate_theme_id,
)

logger = logging.getLogger(__name__)


class MemoryStore:
    """Shared tables for the in-memory repositories"""

    def __init__(self):
        self.articles: Dict[str, Article] = {}
        self.comments: Dict[str, Comment] = {}
        self.themes: Dict[str, Theme] = {}
        self.users: Dict[str, User] = {}

    def add_user(self, user: User) -> User:
        """Seed a user account (accounts are not created through the API)"""
        self.users[user.user_id] = copy.deepcopy(user)
        return user

    def put_article(self, article: Article, replace_likes: bool = True) -> Article:
        """
        Write an article row and insert its new comments.

        Comments without an id are new: they get an id and a row. Comments
        that already have an id are left alone, as in the Postgres store.
        With replace_likes=False the stored liker set is kept.
        """
        if not article.id:
            article.id = generate_article_id()

        for comment in article.comments:
            if comment.id:
                continue
            comment.id = generate_comment_id()
            comment.article_id = article.id
            self.comments[comment.id] = copy.deepcopy(comment)

        row = copy.deepcopy(article)
        row.comments = []
        row.formatted_date = None
        previous = self.articles.get(article.id)
        if not replace_likes and previous is not None:
            row.likes = set(previous.likes)
        self.articles[article.id] = row
        return article

    def load_article(self, article_id: str) -> Optional[Article]:
        row = self.articles.get(article_id)
        if row is None:
            return None

        article = copy.deepcopy(row)
        article.comments = [
            copy.deepcopy(comment)
            for comment in self.comments.values()
            if comment.article_id == article_id
        ]
        return article

    def comment_ids_for(self, article_id: str) -> List[str]:
        return [c.id for c in self.comments.values() if c.article_id == article_id]

    def snapshot(self) -> Tuple[Dict, Dict, Dict, Dict]:
        return copy.deepcopy((self.articles, self.comments, self.themes, self.users))

    def restore(self, snapshot: Tuple[Dict, Dict, Dict, Dict]) -> None:
        self.articles, self.comments, self.themes, self.users = snapshot


class InMemoryArticleRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_all(self) -> List[Article]:
        return [self.store.load_article(article_id) for article_id in list(self.store.articles)]

    async def get_by_id(self, article_id: str) -> Optional[Article]:
        return self.store.load_article(article_id)

    async def insert(self, article: Article) -> Article:
        if article.id and article.id in self.store.articles:
            raise ConcurrencyConflict(f"Article {article.id} already exists")

        self.store.put_article(article)
        logger.info(f"Created article {article.id}")
        return self.store.load_article(article.id)

    async def update(self, article: Article) -> Article:
        if article.id not in self.store.articles:
            raise NotFound("article", article.id)

        self.store.put_article(article, replace_likes=False)
        logger.info(f"Updated article {article.id}")
        return self.store.load_article(article.id)

    async def toggle_like(self, article_id: str, user_id: str) -> bool:
        # no await between read and write, so concurrent toggles cannot interleave
        row = self.store.articles.get(article_id)
        if row is None:
            raise NotFound("article", article_id)

        if user_id in row.likes:
            row.likes.discard(user_id)
            return False
        row.likes.add(user_id)
        return True

    async def delete_by_id(self, article_id: str) -> None:
        if article_id not in self.store.articles:
            raise NotFound("article", article_id)

        remaining = self.store.comment_ids_for(article_id)
        if remaining:
            raise ConcurrencyConflict(
                f"Article {article_id} still owns {len(remaining)} comments"
            )

        del self.store.articles[article_id]
        logger.info(f"Deleted article {article_id}")


class InMemoryThemeRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_all(self) -> List[Theme]:
        return [copy.deepcopy(theme) for theme in self.store.themes.values()]

    async def get_by_id(self, theme_id: str) -> Optional[Theme]:
        theme = self.store.themes.get(theme_id)
        return copy.deepcopy(theme) if theme else None

    async def get_by_name(self, name: str) -> Optional[Theme]:
        for theme in self.store.themes.values():
            if theme.name == name:
                return copy.deepcopy(theme)
        return None

    async def insert(self, theme: Theme) -> Theme:
        # UNIQUE(name)
        if any(existing.name == theme.name for existing in self.store.themes.values()):
            raise ConcurrencyConflict(f"Theme '{theme.name}' already exists")

        if not theme.id:
            theme.id = generate_theme_id()
        self.store.themes[theme.id] = copy.deepcopy(theme)
        logger.info(f"Created theme {theme.id} ({theme.name})")
        return copy.deepcopy(theme)


class InMemoryCommentRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def get_by_id(self, comment_id: str) -> Optional[Comment]:
        comment = self.store.comments.get(comment_id)
        return copy.deepcopy(comment) if comment else None

    async def delete_by_id(self, comment_id: str) -> None:
        if self.store.comments.pop(comment_id, None) is None:
            raise NotFound("comment", comment_id)
        logger.info(f"Deleted comment {comment_id}")


class InMemoryUserRepository:

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_all(self) -> List[User]:
        return [copy.deepcopy(user) for user in self.store.users.values()]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self.store.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self.store.users.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None
