"""
Repository interfaces

Services depend on these protocols, never on a concrete store. Two
implementations ship with the service:
- Postgres*Repository (asyncpg) for production
- InMemory*Repository for local runs and tests
"""
from typing import TYPE_CHECKING, AsyncContextManager, List, Optional, Protocol

from models.domain.article import Article
from models.domain.comment import Comment
from models.domain.theme import Theme
from models.domain.user import User

if TYPE_CHECKING:
    from . import Repositories


class ArticleRepository(Protocol):
    """Articles with their themes, likes and comments loaded"""

    async def list_all(self) -> List[Article]:
        ...

    async def get_by_id(self, article_id: str) -> Optional[Article]:
        ...

    async def insert(self, article: Article) -> Article:
        """Assign an id, persist, return the stored article"""
        ...

    async def update(self, article: Article) -> Article:
        """
        Persist the article row, its theme links and any comments without
        an id yet (those are inserted). Likes are left as stored; they only
        change through toggle_like.
        """
        ...

    async def toggle_like(self, article_id: str, user_id: str) -> bool:
        """
        Flip one user's like on one article atomically.

        Returns True if the user likes the article afterwards. Raises
        NotFound if the article does not exist.
        """
        ...

    async def delete_by_id(self, article_id: str) -> None:
        """Remove the article. Must fail while it still owns comments."""
        ...


class ThemeRepository(Protocol):

    async def list_all(self) -> List[Theme]:
        ...

    async def get_by_id(self, theme_id: str) -> Optional[Theme]:
        ...

    async def get_by_name(self, name: str) -> Optional[Theme]:
        ...

    async def insert(self, theme: Theme) -> Theme:
        """Raises ConcurrencyConflict if the name already exists"""
        ...


class CommentRepository(Protocol):

    async def get_by_id(self, comment_id: str) -> Optional[Comment]:
        ...

    async def delete_by_id(self, comment_id: str) -> None:
        ...


class UserRepository(Protocol):
    """Read-only: accounts are managed outside this service"""

    async def list_all(self) -> List[User]:
        ...

    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        ...


class UnitOfWork(Protocol):
    """
    Runs a block of repository calls as one transaction.

        async with unit_of_work.transaction() as repos:
            ...

    Every repository on ``repos`` shares the transaction. If the block
    raises, none of its writes are kept.
    """

    def transaction(self) -> AsyncContextManager["Repositories"]:
        ...
