"""
Pytest configuration for newspaper tests.

Everything runs on the in-memory store with a fixed clock.
"""

import os

os.environ.setdefault("STORAGE_BACKEND", "memory")

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from models.domain.article import Article
from models.domain.comment import Comment
from models.domain.theme import Theme
from models.domain.user import ADMIN_ROLE, User
from repositories import MemoryStore, Repositories
from services.article_service import ArticleService
from services.comment_service import CommentService
from services.engagement_tracker import EngagementTracker
from services.theme_registry import ThemeRegistry
from utils.datetime_utils import FixedClock
from utils.id_generator import generate_theme_id

NOW = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repos(store) -> Repositories:
    return Repositories.in_memory(store)


@pytest.fixture
def comment_service(repos, clock) -> CommentService:
    return CommentService(repos.articles, repos.comments, clock=clock)


@pytest.fixture
def article_service(repos, clock, comment_service) -> ArticleService:
    return ArticleService(
        repos.articles,
        ThemeRegistry(repos.themes),
        comment_service,
        repos.unit_of_work,
        clock=clock,
    )


@pytest.fixture
def engagement(repos) -> EngagementTracker:
    return EngagementTracker(repos.articles)


@pytest.fixture
def theme(store):
    """Factory: store a theme and return it"""
    def _theme(name: str) -> Theme:
        created = Theme(id=generate_theme_id(), name=name)
        store.themes[created.id] = created
        return created
    return _theme


@pytest.fixture
def user(store):
    """Factory: store a user account and return it"""
    def _user(email: str, prefer=(), forbid=(), admin: bool = False) -> User:
        account = User(
            user_id=str(uuid.uuid4()),
            email=email,
            name=email.split("@")[0],
            prefer=list(prefer),
            forbid=list(forbid),
            roles={ADMIN_ROLE} if admin else {"ROLE_USER"},
        )
        return store.add_user(account)
    return _user


@pytest.fixture
def article(store, clock):
    """Factory: store an article created ``hours_ago`` before the fixed clock"""
    def _article(header: str, hours_ago: float = 1, themes=(), comments=()) -> Article:
        stored = Article(
            id="",
            header=header,
            content=f"{header} body",
            image_url=None,
            created_at=clock() - timedelta(hours=hours_ago),
            themes=list(themes),
            comments=[
                Comment(id="", text=text, user_id=str(uuid.uuid4()), created_at=clock())
                for text in comments
            ],
        )
        return store.put_article(stored)
    return _article
