"""
Service wiring for the routers

Services are built per request over the configured repositories.
Tests override ``get_repositories`` and ``get_clock`` through
``app.dependency_overrides``.
"""

from fastapi import Depends

from config import get_settings
from repositories import Repositories, get_repositories
from services.article_service import ArticleService
from services.comment_service import CommentService
from services.engagement_tracker import EngagementTracker
from services.theme_registry import ThemeRegistry
from utils.datetime_utils import Clock, utcnow


def get_clock() -> Clock:
    return utcnow


def get_comment_service(
    repos: Repositories = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
) -> CommentService:
    return CommentService(
        repos.articles,
        repos.comments,
        clock=clock,
        date_format=get_settings().display_date_format,
    )


def get_article_service(
    repos: Repositories = Depends(get_repositories),
    clock: Clock = Depends(get_clock),
    comment_service: CommentService = Depends(get_comment_service),
) -> ArticleService:
    return ArticleService(
        repos.articles,
        ThemeRegistry(repos.themes),
        comment_service,
        repos.unit_of_work,
        clock=clock,
        date_format=get_settings().display_date_format,
    )


def get_engagement_tracker(
    repos: Repositories = Depends(get_repositories),
) -> EngagementTracker:
    return EngagementTracker(repos.articles)
