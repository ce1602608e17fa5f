"""
Articles API router

Endpoints:
- GET    /api/articles            - personalized feed (last 24 hours)
- GET    /api/articles/{id}       - single article
- POST   /api/articles            - create (admin)
- PUT    /api/articles/{id}       - replace (admin)
- DELETE /api/articles/{id}       - delete with its comments (admin)
- POST   /api/articles/{id}/like  - toggle the viewer's like
"""

from fastapi import APIRouter, Depends, status
from typing import List
import logging

from middleware.auth import get_admin_viewer, get_viewer_optional, get_viewer_required
from models.api.article import ArticlePayload, ArticleResponse
from models.domain.viewer import Authenticated, Viewer
from services.article_service import ArticleService
from services.engagement_tracker import EngagementTracker
from .dependencies import get_article_service, get_engagement_tracker

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("", response_model=List[ArticleResponse])
async def list_articles(
    viewer: Viewer = Depends(get_viewer_optional),
    service: ArticleService = Depends(get_article_service),
):
    """
    Get the article feed

    Anonymous viewers get every article from the last 24 hours, newest
    first. Signed-in viewers additionally lose articles with forbidden
    themes and see articles with more preferred themes first.
    """
    articles = await service.list_feed(viewer)
    return [ArticleResponse.from_domain(a) for a in articles]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
):
    """Get one article with its themes, comments and likes"""
    article = await service.get(article_id)
    return ArticleResponse.from_domain(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    payload: ArticlePayload,
    admin: Authenticated = Depends(get_admin_viewer),
    service: ArticleService = Depends(get_article_service),
):
    """
    Create an article

    ``themes`` is free text; each word becomes a theme.
    """
    article = await service.create(payload.header, payload.content, payload.image_url, payload.themes)
    logger.info(f"Admin {admin.user.user_id} created article {article.id}")
    return ArticleResponse.from_domain(article)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    payload: ArticlePayload,
    admin: Authenticated = Depends(get_admin_viewer),
    service: ArticleService = Depends(get_article_service),
):
    """Replace an article's content and themes; its date becomes now"""
    article = await service.update(
        article_id, payload.header, payload.content, payload.image_url, payload.themes
    )
    logger.info(f"Admin {admin.user.user_id} updated article {article_id}")
    return ArticleResponse.from_domain(article)


@router.delete("/{article_id}")
async def delete_article(
    article_id: str,
    admin: Authenticated = Depends(get_admin_viewer),
    service: ArticleService = Depends(get_article_service),
):
    """Delete an article and all of its comments"""
    await service.delete(article_id)
    logger.info(f"Admin {admin.user.user_id} deleted article {article_id}")
    return {"status": "success", "message": f"Deleted article id - {article_id}"}


@router.post("/{article_id}/like", response_model=ArticleResponse)
async def toggle_like(
    article_id: str,
    viewer: Authenticated = Depends(get_viewer_required),
    tracker: EngagementTracker = Depends(get_engagement_tracker),
):
    """Like the article, or remove the like if already given"""
    article = await tracker.toggle_like(article_id, viewer)
    return ArticleResponse.from_domain(article)
