"""
Comments API router
"""

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
import logging

from middleware.auth import get_viewer_required
from models.api.article import ArticleResponse
from models.api.comment import CommentCreate, CommentResponse
from models.domain.viewer import Authenticated
from services.comment_service import CommentService
from .dependencies import get_comment_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["comments"])


@router.get("/articles/{article_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    article_id: str,
    service: CommentService = Depends(get_comment_service),
):
    """
    Get all comments for an article

    Sorted newest first. 404 if the article does not exist, [] if it has
    no comments.
    """
    comments = await service.list_by_article(article_id)
    if comments is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Article id not found - {article_id}"
        )
    return [CommentResponse.from_domain(c) for c in comments]


@router.post(
    "/articles/{article_id}/comments",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    article_id: str,
    comment_data: CommentCreate,
    viewer: Authenticated = Depends(get_viewer_required),
    service: CommentService = Depends(get_comment_service),
):
    """
    Comment on an article

    Requires authentication. Returns the article with the new comment.
    """
    article = await service.append(article_id, comment_data.text, viewer)
    return ArticleResponse.from_domain(article)


@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: str,
    viewer: Authenticated = Depends(get_viewer_required),
    service: CommentService = Depends(get_comment_service),
):
    """Delete a comment"""
    await service.delete_by_id(comment_id)
    logger.info(f"User {viewer.user.user_id} deleted comment {comment_id}")
    return {"status": "success", "message": "Comment deleted"}
