"""
API models - pydantic request/response shapes for the HTTP layer
"""
from .article import ArticlePayload, ArticleResponse, ThemeResponse
from .comment import CommentCreate, CommentResponse
from .user import UserResponse

__all__ = [
    'ArticlePayload',
    'ArticleResponse',
    'ThemeResponse',
    'CommentCreate',
    'CommentResponse',
    'UserResponse',
]
