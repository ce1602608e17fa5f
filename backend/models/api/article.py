"""
Pydantic models for Article
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from models.domain.article import Article
from models.domain.theme import Theme
from .comment import CommentResponse


class ArticlePayload(BaseModel):
    """Request model for creating or replacing an article"""
    header: str
    content: str
    image_url: Optional[str] = Field(default=None, alias="imageURL")
    themes: str = ""  # free text, e.g. "Sport, politics"

    model_config = {
        "populate_by_name": True
    }


class ThemeResponse(BaseModel):
    """Theme as seen by clients"""
    id: str
    name: str

    @classmethod
    def from_domain(cls, theme: Theme) -> "ThemeResponse":
        return cls(id=theme.id, name=theme.name)


class ArticleResponse(BaseModel):
    """Full article response model"""
    id: str
    header: str
    content: str
    image_url: Optional[str] = Field(default=None, alias="imageURL")
    date: datetime
    formatted_date: Optional[str] = Field(default=None, alias="formattedDate")
    themes: List[ThemeResponse] = []
    comments: List[CommentResponse] = []
    likes: List[str] = []
    like_count: int = Field(default=0, alias="likeCount")

    model_config = {
        "populate_by_name": True
    }

    @classmethod
    def from_domain(cls, article: Article) -> "ArticleResponse":
        return cls(
            id=article.id,
            header=article.header,
            content=article.content,
            image_url=article.image_url,
            date=article.created_at,
            formatted_date=article.formatted_date,
            themes=[ThemeResponse.from_domain(t) for t in article.themes],
            comments=[CommentResponse.from_domain(c) for c in article.comments],
            likes=sorted(article.likes),
            like_count=article.like_count,
        )
