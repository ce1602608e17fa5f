"""
Pydantic models for Comment
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from models.domain.comment import Comment


class CommentCreate(BaseModel):
    """Request model for creating a comment"""
    text: str = Field(min_length=1)


class CommentResponse(BaseModel):
    """Response model for a comment"""
    id: str
    text: str
    user_id: str = Field(alias="userId")
    article_id: Optional[str] = Field(default=None, alias="articleId")
    date: datetime
    formatted_date: Optional[str] = Field(default=None, alias="formattedDate")

    model_config = {
        "populate_by_name": True
    }

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            text=comment.text,
            user_id=comment.user_id,
            article_id=comment.article_id,
            date=comment.created_at,
            formatted_date=comment.formatted_date,
        )
