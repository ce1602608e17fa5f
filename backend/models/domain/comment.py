"""
Comment domain model
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Comment:
    """
    Comment domain model - storage-agnostic representation

    Storage: PostgreSQL (comments table)

    Comments belong to exactly one article and are deleted with it.
    The owning user is fixed once set.

    ID format: cm_xxxxxxxx (assigned when the owning article is persisted)
    """
    id: str
    text: str
    user_id: str  # UUID format

    article_id: Optional[str] = None  # ar_xxxxxxxx

    # Timestamps
    created_at: Optional[datetime] = None

    # Presentation only, filled in when comments are listed
    formatted_date: Optional[str] = None

    def __setattr__(self, name, value):
        if name == 'user_id' and getattr(self, 'user_id', None):
            if value != self.user_id:
                raise AttributeError("Comment owner cannot be changed")
        super().__setattr__(name, value)
