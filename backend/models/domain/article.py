"""
Article domain model
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Set

from .comment import Comment
from .theme import Theme


@dataclass
class Article:
    """
    Article domain model - storage-agnostic representation

    Storage: PostgreSQL
    - articles: header, content, image, date
    - article_themes: many-to-many with themes
    - article_likes: (article_id, user_id) pairs
    - comments: owned, deleted before the article

    ID format: ar_xxxxxxxx (assigned by the repository on insert)
    """
    id: str
    header: str
    content: str
    image_url: Optional[str] = None

    created_at: Optional[datetime] = None

    themes: List[Theme] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    likes: Set[str] = field(default_factory=set)  # user ids

    # Presentation only, filled in by the feed
    formatted_date: Optional[str] = None

    @property
    def theme_ids(self) -> Set[str]:
        return {theme.id for theme in self.themes}

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_liked_by(self, user_id: str) -> bool:
        return user_id in self.likes
