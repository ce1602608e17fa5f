"""
User domain model
"""
from dataclasses import dataclass, field
from typing import List, Optional, Set

from .theme import Theme

ADMIN_ROLE = "ROLE_ADMIN"


@dataclass
class User:
    """
    User domain model - storage-agnostic representation

    Storage: PostgreSQL (users, user_preferred_themes, user_forbidden_themes)

    Accounts are managed elsewhere; this service only reads users and
    their theme preferences.

    Note: Users keep UUID format (not short IDs like articles/comments)
    """
    user_id: str  # UUID format
    email: str
    name: Optional[str] = None

    # Theme preferences
    prefer: List[Theme] = field(default_factory=list)
    forbid: List[Theme] = field(default_factory=list)

    roles: Set[str] = field(default_factory=set)

    @property
    def preferred_theme_ids(self) -> Set[str]:
        return {theme.id for theme in self.prefer}

    @property
    def forbidden_theme_ids(self) -> Set[str]:
        return {theme.id for theme in self.forbid}

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles
