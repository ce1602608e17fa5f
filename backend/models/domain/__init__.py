"""
Domain Models - Storage-agnostic data structures

These models represent the core domain entities independent of storage layer.
Services operate on these models, not raw database rows.

Architecture:
- Domain models are pure Python objects (dataclasses)
- Storage details (PostgreSQL, in-memory) are abstracted via repositories
- Business logic operates on these models, not database rows
"""

from .theme import Theme
from .comment import Comment
from .article import Article
from .user import User, ADMIN_ROLE
from .viewer import Anonymous, Authenticated, Viewer, ANONYMOUS

__all__ = [
    'Theme',
    'Comment',
    'Article',
    'User',
    'ADMIN_ROLE',

    # Per-request viewer context
    'Anonymous',
    'Authenticated',
    'Viewer',
    'ANONYMOUS',
]
