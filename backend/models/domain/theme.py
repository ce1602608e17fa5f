"""
Theme domain model
"""
from dataclasses import dataclass


@dataclass
class Theme:
    """
    Normalized topic tag shared by articles and user preferences.

    Storage: PostgreSQL (themes table, UNIQUE(name))

    ID format: th_xxxxxxxx, assigned by the repository on insert.
    Two themes are the same theme when their ids match; names are unique
    across the registry so the id is the identity used everywhere.
    """
    id: str
    name: str  # lowercase, already normalized by the theme registry
