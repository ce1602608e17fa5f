"""
Theme Registry

Turns free-text theme input ("Sport, Sport!! Politics") into stored Theme
references, creating themes the first time a name is seen.

Names are lowercase tokens of Latin letters, Cyrillic letters (ё included)
and digits; everything else separates tokens.

Concurrency: two requests can see the same new name at once. Both try the
insert, the themes.name unique constraint rejects one, and both then read
the row back by name. The re-read is what gets returned, never the insert
result, so every caller ends up referencing the single stored row.
"""
import logging
import re
from typing import List

from models.domain.theme import Theme
from repositories.protocols import ThemeRepository
from .exceptions import ConcurrencyConflict

logger = logging.getLogger(__name__)

THEME_SEPARATOR = re.compile(r"[^a-zа-яё0-9]+")


def normalize_theme_names(raw_text: str) -> List[str]:
    """
    Split raw theme text into unique normalized names.

    First-seen order is kept so results are deterministic.

    >>> normalize_theme_names("Sport, Sport!! Politics")
    ['sport', 'politics']
    """
    tokens = THEME_SEPARATOR.split((raw_text or "").lower())
    return list(dict.fromkeys(token for token in tokens if token))


class ThemeRegistry:
    """Find-or-create themes by normalized name"""

    def __init__(self, themes: ThemeRepository):
        self.themes = themes

    async def resolve_themes(self, raw_text: str) -> List[Theme]:
        """
        Resolve raw theme text to stored themes.

        Args:
            raw_text: Free text as typed by the editor

        Returns:
            Unique themes in first-seen order (empty for blank input)
        """
        resolved = []
        for name in normalize_theme_names(raw_text):
            resolved.append(await self._get_or_create(name))
        return resolved

    async def _get_or_create(self, name: str) -> Theme:
        theme = await self.themes.get_by_name(name)
        if theme is not None:
            return theme

        try:
            await self.themes.insert(Theme(id="", name=name))
        except ConcurrencyConflict:
            logger.info(f"Theme '{name}' was created concurrently, using existing row")

        theme = await self.themes.get_by_name(name)
        if theme is None:
            raise ConcurrencyConflict(f"Theme '{name}' vanished after insert")
        return theme
