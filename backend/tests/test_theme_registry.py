"""
Tests for theme normalization and find-or-create.
"""

import pytest

from models.domain.theme import Theme
from repositories.memory import InMemoryThemeRepository
from services.exceptions import ConcurrencyConflict
from services.theme_registry import ThemeRegistry, normalize_theme_names


class TestNormalization:

    def test_duplicates_collapse(self):
        assert normalize_theme_names("Sport, Sport!! Politics") == ["sport", "politics"]

    def test_cyrillic_and_digits_are_kept(self):
        assert normalize_theme_names("Спорт; ПОЛИТИКА / 2024") == ["спорт", "политика", "2024"]

    def test_yo_is_a_letter(self):
        assert normalize_theme_names("Ёлка, ЁЖ; ещё") == ["ёлка", "ёж", "ещё"]

    def test_separators_only(self):
        assert normalize_theme_names("  ,,; !! ") == []

    @pytest.mark.parametrize("raw", ["", None])
    def test_blank_input(self, raw):
        assert normalize_theme_names(raw) == []

    def test_underscore_and_hyphen_split(self):
        assert normalize_theme_names("world_cup-final") == ["world", "cup", "final"]


class RacingThemeRepository(InMemoryThemeRepository):
    """Misses the first lookup, as if another request inserted the row meanwhile"""

    def __init__(self, store):
        super().__init__(store)
        self.missed = False

    async def get_by_name(self, name):
        if not self.missed:
            self.missed = True
            return None
        return await super().get_by_name(name)


class VanishingThemeRepository(InMemoryThemeRepository):

    async def get_by_name(self, name):
        return None

    async def insert(self, theme):
        raise ConcurrencyConflict("duplicate")


class TestResolveThemes:

    async def test_creates_missing_themes(self, repos, store):
        registry = ThemeRegistry(repos.themes)

        themes = await registry.resolve_themes("Sport, Sport!! Politics")

        assert [t.name for t in themes] == ["sport", "politics"]
        assert all(t.id.startswith("th_") for t in themes)
        assert len(store.themes) == 2

    async def test_idempotent(self, repos, store):
        registry = ThemeRegistry(repos.themes)

        first = await registry.resolve_themes("economy science")
        second = await registry.resolve_themes("Science, ECONOMY")

        assert {t.id for t in first} == {t.id for t in second}
        assert sorted(t.name for t in store.themes.values()) == ["economy", "science"]

    async def test_reuses_existing_theme(self, repos, store, theme):
        existing = theme("sport")
        registry = ThemeRegistry(repos.themes)

        themes = await registry.resolve_themes("sport")

        assert themes == [existing]
        assert len(store.themes) == 1

    async def test_blank_text_resolves_to_nothing(self, repos, store):
        assert await ThemeRegistry(repos.themes).resolve_themes("  ") == []
        assert store.themes == {}

    async def test_racing_insert_falls_back_to_stored_row(self, store, theme):
        existing = theme("sport")
        registry = ThemeRegistry(RacingThemeRepository(store))

        themes = await registry.resolve_themes("sport")

        assert themes == [existing]
        assert len(store.themes) == 1

    async def test_missing_after_conflict_is_an_error(self, store):
        registry = ThemeRegistry(VanishingThemeRepository(store))

        with pytest.raises(ConcurrencyConflict):
            await registry.resolve_themes("sport")


async def test_store_rejects_duplicate_names(repos):
    await repos.themes.insert(Theme(id="", name="sport"))

    with pytest.raises(ConcurrencyConflict):
        await repos.themes.insert(Theme(id="", name="sport"))
