"""
Tests for like toggling.
"""

import asyncio

import pytest

from models.domain.viewer import ANONYMOUS, Authenticated
from repositories.memory import InMemoryArticleRepository
from services.comment_service import CommentService
from services.engagement_tracker import EngagementTracker
from services.exceptions import IdentityRequired, NotFound


class YieldingArticleRepository(InMemoryArticleRepository):
    """Lets other tasks run between reading an article and writing it back"""

    async def get_by_id(self, article_id):
        article = await super().get_by_id(article_id)
        await asyncio.sleep(0)
        return article


async def test_first_toggle_likes(engagement, article, user):
    stored = article("Story")
    reader = Authenticated(user("reader@example.com"))

    liked = await engagement.toggle_like(stored.id, reader)

    assert liked.likes == {reader.user.user_id}
    assert liked.is_liked_by(reader.user.user_id)


async def test_toggle_twice_restores_likers(engagement, article, user):
    stored = article("Story")
    alice = Authenticated(user("alice@example.com"))
    bob = Authenticated(user("bob@example.com"))
    await engagement.toggle_like(stored.id, alice)

    await engagement.toggle_like(stored.id, bob)
    restored = await engagement.toggle_like(stored.id, bob)

    assert restored.likes == {alice.user.user_id}
    assert restored.like_count == 1


async def test_toggle_is_persisted(engagement, repos, article, user):
    stored = article("Story")
    reader = Authenticated(user("reader@example.com"))

    await engagement.toggle_like(stored.id, reader)

    assert (await repos.articles.get_by_id(stored.id)).likes == {reader.user.user_id}


async def test_anonymous_cannot_like(engagement, article):
    stored = article("Story")

    with pytest.raises(IdentityRequired):
        await engagement.toggle_like(stored.id, ANONYMOUS)


async def test_missing_article(engagement, user):
    reader = Authenticated(user("reader@example.com"))

    with pytest.raises(NotFound):
        await engagement.toggle_like("ar_missing0", reader)


class TestConcurrentWriters:

    async def test_likes_by_different_users_both_kept(self, store, repos, article, user):
        stored = article("Story")
        alice = Authenticated(user("alice@example.com"))
        bob = Authenticated(user("bob@example.com"))
        tracker = EngagementTracker(YieldingArticleRepository(store))

        await asyncio.gather(
            tracker.toggle_like(stored.id, alice),
            tracker.toggle_like(stored.id, bob),
        )

        likes = (await repos.articles.get_by_id(stored.id)).likes
        assert likes == {alice.user.user_id, bob.user.user_id}

    async def test_comment_append_keeps_concurrent_like(self, store, repos, clock, article, user):
        stored = article("Story")
        writer = Authenticated(user("writer@example.com"))
        fan = Authenticated(user("fan@example.com"))
        slow = YieldingArticleRepository(store)
        comments = CommentService(slow, repos.comments, clock=clock)

        await asyncio.gather(
            comments.append(stored.id, "nice", writer),
            EngagementTracker(slow).toggle_like(stored.id, fan),
        )

        final = await repos.articles.get_by_id(stored.id)
        assert final.likes == {fan.user.user_id}
        assert [c.text for c in final.comments] == ["nice"]

    async def test_article_edit_keeps_stored_likes(self, article_service, engagement, article, user):
        stored = article("Story")
        fan = Authenticated(user("fan@example.com"))
        stale = await article_service.get(stored.id)
        await engagement.toggle_like(stored.id, fan)

        stale.header = "Edited"
        saved = await article_service.articles.update(stale)

        assert saved.header == "Edited"
        assert saved.likes == {fan.user.user_id}
