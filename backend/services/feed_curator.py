"""
Feed Curator

Builds the article feed for one viewer. Pipeline, in this order:

1. Newest first (stable for equal timestamps)
2. Authenticated viewers: drop articles carrying any forbidden theme
3. Authenticated viewers: stable re-sort by number of preferred themes,
   so equal scores keep the newest-first order from step 1
4. Everyone: keep only articles younger than 24 hours (strict)

Themes are compared by id, never by name. Pure apart from setting
``formatted_date`` on the returned articles.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Set

from models.domain.article import Article
from models.domain.viewer import Anonymous, Authenticated, Viewer
from utils.datetime_utils import DISPLAY_DATE_FORMAT, format_display_date

logger = logging.getLogger(__name__)

FEED_WINDOW = timedelta(hours=24)


def sort_by_recency(articles: Iterable[Article]) -> List[Article]:
    # reverse=True keeps equal timestamps in their original order
    return sorted(articles, key=lambda article: article.created_at, reverse=True)


def exclude_forbidden(articles: Iterable[Article], forbidden_ids: Set[str]) -> List[Article]:
    if not forbidden_ids:
        return list(articles)
    return [article for article in articles if forbidden_ids.isdisjoint(article.theme_ids)]


def preference_score(article: Article, preferred_ids: Set[str]) -> int:
    """Number of preferred themes the article carries"""
    if not article.themes:
        return 0
    return len(preferred_ids & article.theme_ids)


def rank_by_preference(articles: Iterable[Article], preferred_ids: Set[str]) -> List[Article]:
    return sorted(
        articles,
        key=lambda article: preference_score(article, preferred_ids),
        reverse=True,
    )


def within_window(articles: Iterable[Article], now: datetime) -> List[Article]:
    return [article for article in articles if now - article.created_at < FEED_WINDOW]


def curate(
    articles: Iterable[Article],
    viewer: Viewer,
    now: datetime,
    date_format: str = DISPLAY_DATE_FORMAT,
) -> List[Article]:
    """
    Order, filter and window articles for a viewer.

    Args:
        articles: Every article in the store
        viewer: Anonymous() or Authenticated(user)
        now: Reference time for the 24h window
        date_format: Pattern for ``formatted_date``

    Returns:
        Feed articles, best first
    """
    feed = sort_by_recency(articles)

    if isinstance(viewer, Authenticated):
        user = viewer.user
        before = len(feed)
        feed = exclude_forbidden(feed, user.forbidden_theme_ids)
        feed = rank_by_preference(feed, user.preferred_theme_ids)
        logger.debug(f"Feed for {user.user_id}: {before - len(feed)} articles hidden by forbidden themes")
    elif not isinstance(viewer, Anonymous):
        raise TypeError(f"Unknown viewer context: {viewer!r}")

    feed = within_window(feed, now)

    for article in feed:
        article.formatted_date = format_display_date(article.created_at, date_format)

    return feed
