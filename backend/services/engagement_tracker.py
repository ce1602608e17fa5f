"""
Engagement Tracker - like toggling

Each call flips the viewer's like on an article: present -> removed,
absent -> added. Likes are a set of user ids, so a user can never be
counted twice. The flip is a single repository call scoped to one
(article, user) pair.
"""
import logging

from models.domain.article import Article
from models.domain.viewer import Authenticated, Viewer
from repositories.protocols import ArticleRepository
from .exceptions import IdentityRequired, NotFound

logger = logging.getLogger(__name__)


class EngagementTracker:

    def __init__(self, articles: ArticleRepository):
        self.articles = articles

    async def toggle_like(self, article_id: str, viewer: Viewer) -> Article:
        """
        Toggle the viewer's like on an article.

        Returns:
            Article in its post-toggle state

        Raises:
            IdentityRequired: viewer is anonymous
            NotFound: article does not exist
        """
        if not isinstance(viewer, Authenticated):
            raise IdentityRequired()

        user_id = viewer.user.user_id
        liked = await self.articles.toggle_like(article_id, user_id)
        logger.info(f"User {user_id} {'liked' if liked else 'unliked'} article {article_id}")

        article = await self.articles.get_by_id(article_id)
        if article is None:
            raise NotFound("article", article_id)
        return article
