"""
Comment Thread Service

Comments live inside their article: new comments are appended to the
article and saved through the article update path. Listing returns None
for a missing article and [] for an article without comments; callers
rely on the difference.
"""
import logging
from typing import TYPE_CHECKING, List, Optional

from models.domain.article import Article
from models.domain.comment import Comment
from models.domain.viewer import Authenticated, Viewer
from repositories.protocols import ArticleRepository, CommentRepository
from utils.datetime_utils import DISPLAY_DATE_FORMAT, Clock, format_display_date, utcnow
from .exceptions import IdentityRequired, NotFound

if TYPE_CHECKING:
    from repositories import Repositories

logger = logging.getLogger(__name__)


class CommentService:

    def __init__(
        self,
        articles: ArticleRepository,
        comments: CommentRepository,
        clock: Clock = utcnow,
        date_format: str = DISPLAY_DATE_FORMAT,
    ):
        self.articles = articles
        self.comments = comments
        self.clock = clock
        self.date_format = date_format

    def bind(self, repos: "Repositories") -> "CommentService":
        """Same service over another set of repositories (e.g. inside a transaction)"""
        return CommentService(
            repos.articles,
            repos.comments,
            clock=self.clock,
            date_format=self.date_format,
        )

    async def append(self, article_id: str, text: str, viewer: Viewer) -> Article:
        """
        Add a comment by the viewer to an article.

        Returns:
            The article with the new comment attached

        Raises:
            NotFound: article does not exist
            IdentityRequired: viewer is anonymous
        """
        article = await self.articles.get_by_id(article_id)
        if article is None:
            raise NotFound("article", article_id)

        if not isinstance(viewer, Authenticated):
            raise IdentityRequired()

        article.comments.append(Comment(
            id="",
            text=text,
            user_id=viewer.user.user_id,
            article_id=article.id,
            created_at=self.clock(),
        ))

        article = await self.articles.update(article)
        logger.info(f"User {viewer.user.user_id} commented on article {article_id}")
        return article

    async def list_by_article(self, article_id: str) -> Optional[List[Comment]]:
        """
        Comments of an article, newest first.

        Returns:
            None if the article does not exist, otherwise a (possibly empty) list
        """
        article = await self.articles.get_by_id(article_id)
        if article is None:
            return None

        comments = sorted(article.comments, key=lambda c: c.created_at, reverse=True)
        for comment in comments:
            comment.formatted_date = format_display_date(comment.created_at, self.date_format)
        return comments

    async def delete_by_id(self, comment_id: str) -> None:
        """
        Raises:
            NotFound: comment does not exist
        """
        comment = await self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFound("comment", comment_id)

        await self.comments.delete_by_id(comment_id)
