"""
Article Lifecycle Manager

Create, update, fetch and delete articles, plus the personalized feed.

- create/update run raw theme text through the ThemeRegistry; an update
  replaces header, content, image, date and the whole theme list
- delete removes every owned comment first, one by one, then the article,
  all in one unit-of-work transaction. Any failing step aborts the call and
  rolls the whole cascade back.
"""
import logging
from typing import List

from models.domain.article import Article
from models.domain.viewer import Viewer
from repositories.protocols import ArticleRepository, UnitOfWork
from utils.datetime_utils import DISPLAY_DATE_FORMAT, Clock, format_display_date, utcnow
from .comment_service import CommentService
from .exceptions import NotFound
from .feed_curator import curate
from .theme_registry import ThemeRegistry

logger = logging.getLogger(__name__)


class ArticleService:

    def __init__(
        self,
        articles: ArticleRepository,
        theme_registry: ThemeRegistry,
        comment_service: CommentService,
        unit_of_work: UnitOfWork,
        clock: Clock = utcnow,
        date_format: str = DISPLAY_DATE_FORMAT,
    ):
        self.articles = articles
        self.theme_registry = theme_registry
        self.comment_service = comment_service
        self.unit_of_work = unit_of_work
        self.clock = clock
        self.date_format = date_format

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def list_feed(self, viewer: Viewer) -> List[Article]:
        """Personalized feed for the viewer (see feed_curator)"""
        articles = await self.articles.list_all()
        return curate(articles, viewer, self.clock(), self.date_format)

    async def get(self, article_id: str) -> Article:
        article = await self.articles.get_by_id(article_id)
        if article is None:
            raise NotFound("article", article_id)

        article.formatted_date = format_display_date(article.created_at, self.date_format)
        return article

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, header: str, content: str, image_url: str, raw_themes: str) -> Article:
        themes = await self.theme_registry.resolve_themes(raw_themes)

        article = Article(
            id="",
            header=header,
            content=content,
            image_url=image_url,
            created_at=self.clock(),
            themes=themes,
        )
        return await self.articles.insert(article)

    async def update(
        self,
        article_id: str,
        header: str,
        content: str,
        image_url: str,
        raw_themes: str,
    ) -> Article:
        article = await self.articles.get_by_id(article_id)
        if article is None:
            raise NotFound("article", article_id)

        article.header = header
        article.content = content
        article.image_url = image_url
        article.created_at = self.clock()
        article.themes = await self.theme_registry.resolve_themes(raw_themes)

        return await self.articles.update(article)

    async def delete(self, article_id: str) -> None:
        """
        Delete an article together with its comments.

        Raises:
            NotFound: article does not exist
        """
        async with self.unit_of_work.transaction() as repos:
            article = await repos.articles.get_by_id(article_id)
            if article is None:
                raise NotFound("article", article_id)

            comments = self.comment_service.bind(repos)
            for comment in article.comments:
                await comments.delete_by_id(comment.id)

            if article.comments:
                logger.info(f"Deleted {len(article.comments)} comments of article {article_id}")

            await repos.articles.delete_by_id(article_id)
