"""Article domain service."""

from forum.domain.error import ErrorCode
from forum.domain.model.article import Article
from forum.domain.repository import ArticleRepository
from forum.domain.value import ArticleId, VotableType

from .votable import ContentService


class ArticleService(ContentService[Article, ArticleId]):
    """Domain service for article operations."""

    votable_type = VotableType.ARTICLE
    resource = "Article"
    not_found_code = ErrorCode.ARTICLE_NOT_FOUND

    def __init__(self, article_repository: ArticleRepository) -> None:
        """Initialize article service.

        Args:
            article_repository: Article repository
        """
        super().__init__(article_repository)
        self.article_repository = article_repository
