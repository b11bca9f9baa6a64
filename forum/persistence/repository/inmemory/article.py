"""In-memory article repository for testing."""

from forum.domain.model.article import Article
from forum.domain.repository.article import ArticleRepository
from forum.domain.value import ArticleId

from .content import InMemoryContentRepository


class InMemoryArticleRepository(
    InMemoryContentRepository[Article, ArticleId], ArticleRepository
):
    """In-memory implementation of ArticleRepository for testing."""
