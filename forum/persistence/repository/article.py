"""PostgreSQL implementation of Article repository."""

from forum.domain.model import Article
from forum.domain.repository import ArticleRepository
from forum.domain.value import ArticleId
from forum.persistence.mappers import row_to_article
from forum.persistence.tables import articles_table

from .content import PostgresContentRepository


class PostgresArticleRepository(
    PostgresContentRepository[Article, ArticleId], ArticleRepository
):
    """PostgreSQL implementation of ArticleRepository."""

    table = articles_table
    row_to_model = staticmethod(row_to_article)
