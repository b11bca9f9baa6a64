"""Article repository interface."""

from forum.domain.model.article import Article
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import ArticleId


class ArticleRepository(VotableRepository[Article, ArticleId]):
    """Repository for Article entity."""
