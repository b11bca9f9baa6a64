"""Comment repository interface."""

from forum.domain.model.comment import Comment
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import CommentId


class CommentRepository(VotableRepository[Comment, CommentId]):
    """Repository for Comment entity."""
