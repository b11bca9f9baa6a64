"""In-memory comment repository for testing."""

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId

from .content import InMemoryContentRepository


class InMemoryCommentRepository(
    InMemoryContentRepository[Comment, CommentId], CommentRepository
):
    """In-memory implementation of CommentRepository for testing."""
