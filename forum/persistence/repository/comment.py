"""PostgreSQL implementation of Comment repository."""

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId
from forum.persistence.mappers import row_to_comment
from forum.persistence.tables import comments_table

from .content import PostgresContentRepository


class PostgresCommentRepository(
    PostgresContentRepository[Comment, CommentId], CommentRepository
):
    """PostgreSQL implementation of CommentRepository."""

    table = comments_table
    row_to_model = staticmethod(row_to_comment)
