"""Comment domain service."""

from forum.domain.error import ErrorCode
from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, VotableType

from .votable import ContentService


class CommentService(ContentService[Comment, CommentId]):
    """Domain service for comment operations."""

    votable_type = VotableType.COMMENT
    resource = "Comment"
    not_found_code = ErrorCode.COMMENT_NOT_FOUND

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        super().__init__(comment_repository)
        self.comment_repository = comment_repository
