"""Answer domain service."""

from forum.domain.error import ErrorCode
from forum.domain.model.answer import Answer
from forum.domain.repository import AnswerRepository
from forum.domain.value import AnswerId, VotableType

from .votable import ContentService


class AnswerService(ContentService[Answer, AnswerId]):
    """Domain service for answer operations."""

    votable_type = VotableType.ANSWER
    resource = "Answer"
    not_found_code = ErrorCode.ANSWER_NOT_FOUND

    def __init__(self, answer_repository: AnswerRepository) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
        """
        super().__init__(answer_repository)
        self.answer_repository = answer_repository
