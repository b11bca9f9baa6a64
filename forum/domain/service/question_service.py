"""Question domain service."""

from forum.domain.error import ErrorCode
from forum.domain.model.question import Question
from forum.domain.repository import QuestionRepository
from forum.domain.value import QuestionId, VotableType

from .votable import ContentService


class QuestionService(ContentService[Question, QuestionId]):
    """Domain service for question operations."""

    votable_type = VotableType.QUESTION
    resource = "Question"
    not_found_code = ErrorCode.QUESTION_NOT_FOUND

    def __init__(self, question_repository: QuestionRepository) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
        """
        super().__init__(question_repository)
        self.question_repository = question_repository
