"""PostgreSQL implementation of Question repository."""

from forum.domain.model import Question
from forum.domain.repository import QuestionRepository
from forum.domain.value import QuestionId
from forum.persistence.mappers import row_to_question
from forum.persistence.tables import questions_table

from .content import PostgresContentRepository


class PostgresQuestionRepository(
    PostgresContentRepository[Question, QuestionId], QuestionRepository
):
    """PostgreSQL implementation of QuestionRepository."""

    table = questions_table
    row_to_model = staticmethod(row_to_question)
