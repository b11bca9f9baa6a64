"""PostgreSQL implementation of Answer repository."""

from forum.domain.model import Answer
from forum.domain.repository import AnswerRepository
from forum.domain.value import AnswerId
from forum.persistence.mappers import row_to_answer
from forum.persistence.tables import answers_table

from .content import PostgresContentRepository


class PostgresAnswerRepository(
    PostgresContentRepository[Answer, AnswerId], AnswerRepository
):
    """PostgreSQL implementation of AnswerRepository."""

    table = answers_table
    row_to_model = staticmethod(row_to_answer)
