"""Answer entity."""

from pydantic import Field

from forum.domain.model.common import ContentModel
from forum.domain.value import AnswerId, QuestionId


class Answer(ContentModel):
    """An answer to a question."""

    id: AnswerId
    question_id: QuestionId
    content_markdown: str = ""
    content_rendered: str = ""
    comment_count: int = Field(default=0, ge=0)
