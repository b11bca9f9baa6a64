"""Question entity."""

from pydantic import Field

from forum.domain.model.common import ContentModel
from forum.domain.value import QuestionId


class Question(ContentModel):
    """A question asked by a user, answered through answers."""

    id: QuestionId
    title: str = Field(min_length=2, max_length=80)
    content_markdown: str = ""
    content_rendered: str = ""
    answer_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    follower_count: int = Field(default=0, ge=0)
