"""Comment entity.

Comments attach polymorphically to questions, answers and articles.
"""

from uuid import UUID

from pydantic import Field

from forum.domain.model.common import ContentModel
from forum.domain.value import CommentId


class Comment(ContentModel):
    """A comment on a question, answer or article."""

    id: CommentId
    commentable_type: str  # question, answer or article
    commentable_id: UUID
    content: str = Field(min_length=1, max_length=1000)
