"""Article entity."""

from pydantic import Field

from forum.domain.model.common import ContentModel
from forum.domain.value import ArticleId


class Article(ContentModel):
    """A long-form article published by a user."""

    id: ArticleId
    title: str = Field(min_length=2, max_length=80)
    content_markdown: str = ""
    content_rendered: str = ""
    comment_count: int = Field(default=0, ge=0)
    follower_count: int = Field(default=0, ge=0)
