"""Domain model entities for the forum."""

from forum.domain.model.answer import Answer
from forum.domain.model.article import Article
from forum.domain.model.comment import Comment
from forum.domain.model.common import ContentModel, DomainModel
from forum.domain.model.follow import Follow
from forum.domain.model.question import Question
from forum.domain.model.user import User
from forum.domain.model.vote import Vote

__all__ = [
    "DomainModel",
    "ContentModel",
    "User",
    "Question",
    "Answer",
    "Article",
    "Comment",
    "Vote",
    "Follow",
]
