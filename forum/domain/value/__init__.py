"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    AnswerId,
    ArticleId,
    CommentId,
    FollowId,
    QuestionId,
    TopicId,
    UserId,
    VoteId,
)
from forum.domain.value.pagination import Page, PageInfo, PageRequest
from forum.domain.value.types import (
    FollowableType,
    Relationship,
    Username,
    UserRelationship,
    VotableType,
    VoteType,
    Voting,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "ArticleId",
    "CommentId",
    "TopicId",
    "VoteId",
    "FollowId",
    # Types
    "VoteType",
    "Voting",
    "VotableType",
    "FollowableType",
    "Username",
    "Relationship",
    "UserRelationship",
    # Pagination
    "Page",
    "PageInfo",
    "PageRequest",
]
