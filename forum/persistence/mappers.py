"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from forum.domain.model import (
    Answer,
    Article,
    Comment,
    Follow,
    Question,
    User,
    Vote,
)
from forum.domain.value import (
    AnswerId,
    ArticleId,
    CommentId,
    FollowableType,
    FollowId,
    QuestionId,
    UserId,
    Username,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    """Normalize a UUID column value (drivers may hand back strings)."""
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        email=row["email"],
        password_hash=row.get("password_hash") or "",
        avatar_url=row.get("avatar_url"),
        headline=row.get("headline"),
        bio=row.get("bio"),
        follower_count=row.get("follower_count", 0),
        following_count=row.get("following_count", 0),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        disabled_at=row.get("disabled_at"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model."""
    return Question(
        id=QuestionId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        title=row["title"],
        content_markdown=row["content_markdown"],
        content_rendered=row["content_rendered"],
        answer_count=row["answer_count"],
        comment_count=row["comment_count"],
        follower_count=row["follower_count"],
        vote_count=row["vote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        content_markdown=row["content_markdown"],
        content_rendered=row["content_rendered"],
        comment_count=row["comment_count"],
        vote_count=row["vote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def row_to_article(row: Dict[str, Any]) -> Article:
    """Convert database row to Article domain model."""
    return Article(
        id=ArticleId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        title=row["title"],
        content_markdown=row["content_markdown"],
        content_rendered=row["content_rendered"],
        comment_count=row["comment_count"],
        follower_count=row["follower_count"],
        vote_count=row["vote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        commentable_type=row["commentable_type"],
        commentable_id=_uuid(row["commentable_id"]),
        user_id=UserId(_uuid(row["user_id"])),
        content=row["content"],
        vote_count=row["vote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def content_to_dict(entity: Question | Answer | Article | Comment) -> Dict[str, Any]:
    """Convert a content domain model to a database dict."""
    return entity.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        type=VoteType(row["type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Enum columns are written as their plain string tags.
    """
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "type": vote.type.value,
        "created_at": vote.created_at,
    }


def row_to_follow(row: Dict[str, Any]) -> Follow:
    """Convert database row to Follow domain model."""
    return Follow(
        id=FollowId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        followable_type=FollowableType(row["followable_type"]),
        followable_id=_uuid(row["followable_id"]),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    """Convert Follow domain model to database dict."""
    return {
        "id": follow.id,
        "user_id": follow.user_id,
        "followable_type": follow.followable_type.value,
        "followable_id": follow.followable_id,
        "created_at": follow.created_at,
    }
