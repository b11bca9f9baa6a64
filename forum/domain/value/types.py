"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject, ValueObject


class VoteType(str, Enum):
    """Direction of a stored vote.

    There is no "none" type: absence of a vote record means no vote.
    """

    UP = "up"
    DOWN = "down"

    @property
    def weight(self) -> int:
        """Contribution of one vote of this type to a vote count."""
        return 1 if self is VoteType.UP else -1


class Voting(str, Enum):
    """A viewer's current vote on an item, as shown in relationship blocks."""

    UP = "up"
    DOWN = "down"
    NONE = ""

    @classmethod
    def from_vote_type(cls, vote_type: VoteType) -> "Voting":
        return cls(vote_type.value)


class VotableType(str, Enum):
    """Type of entity that can be voted on.

    The value doubles as the storage tag written to ``votes.votable_type``.
    """

    QUESTION = "question"
    ANSWER = "answer"
    ARTICLE = "article"
    COMMENT = "comment"


class FollowableType(str, Enum):
    """Type of entity that can be followed."""

    USER = "user"
    QUESTION = "question"
    ARTICLE = "article"
    TOPIC = "topic"


class Username(RootValueObject[str]):
    """Public username shown next to a user's content."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty and within length limits."""
        if len(v) < 2 or len(v) > 20:
            raise ValueError("Username must be 2-20 characters")
        return v


class Relationship(ValueObject):
    """Per-viewer relationship block attached to a votable item in lists."""

    voting: Voting = Voting.NONE
    is_following: bool = False


class UserRelationship(ValueObject):
    """Per-viewer relationship block attached to a user in lists."""

    is_me: bool = False
    is_following: bool = False
    is_followed: bool = False
