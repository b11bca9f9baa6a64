"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, Username


class User(DomainModel):
    """User aggregate root.

    A user with ``disabled_at`` set has been disabled by a manager: they
    cannot act and are hidden from listings, but their past votes still
    count toward vote totals.
    """

    id: UserId
    username: Username
    email: str
    password_hash: str = ""
    avatar_url: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    follower_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    disabled_at: Optional[datetime] = None

    @property
    def is_disabled(self) -> bool:
        return self.disabled_at is not None
