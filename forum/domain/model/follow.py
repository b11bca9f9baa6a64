"""Follow entity."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import FollowableType, FollowId, UserId


class Follow(DomainModel):
    """A user following a user, question, article or topic."""

    id: FollowId
    user_id: UserId
    followable_type: FollowableType
    followable_id: UUID
    created_at: datetime = Field(default_factory=datetime.now)
