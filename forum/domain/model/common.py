"""Base models for all domain entities."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from forum.domain.value import UserId


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class ContentModel(DomainModel):
    """User-authored content that carries a denormalized vote counter.

    ``vote_count`` is signed and unbounded: up votes minus down votes.
    It is only ever changed through relative deltas at the storage layer.
    """

    user_id: UserId
    vote_count: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
