"""Vote entity.

Votes are the ledger behind every item's vote count. Each user can hold
at most one vote per item (question, answer, article or comment).
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VotableType, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Up or down; retracting a vote deletes the record
    - ``created_at`` is refreshed when the direction flips
    - Polymorphic reference to the votable (storage tag + UUID)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID
    type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
