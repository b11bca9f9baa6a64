"""Votable repository interface.

Every content table that carries a ``vote_count`` column exposes the same
small contract, so the voting engine can treat questions, answers,
articles and comments uniformly.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from forum.domain.model.common import ContentModel

ModelT = TypeVar("ModelT", bound=ContentModel)
IdT = TypeVar("IdT", bound=UUID)


class VotableRepository(ABC, Generic[ModelT, IdT]):
    """Repository for an entity kind that can receive votes.

    Defines the contract for content persistence and counter maintenance.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, entity_id: IdT) -> Optional[ModelT]:
        """Find an entity by ID, including soft-deleted ones.

        Args:
            entity_id: The entity's unique identifier

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, entity: ModelT) -> ModelT:
        """Save an entity (create or update).

        Args:
            entity: The entity to save

        Returns:
            The saved entity
        """
        pass

    @abstractmethod
    async def exists(self, entity_id: IdT) -> bool:
        """Check whether a live (not soft-deleted) entity exists.

        Args:
            entity_id: The entity's unique identifier

        Returns:
            True if the entity exists and is not deleted
        """
        pass

    @abstractmethod
    async def find_vote_count(self, entity_id: IdT) -> Optional[int]:
        """Read the denormalized vote counter of a live entity.

        Args:
            entity_id: The entity's unique identifier

        Returns:
            The stored vote count, or None if the entity does not exist
        """
        pass

    @abstractmethod
    async def apply_vote_count_delta(self, entity_id: IdT, delta: int) -> bool:
        """Atomically add ``delta`` to the entity's vote counter.

        Must execute as a single ``vote_count = vote_count + delta``
        statement at the storage layer, never read-modify-write.

        Args:
            entity_id: The entity's unique identifier
            delta: Signed adjustment to apply

        Returns:
            True if a row was updated, False if the entity does not exist
        """
        pass
