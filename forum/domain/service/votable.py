"""Votable capability shared by every content kind that can receive votes."""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar
from uuid import UUID

import logfire

from forum.domain.error import ErrorCode, NotFoundError
from forum.domain.model.common import ContentModel
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import VotableType

from .base import Service

ModelT = TypeVar("ModelT", bound=ContentModel)
IdT = TypeVar("IdT", bound=UUID)


class Votable(ABC):
    """Capability interface the voting engine relies on for one content kind.

    An adapter that leaves any of these out cannot be instantiated.
    """

    votable_type: ClassVar[VotableType]

    @abstractmethod
    async def exists_or_fail(self, votable_id: UUID) -> None:
        """Ensure the item exists.

        Args:
            votable_id: ID of the item

        Raises:
            NotFoundError: If the item does not exist or was deleted
        """
        pass

    @abstractmethod
    async def get_vote_count(self, votable_id: UUID) -> int:
        """Read the item's stored vote count.

        Args:
            votable_id: ID of the item

        Raises:
            NotFoundError: If the item does not exist or was deleted
        """
        pass

    @abstractmethod
    async def apply_vote_count_delta(self, votable_id: UUID, delta: int) -> None:
        """Atomically add ``delta`` to the item's vote count.

        Args:
            votable_id: ID of the item
            delta: Signed adjustment

        Raises:
            NotFoundError: If the item disappeared before the update
        """
        pass


class ContentService(Service, Votable, Generic[ModelT, IdT]):
    """Votable implementation backed by a content repository.

    Each content kind subclasses this with its own tag, resource name
    and not-found error code.
    """

    resource: ClassVar[str]
    not_found_code: ClassVar[ErrorCode]

    def __init__(self, repository: VotableRepository[ModelT, IdT]) -> None:
        """Initialize content service.

        Args:
            repository: Repository for this content kind
        """
        self.repository = repository

    def _not_found(self, entity_id: UUID) -> NotFoundError:
        logfire.warn(
            f"{self.resource} not found",
            votable_type=self.votable_type.value,
            votable_id=str(entity_id),
        )
        return NotFoundError(self.resource, str(entity_id), code=self.not_found_code)

    async def get_by_id(self, entity_id: IdT) -> ModelT:
        """Get a live item by ID.

        Raises:
            NotFoundError: If the item does not exist or was deleted
        """
        entity = await self.repository.find_by_id(entity_id)
        if entity is None or entity.is_deleted:
            raise self._not_found(entity_id)
        return entity

    async def exists_or_fail(self, votable_id: UUID) -> None:
        if not await self.repository.exists(votable_id):  # type: ignore[arg-type]
            raise self._not_found(votable_id)

    async def get_vote_count(self, votable_id: UUID) -> int:
        vote_count = await self.repository.find_vote_count(votable_id)  # type: ignore[arg-type]
        if vote_count is None:
            raise self._not_found(votable_id)
        return vote_count

    async def apply_vote_count_delta(self, votable_id: UUID, delta: int) -> None:
        with logfire.span(
            "content_service.apply_vote_count_delta",
            votable_type=self.votable_type.value,
            votable_id=str(votable_id),
            delta=delta,
        ):
            updated = await self.repository.apply_vote_count_delta(
                votable_id,  # type: ignore[arg-type]
                delta,
            )
            if not updated:
                raise self._not_found(votable_id)
