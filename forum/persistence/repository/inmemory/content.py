"""In-memory content repository base for testing."""

from typing import Optional
from uuid import UUID

from forum.domain.repository.votable import IdT, ModelT, VotableRepository


class InMemoryContentRepository(VotableRepository[ModelT, IdT]):
    """In-memory implementation of VotableRepository for testing."""

    def __init__(self) -> None:
        self._entities: dict[UUID, ModelT] = {}

    async def find_by_id(self, entity_id: IdT) -> Optional[ModelT]:
        """Find an entity by ID, including soft-deleted ones."""
        return self._entities.get(entity_id)

    async def save(self, entity: ModelT) -> ModelT:
        """Save or update an entity, keeping the stored vote count."""
        existing = self._entities.get(entity.id)  # type: ignore[attr-defined]
        if existing is not None:
            entity = entity.model_copy(update={"vote_count": existing.vote_count})
        self._entities[entity.id] = entity  # type: ignore[attr-defined]
        return entity

    async def exists(self, entity_id: IdT) -> bool:
        """Check whether a live entity exists."""
        entity = self._entities.get(entity_id)
        return entity is not None and not entity.is_deleted

    async def find_vote_count(self, entity_id: IdT) -> Optional[int]:
        """Read the vote counter of a live entity."""
        entity = self._entities.get(entity_id)
        if entity is None or entity.is_deleted:
            return None
        return entity.vote_count

    async def apply_vote_count_delta(self, entity_id: IdT, delta: int) -> bool:
        """Add ``delta`` to the entity's vote counter."""
        entity = self._entities.get(entity_id)
        if entity is None:
            return False
        self._entities[entity_id] = entity.model_copy(
            update={"vote_count": entity.vote_count + delta}
        )
        return True

    def snapshot(self) -> dict[UUID, ModelT]:
        """Copy of the current store, for unit-of-work rollback."""
        return dict(self._entities)

    def restore(self, snapshot: dict[UUID, ModelT]) -> None:
        self._entities = dict(snapshot)
