"""In-memory comment repository for testing and local development."""

from typing import Iterable, Optional

from canopy.domain.model.comment import Comment
from canopy.domain.repository.comment import CommentRepository
from canopy.domain.value import CommentId, EntityId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository."""

    def __init__(self) -> None:
        self._comments: dict[tuple[EntityId, CommentId], Comment] = {}

    async def find_by_id(
        self, entity_id: EntityId, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment of an entity by ID."""
        return self._comments.get((entity_id, comment_id))

    async def find_by_entity(self, entity_id: EntityId) -> list[Comment]:
        """Find all comments of an entity, in insertion order."""
        return [c for (eid, _), c in self._comments.items() if eid == entity_id]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[(comment.entity_id, comment.id)] = comment
        return comment

    async def delete_many(
        self, entity_id: EntityId, comment_ids: Iterable[CommentId]
    ) -> int:
        """Delete comments of an entity."""
        deleted = 0
        for comment_id in comment_ids:
            if self._comments.pop((entity_id, comment_id), None) is not None:
                deleted += 1
        return deleted

    async def count_by_entity(self, entity_id: EntityId) -> int:
        """Count comments of an entity."""
        return sum(1 for eid, _ in self._comments if eid == entity_id)
