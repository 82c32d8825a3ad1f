"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from canopy.domain.model.comment import Comment
from canopy.domain.value import CommentId, EntityId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Holds the single source of truth for an entity's comments: one flat,
    unordered collection per entity. Implementations live in the
    persistence layer.
    """

    @abstractmethod
    async def find_by_id(
        self, entity_id: EntityId, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment of an entity by ID.

        Args:
            entity_id: The entity the comment belongs to
            comment_id: The comment's identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_entity(self, entity_id: EntityId) -> List[Comment]:
        """Find all comments of an entity.

        No ordering is guaranteed; thread order is derived by the tree
        reconstruction.

        Args:
            entity_id: The entity ID

        Returns:
            Flat list of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_many(
        self, entity_id: EntityId, comment_ids: Iterable[CommentId]
    ) -> int:
        """Hard delete comments of an entity.

        Args:
            entity_id: The entity ID
            comment_ids: IDs to delete

        Returns:
            Number of comments actually deleted
        """
        pass

    @abstractmethod
    async def count_by_entity(self, entity_id: EntityId) -> int:
        """Count comments of an entity.

        Args:
            entity_id: The entity ID

        Returns:
            Number of comments
        """
        pass
