"""PostgreSQL implementation of Comment repository."""

from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from canopy.domain.model import Comment
from canopy.domain.repository import CommentRepository
from canopy.domain.value import CommentId, EntityId
from canopy.persistence.mappers import comment_to_dict, row_to_comment
from canopy.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, entity_id: EntityId, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find a comment of an entity by ID."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.entity_id == entity_id)
            .where(comments_table.c.id == comment_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_entity(self, entity_id: EntityId) -> List[Comment]:
        """Find all comments of an entity."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.entity_id == entity_id)
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def delete_many(
        self, entity_id: EntityId, comment_ids: Iterable[CommentId]
    ) -> int:
        """Hard delete comments of an entity."""
        ids = list(comment_ids)
        if not ids:
            return 0
        stmt = (
            delete(comments_table)
            .where(comments_table.c.entity_id == entity_id)
            .where(comments_table.c.id.in_(ids))
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def count_by_entity(self, entity_id: EntityId) -> int:
        """Count comments of an entity."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.entity_id == entity_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
