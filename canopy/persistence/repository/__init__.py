"""PostgreSQL repository implementations."""

from canopy.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresCommentRepository",
]
