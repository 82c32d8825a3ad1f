"""Repository interfaces for the Canopy domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from canopy.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
