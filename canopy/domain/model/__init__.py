"""Domain model entities for Canopy."""

from canopy.domain.model.comment import Comment, CommentNode
from canopy.domain.model.user import CurrentUser

__all__ = [
    "Comment",
    "CommentNode",
    "CurrentUser",
]
