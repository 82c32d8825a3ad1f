"""Domain services."""

from .comment_service import CommentService
from .comment_tree import DisplayPolicy
from .jwt_service import JWTService
from .notification import NotificationDispatcher, NotificationSink

__all__ = [
    "CommentService",
    "DisplayPolicy",
    "JWTService",
    "NotificationDispatcher",
    "NotificationSink",
]
