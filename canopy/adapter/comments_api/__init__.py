"""Client for the comments REST API."""

from .client import CommentApiClient
from .feed import CommentFeed, Notice

__all__ = [
    "CommentApiClient",
    "CommentFeed",
    "Notice",
]
