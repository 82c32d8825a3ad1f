"""Domain value objects for Canopy."""

from canopy.domain.value.identifiers import (
    CommentId,
    EntityId,
    UserId,
    normalize_id,
    normalize_optional_id,
)
from canopy.domain.value.mention import extract_mentions, segment_text
from canopy.domain.value.types import (
    CommentPath,
    ReplyNotification,
    SegmentKind,
    TextSegment,
)

__all__ = [
    # Identifiers
    "CommentId",
    "EntityId",
    "UserId",
    "normalize_id",
    "normalize_optional_id",
    # Mentions
    "extract_mentions",
    "segment_text",
    # Types
    "CommentPath",
    "ReplyNotification",
    "SegmentKind",
    "TextSegment",
]
