"""Domain value objects for Canopy.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, RootModel, field_validator


class ValueObject(BaseModel):
    """Immutable value compared by its fields."""

    model_config = ConfigDict(frozen=True)


class SegmentKind(str, Enum):
    """Kind of a rendered text segment."""

    PLAIN = "plain"
    MENTION = "mention"


class TextSegment(ValueObject):
    """A run of comment text, tagged plain or mention."""

    kind: SegmentKind
    text: str


class CommentPath(RootModel[str]):
    """Render-time address of a comment in a thread.

    Dash-joined zero-based sibling indices from the root list:
    '2' is the third root, '2-0' its first reply, '2-0-1' the second reply
    to that reply. Paths are recomputed on every render and are not stable
    across inserts or deletes.
    """

    model_config = ConfigDict(frozen=True)

    @field_validator("root")
    @classmethod
    def validate_path_format(cls, v: str) -> str:
        """Validate path is dash-separated non-negative integers."""
        if not re.fullmatch(r"\d+(?:-\d+)*", v):
            raise ValueError(
                "Path must be dash-separated non-negative integers, e.g. '0-2-1'"
            )
        return v

    def __str__(self) -> str:
        return self.root

    @classmethod
    def from_indices(cls, indices: tuple[int, ...] | list[int]) -> "CommentPath":
        """Build a path from sibling indices."""
        return cls("-".join(str(i) for i in indices))

    @property
    def indices(self) -> tuple[int, ...]:
        """Sibling indices from the root."""
        return tuple(int(part) for part in self.root.split("-"))

    @property
    def depth(self) -> int:
        """Depth of the addressed node (root = 0)."""
        return len(self.indices) - 1

    def child(self, index: int) -> "CommentPath":
        """Path of this node's reply at ``index``."""
        return CommentPath(f"{self.root}-{index}")


class ReplyNotification(ValueObject):
    """Event emitted when someone replies to another user's comment."""

    recipient_id: str
    actor_name: str
    actor_id: str | None = None
    entity_id: str
    comment_id: str
    parent_comment_id: str

    @property
    def message(self) -> str:
        """Human readable notification title."""
        return f"{self.actor_name} replied to your comment"
