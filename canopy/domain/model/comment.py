"""Comment entity.

Comments are stored flat, each with an optional parent reference. The nested
thread is a derived view (see ``CommentNode``) rebuilt on every read and never
persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from canopy.domain.model.common import DomainModel
from canopy.domain.value import (
    CommentId,
    EntityId,
    UserId,
    extract_mentions,
    normalize_id,
    normalize_optional_id,
)
from canopy.util.time import normalize_timestamp, utc_now


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on an entity (article, post, pitch or idea) or a
    reply to another comment.

    - id / parent_id: always strings; numeric ids are normalized on input
    - parent_id: None is the only "no parent" value ('' maps to None, 0 does not)
    - author_id: None for legacy comments posted before ids were recorded
    - created_at: unusable dates are replaced by a placeholder one month old
    - mentions: always derived from text, input values are ignored
    """

    id: CommentId
    entity_id: EntityId
    author: str = Field(min_length=1, max_length=255)
    author_id: Optional[UserId] = None
    text: str
    parent_id: Optional[CommentId] = None
    mentions: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "entity_id", mode="before")
    @classmethod
    def normalize_identifier(cls, v: Any) -> str:
        """Normalize numeric-or-string identifiers to strings."""
        return normalize_id(v)

    @field_validator("author_id", "parent_id", mode="before")
    @classmethod
    def normalize_reference(cls, v: Any) -> str | None:
        """Normalize optional references, mapping blank values to None."""
        return normalize_optional_id(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v: Any) -> datetime:
        """Replace missing or malformed dates with the fallback timestamp."""
        return normalize_timestamp(v)

    @model_validator(mode="before")
    @classmethod
    def derive_mentions(cls, data: Any) -> Any:
        """Recompute mentions from text."""
        if isinstance(data, dict):
            data = {**data, "mentions": extract_mentions(data.get("text"))}
        return data

    @property
    def is_reply(self) -> bool:
        """Whether this comment references a parent."""
        return self.parent_id is not None


@dataclass
class CommentNode:
    """Node in a comment thread.

    Wraps a comment with its replies. Nodes are built fresh by
    ``reconstruct`` and must be treated as read-only; tree operations return
    new nodes instead of mutating existing ones.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        """Id of the wrapped comment."""
        return self.comment.id
