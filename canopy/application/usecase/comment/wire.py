"""Wire representation of a comment.

The front end and older clients use ``comment`` for the body, ``date`` for
the timestamp and ``userId`` or ``authorId`` for the author id. The domain
model uses ``text``, ``created_at`` and ``author_id``; this model is the
boundary between the two.
"""

from datetime import datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from canopy.domain.model import Comment
from canopy.domain.value import EntityId, normalize_id, normalize_optional_id
from canopy.util.time import normalize_timestamp


class CommentWire(BaseModel):
    """Comment as sent over HTTP."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    author: str
    author_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("authorId", "userId", "author_id"),
        serialization_alias="authorId",
    )
    comment: str
    date: datetime = Field(default=None, validate_default=True)
    parent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parentId", "parent_id"),
        serialization_alias="parentId",
    )
    mentions: list[str] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_identifier(cls, v: Any) -> str:
        """Accept numeric ids from legacy rows."""
        return normalize_id(v)

    @field_validator("author_id", "parent_id", mode="before")
    @classmethod
    def normalize_reference(cls, v: Any) -> str | None:
        """Map blank references to None."""
        return normalize_optional_id(v)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any, info: ValidationInfo) -> datetime:
        """Replace missing or malformed dates with the fallback timestamp.

        A ``date_anchor`` in the validation context replaces "now" as the
        point the fallback is measured from.
        """
        anchor = (info.context or {}).get("date_anchor")
        return normalize_timestamp(v, now=anchor)

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentWire":
        """Convert a domain comment to its wire form."""
        return cls(
            id=comment.id,
            author=comment.author,
            author_id=comment.author_id,
            comment=comment.text,
            date=comment.created_at,
            parent_id=comment.parent_id,
            mentions=comment.mentions or None,
        )

    def to_comment(self, entity_id: EntityId) -> Comment:
        """Convert to a domain comment of ``entity_id``."""
        return Comment(
            id=self.id,
            entity_id=entity_id,
            author=self.author,
            author_id=self.author_id,
            text=self.comment,
            parent_id=self.parent_id,
            created_at=self.date,
        )
