"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

from canopy.domain.model import Comment

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    comment_id: str | int,
    parent_id: str | int | None = None,
    minutes: int = 0,
    author: str = "Ada",
    author_id: str | None = "user-ada",
    text: str | None = None,
    entity_id: str = "article-1",
) -> Comment:
    """Helper function to build test comments.

    ``minutes`` offsets ``created_at`` from a fixed base time so tests
    control sibling order.
    """
    return Comment(
        id=comment_id,
        entity_id=entity_id,
        author=author,
        author_id=author_id,
        text=text if text is not None else f"Comment {comment_id}",
        parent_id=parent_id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
