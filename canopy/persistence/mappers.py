"""Mappers between database rows and domain models."""

from typing import Any, Dict

from canopy.domain.model import Comment


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Mentions are rederived from text by the model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=row["id"],
        entity_id=row["entity_id"],
        author=row["author"],
        author_id=row.get("author_id"),
        text=row["text"],
        parent_id=row.get("parent_id"),
        created_at=row.get("created_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return comment.model_dump(exclude={"mentions"})
