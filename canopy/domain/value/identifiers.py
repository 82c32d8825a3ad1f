"""Identifiers for Canopy domain entities.

Comment ids arrive from several sources (numeric SQLite rows, timestamp
strings generated by browsers, server generated ids) so every identifier is a
string. Use ``normalize_id`` at the boundary before comparing.
"""

from typing import Any, NewType

CommentId = NewType("CommentId", str)
EntityId = NewType("EntityId", str)  # Article, post, pitch or idea
UserId = NewType("UserId", str)


def normalize_id(value: Any) -> str:
    """Normalize a numeric-or-string identifier to its string form.

    Integral floats (``3.0``) collapse to ``"3"`` so that ids that went
    through a JSON number round-trip still match their string form.

    Args:
        value: Raw identifier

    Returns:
        String identifier

    Raises:
        ValueError: If value is None, a bool, or blank
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid identifier: {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    result = str(value).strip()
    if not result:
        raise ValueError("Identifier must not be blank")
    return result


def normalize_optional_id(value: Any) -> str | None:
    """Normalize an optional reference, mapping every "no value" form to None.

    ``None``, ``""`` and whitespace-only strings mean "no reference". The
    literal ``0`` / ``"0"`` is a real identifier.
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return normalize_id(value)
