"""Unit tests for domain value objects."""

import pytest
from pydantic import ValidationError

from canopy.domain.value import CommentPath, ReplyNotification, normalize_id
from canopy.domain.value.identifiers import normalize_optional_id


class TestCommentPath:
    """Tests for CommentPath."""

    def test_indices_and_depth(self):
        """Path parts should map to indices; depth counts from zero."""
        path = CommentPath("2-0-1")

        assert path.indices == (2, 0, 1)
        assert path.depth == 2

    def test_child_and_from_indices(self):
        """Child paths should extend the parent path."""
        assert CommentPath("1").child(3) == CommentPath.from_indices([1, 3])
        assert str(CommentPath.from_indices((0,))) == "0"

    @pytest.mark.parametrize("raw", ["", "a", "1-", "-1", "1--2", "1.2"])
    def test_rejects_malformed(self, raw):
        """Anything but dash-joined integers should be rejected."""
        with pytest.raises(ValidationError):
            CommentPath(raw)


class TestIdentifiers:
    """Tests for identifier normalization."""

    def test_numbers_become_strings(self):
        """Numeric ids should normalize to their string form."""
        assert normalize_id(3) == "3"
        assert normalize_id(3.0) == "3"
        assert normalize_id(0) == "0"
        assert normalize_id(" 17 ") == "17"

    @pytest.mark.parametrize("value", [None, True, "", "   "])
    def test_rejects_missing_ids(self, value):
        """None, bools and blanks are not identifiers."""
        with pytest.raises(ValueError):
            normalize_id(value)

    def test_optional_reference(self):
        """Blank references mean 'no parent', zero does not."""
        assert normalize_optional_id(None) is None
        assert normalize_optional_id("") is None
        assert normalize_optional_id("  ") is None
        assert normalize_optional_id(0) == "0"
        assert normalize_optional_id("0") == "0"


class TestReplyNotification:
    """Tests for ReplyNotification."""

    def test_message(self):
        """The message should name the replying user."""
        notification = ReplyNotification(
            recipient_id="user-ada",
            actor_name="Ben",
            actor_id="user-ben",
            entity_id="article-1",
            comment_id="2",
            parent_comment_id="1",
        )

        assert notification.message == "Ben replied to your comment"
