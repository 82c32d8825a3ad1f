"""Unit tests for comment thread algorithms."""

import pytest

from canopy.domain.error import InvalidPathError
from canopy.domain.service import DisplayPolicy
from canopy.domain.service.comment_tree import (
    collect_subtree_ids,
    count_nodes,
    delete_by_id,
    flatten,
    insert,
    parse_path,
    reconstruct,
    resolve_path,
    subtree_size,
    walk,
)
from canopy.domain.value import CommentPath
from tests.conftest import make_comment


def ids(tree):
    return [c.id for c in flatten(tree)]


def shape(tree):
    return [{"id": node.id, "replies": shape(node.replies)} for node in tree]


@pytest.fixture
def thread_comments():
    """Two roots; the older one has a reply chain and a second reply."""
    return [
        make_comment("1", minutes=0),
        make_comment("2", parent_id="1", minutes=1),
        make_comment("3", parent_id="2", minutes=2),
        make_comment("4", parent_id="1", minutes=3),
        make_comment("5", minutes=4),
    ]


class TestReconstruct:
    """Tests for reconstruct."""

    def test_round_trip_preserves_ids(self, thread_comments):
        """Flattening a reconstructed thread should yield every id exactly once."""
        # Act
        tree = reconstruct(thread_comments)

        # Assert
        result = ids(tree)
        assert sorted(result) == ["1", "2", "3", "4", "5"]
        assert len(result) == len(set(result))

    def test_reconstruct_is_idempotent(self, thread_comments):
        """Rebuilding from a flattened thread should give the same thread."""
        # Arrange
        tree = reconstruct(thread_comments)

        # Act
        rebuilt = reconstruct(flatten(tree))

        # Assert
        assert rebuilt == tree

    def test_input_order_does_not_matter(self, thread_comments):
        """Sibling order comes from timestamps, not input order."""
        assert reconstruct(list(reversed(thread_comments))) == reconstruct(
            thread_comments
        )

    def test_newest_first_at_every_level(self, thread_comments):
        """Roots and replies should both be ordered newest first."""
        # Act
        tree = reconstruct(thread_comments)

        # Assert
        assert shape(tree) == [
            {"id": "5", "replies": []},
            {
                "id": "1",
                "replies": [
                    {"id": "4", "replies": []},
                    {"id": "2", "replies": [{"id": "3", "replies": []}]},
                ],
            },
        ]

    def test_merge_deduplicates_shared_ids(self):
        """Overlapping lists merged from two sources should keep each id once."""
        # Arrange
        source_a = [make_comment("1"), make_comment("2", parent_id="1", minutes=1)]
        source_b = [
            make_comment("2", parent_id="1", minutes=1),
            make_comment("3", parent_id="2", minutes=2),
            make_comment("1"),
        ]

        # Act
        tree = reconstruct(source_a + source_b)

        # Assert
        result = ids(tree)
        assert sorted(result) == ["1", "2", "3"]
        assert result.count("1") == 1
        assert result.count("2") == 1

    def test_duplicate_keeps_first_occurrence(self):
        """When ids collide the first comment in input order wins."""
        # Arrange
        first = make_comment("1", text="first")
        second = make_comment("1", text="second")

        # Act
        tree = reconstruct([first, second])

        # Assert
        assert len(tree) == 1
        assert tree[0].comment.text == "first"

    def test_orphan_becomes_root(self):
        """A reply to a missing parent should be kept as a root."""
        # Arrange
        comments = [make_comment("1"), make_comment("2", parent_id="99", minutes=1)]

        # Act
        tree = reconstruct(comments)

        # Assert
        assert [node.id for node in tree] == ["2", "1"]
        assert tree[0].comment.parent_id == "99"

    def test_cycle_is_broken_into_roots(self):
        """Comments whose parent chain loops should not disappear."""
        # Arrange
        comments = [
            make_comment("a", parent_id="b"),
            make_comment("b", parent_id="a", minutes=1),
        ]

        # Act
        tree = reconstruct(comments)

        # Assert
        assert sorted(ids(tree)) == ["a", "b"]
        assert count_nodes(tree) == 2

    def test_self_parent_becomes_root(self):
        """A comment naming itself as parent should become a root."""
        tree = reconstruct([make_comment("1", parent_id="1")])

        assert shape(tree) == [{"id": "1", "replies": []}]

    def test_zero_is_a_valid_parent_id(self):
        """Id 0 must not be mistaken for 'no parent'."""
        # Arrange
        comments = [make_comment(0), make_comment(1, parent_id=0, minutes=1)]

        # Act
        tree = reconstruct(comments)

        # Assert
        assert shape(tree) == [{"id": "0", "replies": [{"id": "1", "replies": []}]}]

    def test_empty_parent_id_means_root(self):
        """Blank parent references should normalize to None."""
        tree = reconstruct([make_comment("1", parent_id="")])

        assert tree[0].comment.parent_id is None

    def test_does_not_share_nodes_between_calls(self, thread_comments):
        """Each call should build fresh nodes."""
        # Arrange
        first = reconstruct(thread_comments)
        second = reconstruct(thread_comments)

        # Act
        first[1].replies.clear()

        # Assert
        assert len(second[1].replies) == 2


class TestInsert:
    """Tests for insert."""

    def test_three_level_thread_via_paths(self):
        """Replies inserted by path should nest and carry parent ids."""
        # Arrange
        a = make_comment(1, minutes=0)
        b = make_comment(2, minutes=1)
        c = make_comment(3, minutes=2)

        # Act
        tree = insert([], None, a)
        tree = insert(tree, "0", b)
        tree = insert(tree, "0-0", c)

        # Assert
        rebuilt = reconstruct(flatten(tree))
        assert shape(rebuilt) == [
            {"id": "1", "replies": [{"id": "2", "replies": [{"id": "3", "replies": []}]}]}
        ]
        flat = {comment.id: comment for comment in flatten(tree)}
        assert flat["2"].parent_id == "1"
        assert flat["3"].parent_id == "2"

    def test_out_of_bounds_path_returns_original_tree(self):
        """An out of range path should be a no-op, not an error."""
        # Arrange
        tree = insert([], None, make_comment("1"))

        # Act
        result = insert(tree, "5", make_comment("2"))

        # Assert
        assert result is tree
        assert ids(result) == ["1"]

    @pytest.mark.parametrize("path", ["abc", "0--1", "-1", "0-"])
    def test_malformed_path_returns_original_tree(self, path):
        """Malformed paths should leave the thread untouched."""
        tree = insert([], None, make_comment("1"))

        assert insert(tree, path, make_comment("2")) is tree

    def test_empty_path_inserts_root(self):
        """An empty string path should add a root like None does."""
        # Arrange
        tree = insert([], None, make_comment("1"))

        # Act
        result = insert(tree, "", make_comment("2"))

        # Assert
        assert [node.id for node in result] == ["1", "2"]

    def test_insert_does_not_mutate_input(self):
        """The original thread should be unchanged after an insert."""
        # Arrange
        tree = insert([], None, make_comment("1"))

        # Act
        insert(tree, "0", make_comment("2"))

        # Assert
        assert tree[0].replies == []

    def test_reply_overrides_parent_id(self):
        """The addressed node decides the parent, not the comment."""
        # Arrange
        tree = insert([], None, make_comment("1"))

        # Act
        result = insert(tree, CommentPath("0"), make_comment("2", parent_id="99"))

        # Assert
        assert result[0].replies[0].comment.parent_id == "1"


class TestDeleteById:
    """Tests for delete_by_id."""

    def test_deletes_subtree_and_counts_descendants(self, thread_comments):
        """Deleting a comment with k descendants should report k + 1."""
        # Arrange
        tree = reconstruct(thread_comments)

        # Act
        remaining, deleted = delete_by_id(tree, "1")

        # Assert
        assert deleted == 4
        assert ids(reconstruct(flatten(remaining))) == ["5"]

    def test_deletes_nested_reply(self, thread_comments):
        """Deleting a nested reply should keep its siblings and ancestors."""
        # Arrange
        tree = reconstruct(thread_comments)

        # Act
        remaining, deleted = delete_by_id(tree, "2")

        # Assert
        assert deleted == 2
        assert sorted(ids(remaining)) == ["1", "4", "5"]

    def test_missing_id_is_noop(self, thread_comments):
        """Deleting an absent id should return the original thread and 0."""
        # Arrange
        tree = reconstruct(thread_comments)

        # Act
        remaining, deleted = delete_by_id(tree, "404")

        # Assert
        assert deleted == 0
        assert remaining is tree

    def test_numeric_id_matches_string_id(self):
        """Ids should compare in string form."""
        tree = reconstruct([make_comment("3")])

        remaining, deleted = delete_by_id(tree, 3)

        assert deleted == 1
        assert remaining == []

    def test_delete_does_not_mutate_input(self, thread_comments):
        """The original thread should keep all nodes."""
        # Arrange
        tree = reconstruct(thread_comments)

        # Act
        delete_by_id(tree, "3")

        # Assert
        assert count_nodes(tree) == 5


class TestPaths:
    """Tests for path parsing, resolution and walking."""

    def test_walk_yields_display_order_paths(self, thread_comments):
        """walk should produce pre-order paths with depths."""
        # Arrange
        tree = reconstruct(thread_comments)

        # Act
        walked = [(str(path), depth, node.id) for path, depth, node in walk(tree)]

        # Assert
        assert walked == [
            ("0", 0, "5"),
            ("1", 0, "1"),
            ("1-0", 1, "4"),
            ("1-1", 1, "2"),
            ("1-1-0", 2, "3"),
        ]

    def test_every_walked_path_resolves_to_its_node(self, thread_comments):
        """Paths from walk should resolve back to the same nodes."""
        tree = reconstruct(thread_comments)

        for path, _, node in walk(tree):
            assert resolve_path(tree, path) is node

    def test_resolve_stale_path_returns_none(self, thread_comments):
        """A path invalidated by a delete should not resolve."""
        # Arrange
        tree = reconstruct(thread_comments)
        remaining, _ = delete_by_id(tree, "2")

        # Act / Assert
        assert resolve_path(remaining, "1-1-0") is None
        assert resolve_path(remaining, "not-a-path") is None

    def test_parse_path(self):
        """parse_path should return sibling indices."""
        assert parse_path(" 2-0-1 ") == (2, 0, 1)
        assert parse_path(CommentPath("4")) == (4,)

    def test_parse_path_rejects_malformed(self):
        """parse_path should raise InvalidPathError for malformed input."""
        with pytest.raises(InvalidPathError) as exc_info:
            parse_path("1.2")

        assert exc_info.value.path == "1.2"


class TestCounting:
    """Tests for subtree sizes and id collection."""

    def test_subtree_size_and_count(self, thread_comments):
        """Sizes should include the node itself."""
        tree = reconstruct(thread_comments)

        assert subtree_size(tree[1]) == 4
        assert count_nodes(tree) == 5

    def test_collect_subtree_ids(self, thread_comments):
        """Ids should be collected from a flat list, target first."""
        result = collect_subtree_ids(thread_comments, "1")

        assert result[0] == "1"
        assert sorted(result) == ["1", "2", "3", "4"]

    def test_collect_subtree_ids_missing(self, thread_comments):
        """A missing id should collect nothing."""
        assert collect_subtree_ids(thread_comments, "404") == []

    def test_collect_subtree_ids_survives_cycles(self):
        """Cyclic parent links should not loop forever."""
        comments = [make_comment("a", parent_id="b"), make_comment("b", parent_id="a")]

        assert collect_subtree_ids(comments, "a") == ["a"]
        assert collect_subtree_ids(comments, "b") == ["b"]

    def test_collect_subtree_ids_matches_displayed_tree(self):
        """Only comments shown under the target should be collected."""
        comments = [
            make_comment("a", parent_id="b"),
            make_comment("b", parent_id="a", minutes=1),
            make_comment("c", parent_id="a", minutes=2),
        ]
        by_root = {node.id: node for node in reconstruct(comments)}

        assert sorted(by_root) == ["a", "b"]
        assert sorted(collect_subtree_ids(comments, "a")) == ["a", "c"]
        assert sorted(collect_subtree_ids(comments, "a")) == sorted(
            c.id for c in flatten([by_root["a"]])
        )
        assert collect_subtree_ids(comments, "b") == ["b"]


class TestDisplayPolicy:
    """Tests for DisplayPolicy."""

    def test_indent_caps_at_max_depth(self):
        """Replies deeper than the maximum keep the maximum indent."""
        policy = DisplayPolicy()

        assert [policy.indent_level(d) for d in range(6)] == [0, 1, 2, 3, 3, 3]

    def test_nested(self):
        """Every reply is nested, even past the maximum indent."""
        policy = DisplayPolicy()

        assert not policy.is_nested(0)
        assert policy.is_nested(3)
        assert policy.is_nested(4)

    def test_collapsible_only_shallow_nodes_with_replies(self):
        """Toggles appear below the collapsible depth and only with replies."""
        policy = DisplayPolicy()

        assert policy.is_collapsible(0, 2)
        assert policy.is_collapsible(1, 1)
        assert not policy.is_collapsible(2, 1)
        assert not policy.is_collapsible(0, 0)
