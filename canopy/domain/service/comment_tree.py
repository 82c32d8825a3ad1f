"""Comment thread algorithms.

Pure functions over flat comment lists and ``CommentNode`` trees. Nothing in
this module mutates its input: inserts and deletes rebuild the nodes on the
affected path and share untouched subtrees with the original tree.

Paths (``CommentPath``) are render-time handles computed by ``walk``. They go
stale as soon as the thread changes, so callers must resolve a path to a
comment id before doing any I/O.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import logfire
from pydantic import ValidationError as PydanticValidationError

from canopy.domain.error import InvalidPathError
from canopy.domain.model import Comment, CommentNode
from canopy.domain.value import CommentPath, normalize_id


@dataclass(frozen=True)
class DisplayPolicy:
    """How deep replies are indented and where collapse toggles appear.

    Replies are indented up to ``max_nested_depth`` (root = 0). Deeper replies
    still render nested, at the maximum indent, and never get a toggle.
    "Show/hide N replies" toggles are offered only below ``collapsible_depth``.
    """

    max_nested_depth: int = 3
    collapsible_depth: int = 2

    def indent_level(self, depth: int) -> int:
        """Visual indent for a node at ``depth``."""
        return min(depth, self.max_nested_depth)

    def is_nested(self, depth: int) -> bool:
        """Whether a node at ``depth`` is drawn indented under its parent."""
        return depth > 0

    def is_collapsible(self, depth: int, reply_count: int) -> bool:
        """Whether a node at ``depth`` gets a show/hide replies toggle."""
        return reply_count > 0 and depth < self.collapsible_depth


def reconstruct(comments: Iterable[Comment]) -> list[CommentNode]:
    """Build the nested thread from a flat comment list.

    Algorithm:
    1. Drop duplicate ids (first occurrence wins), so lists merged from
       several sources can be passed as-is
    2. Sort newest first (id breaks timestamp ties), which fixes sibling
       order at every level independently of input order
    3. Create a fresh node per comment
    4. Attach each node to its parent; comments whose parent is missing,
       or whose parent chain loops back to themselves, become roots

    Args:
        comments: Flat comments of one entity, in any order

    Returns:
        Root nodes with replies populated recursively
    """
    unique: dict[str, Comment] = {}
    for comment in comments:
        unique.setdefault(comment.id, comment)

    ordered = sorted(
        unique.values(), key=lambda c: (c.created_at, c.id), reverse=True
    )
    nodes = {comment.id: CommentNode(comment=comment) for comment in ordered}

    roots: list[CommentNode] = []
    for comment in ordered:
        node = nodes[comment.id]
        parent_id = _attached_parent(comment, unique)
        if parent_id is not None:
            nodes[parent_id].replies.append(node)
        else:
            roots.append(node)
    return roots


def _attached_parent(comment: Comment, comments: dict[str, Comment]) -> str | None:
    """Parent a comment is displayed under, or None if it displays as a root.

    A parent counts only if it is present and the link does not close a cycle.
    """
    parent_id = comment.parent_id
    if (
        parent_id is not None
        and parent_id in comments
        and not _is_ancestor_cycle(comment.id, parent_id, comments)
    ):
        return parent_id
    return None


def _is_ancestor_cycle(
    comment_id: str, parent_id: str, comments: dict[str, Comment]
) -> bool:
    """Check whether following parent links from ``parent_id`` reaches ``comment_id``."""
    seen: set[str] = set()
    current: str | None = parent_id
    while current is not None and current in comments and current not in seen:
        if current == comment_id:
            return True
        seen.add(current)
        current = comments[current].parent_id
    return False


def flatten(tree: Iterable[CommentNode]) -> list[Comment]:
    """Pre-order traversal of a thread back into a flat list."""
    result: list[Comment] = []
    for node in tree:
        result.append(node.comment)
        result.extend(flatten(node.replies))
    return result


def subtree_size(node: CommentNode) -> int:
    """Number of comments in a subtree, including its root."""
    return 1 + sum(subtree_size(reply) for reply in node.replies)


def count_nodes(tree: Iterable[CommentNode]) -> int:
    """Number of comments in a thread."""
    return sum(subtree_size(node) for node in tree)


def walk(
    tree: list[CommentNode], parent: CommentPath | None = None
) -> Iterator[tuple[CommentPath, int, CommentNode]]:
    """Yield ``(path, depth, node)`` for every node in display order.

    Paths are derived from the current sibling positions.
    """
    for index, node in enumerate(tree):
        path = parent.child(index) if parent else CommentPath.from_indices([index])
        yield path, path.depth, node
        yield from walk(node.replies, path)


def parse_path(path: str | CommentPath) -> tuple[int, ...]:
    """Parse a path into sibling indices.

    Raises:
        InvalidPathError: If the path is malformed
    """
    if isinstance(path, CommentPath):
        return path.indices
    try:
        return CommentPath(str(path).strip()).indices
    except PydanticValidationError as e:
        raise InvalidPathError(str(path), "malformed path") from e


def resolve_path(
    tree: list[CommentNode], path: str | CommentPath
) -> CommentNode | None:
    """Find the node addressed by ``path``.

    Returns:
        The node, or None if the path is malformed or any index is out of bounds
    """
    try:
        indices = parse_path(path)
    except InvalidPathError:
        return None

    siblings = tree
    node: CommentNode | None = None
    for index in indices:
        if index >= len(siblings):
            return None
        node = siblings[index]
        siblings = node.replies
    return node


def insert(
    tree: list[CommentNode],
    parent_path: str | CommentPath | None,
    comment: Comment,
) -> list[CommentNode]:
    """Insert a comment as a new root or as the last reply of the node at a path.

    The reply's ``parent_id`` is set to the addressed node's id. A stale or
    malformed path is logged and leaves the thread unchanged.

    Args:
        tree: Current thread
        parent_path: Path of the node being replied to, None/'' for a root
        comment: Comment to insert

    Returns:
        New thread, or ``tree`` itself if the path is invalid
    """
    if parent_path is None or not str(parent_path).strip():
        return [*tree, CommentNode(comment=comment)]

    try:
        indices = parse_path(parent_path)
        return _insert_at(tree, indices, comment, str(parent_path), depth=0)
    except InvalidPathError as e:
        logfire.warn(
            "Invalid comment path, reply not inserted",
            path=e.path,
            reason=e.reason,
            comment_id=comment.id,
        )
        return tree


def _insert_at(
    nodes: list[CommentNode],
    indices: tuple[int, ...],
    comment: Comment,
    path: str,
    depth: int,
) -> list[CommentNode]:
    index, rest = indices[0], indices[1:]
    if index >= len(nodes):
        raise InvalidPathError(
            path, f"index {index} out of bounds at depth {depth} ({len(nodes)} nodes)"
        )

    target = nodes[index]
    if rest:
        replies = _insert_at(target.replies, rest, comment, path, depth + 1)
    else:
        reply = comment.evolve(parent_id=target.id)
        replies = [*target.replies, CommentNode(comment=reply)]

    updated = CommentNode(comment=target.comment, replies=replies)
    return [*nodes[:index], updated, *nodes[index + 1 :]]


def delete_by_id(
    tree: list[CommentNode], comment_id: object
) -> tuple[list[CommentNode], int]:
    """Remove the first comment with ``comment_id`` and all of its replies.

    Ids are compared in string form, so 3 and '3' match.

    Args:
        tree: Current thread
        comment_id: Id of the comment to delete

    Returns:
        (new thread, deleted count). The count is 0 when nothing matched, in
        which case ``tree`` itself is returned.
    """
    try:
        target = normalize_id(comment_id)
    except ValueError:
        return tree, 0

    remaining, deleted = _delete(tree, target)
    if not deleted:
        return tree, 0
    return remaining, deleted


def _delete(nodes: list[CommentNode], target: str) -> tuple[list[CommentNode], int]:
    result: list[CommentNode] = []
    deleted = 0
    for node in nodes:
        if not deleted and node.id == target:
            deleted = subtree_size(node)
            continue
        if not deleted and node.replies:
            replies, removed = _delete(node.replies, target)
            if removed:
                deleted = removed
                node = CommentNode(comment=node.comment, replies=replies)
        result.append(node)
    return result, deleted


def collect_subtree_ids(comments: Iterable[Comment], comment_id: object) -> list[str]:
    """Ids of a comment and all of its transitive replies in a flat list.

    Used by repositories to cascade deletes without building the tree. Parent
    links are followed exactly as ``reconstruct`` attaches them, so the ids
    are the ones displayed under ``comment_id``.

    Returns:
        The ids with ``comment_id`` first, or an empty list if it is absent
    """
    try:
        target = normalize_id(comment_id)
    except ValueError:
        return []

    unique: dict[str, Comment] = {}
    for comment in comments:
        unique.setdefault(comment.id, comment)
    if target not in unique:
        return []

    children: dict[str, list[str]] = {}
    for comment in unique.values():
        parent_id = _attached_parent(comment, unique)
        if parent_id is not None:
            children.setdefault(parent_id, []).append(comment.id)

    collected: list[str] = []
    seen: set[str] = set()
    pending = [target]
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)
        collected.append(current)
        pending.extend(reversed(children.get(current, [])))
    return collected
