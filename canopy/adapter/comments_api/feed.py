"""Client-side comment feed with last-known-state fallback.

Keeps the most recent comment list of each entity it has fetched and derives
threads from it on demand. Backend failures never clear that state; they are
recorded as dismissible notices instead.
"""

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime
from itertools import count

import logfire

from canopy.adapter.comments_api.client import CommentApiClient
from canopy.adapter.error import CommentApiError
from canopy.domain.model import Comment, CommentNode
from canopy.domain.service.comment_tree import (
    delete_by_id,
    flatten,
    reconstruct,
    resolve_path,
)
from canopy.domain.value import CommentId, CommentPath, EntityId
from canopy.util.time import utc_now

_notice_ids = count(1)

REFRESH_FAILED = "Could not refresh comments."
CREATE_FAILED = "Failed to add comment. Please try again."
DELETE_FAILED = "Failed to delete comment. Please try again."


@dataclass(frozen=True)
class Notice:
    """Transient, dismissible message for the user."""

    message: str
    entity_id: str
    id: int = field(default_factory=lambda: next(_notice_ids))
    created_at: datetime = field(default_factory=utc_now)


class CommentFeed:
    """Last-known comments per entity, refreshed from the backend."""

    def __init__(self, client: CommentApiClient, poll_interval_seconds: float = 5.0):
        """Initialize feed.

        Args:
            client: Comments API client
            poll_interval_seconds: Delay between refreshes in ``poll``
        """
        self.client = client
        self.poll_interval_seconds = poll_interval_seconds
        self._comments: dict[str, list[Comment]] = {}
        self._generation: dict[str, int] = {}
        self._notices: list[Notice] = []

    @property
    def notices(self) -> list[Notice]:
        """Notices not yet dismissed, oldest first."""
        return list(self._notices)

    def dismiss(self, notice_id: int) -> None:
        """Dismiss a notice."""
        self._notices = [n for n in self._notices if n.id != notice_id]

    def _notify_failure(self, entity_id: str, message: str, error: Exception) -> None:
        """Log a failure and show it once; repeats keep the existing notice."""
        logfire.warn(message, entity_id=entity_id, error=str(error))
        if any(
            n.entity_id == entity_id and n.message == message for n in self._notices
        ):
            return
        self._notices.append(Notice(message=message, entity_id=entity_id))

    def _clear(self, entity_id: str, message: str) -> None:
        self._notices = [
            n
            for n in self._notices
            if not (n.entity_id == entity_id and n.message == message)
        ]

    def comments(self, entity_id: EntityId) -> list[Comment]:
        """Last-known flat comments of an entity."""
        return list(self._comments.get(entity_id, []))

    def thread(self, entity_id: EntityId) -> list[CommentNode]:
        """Current thread of an entity, rebuilt from the last-known comments."""
        return reconstruct(self._comments.get(entity_id, []))

    async def refresh(self, entity_id: EntityId) -> list[CommentNode]:
        """Fetch comments and return the resulting thread.

        A fetch that finishes after a newer one started is discarded. On
        failure the last-known thread is returned and a notice is recorded.
        """
        generation = self._generation.get(entity_id, 0) + 1
        self._generation[entity_id] = generation

        try:
            comments = await self.client.list_comments(entity_id)
        except CommentApiError as e:
            self._notify_failure(entity_id, REFRESH_FAILED, e)
            return self.thread(entity_id)

        # The backend is reachable again
        self._clear(entity_id, REFRESH_FAILED)
        if self._generation[entity_id] != generation:
            logfire.debug("Discarding superseded comment fetch", entity_id=entity_id)
        else:
            self._comments[entity_id] = comments
        return self.thread(entity_id)

    async def poll(
        self, entity_id: EntityId, interval: float | None = None
    ) -> AsyncIterator[list[CommentNode]]:
        """Refresh forever, yielding the thread after every fetch."""
        delay = self.poll_interval_seconds if interval is None else interval
        while True:
            yield await self.refresh(entity_id)
            await asyncio.sleep(delay)

    async def post(self, entity_id: EntityId, text: str) -> Comment | None:
        """Post a top-level comment.

        Returns:
            Created comment, or None if the backend failed (notice recorded)
        """
        return await self._create(entity_id, text, parent_id=None)

    async def reply(
        self, entity_id: EntityId, path: str | CommentPath, text: str
    ) -> Comment | None:
        """Reply to the comment displayed at ``path``.

        The path is resolved against the current thread before any request
        is made; a stale path is logged and nothing is sent.

        Returns:
            Created reply, or None if the path is stale or the backend failed
        """
        target = resolve_path(self.thread(entity_id), path)
        if target is None:
            logfire.warn(
                "Invalid comment path, reply not sent",
                entity_id=entity_id,
                path=str(path),
            )
            return None
        return await self._create(entity_id, text, parent_id=target.id)

    async def _create(
        self, entity_id: EntityId, text: str, parent_id: CommentId | None
    ) -> Comment | None:
        try:
            created = await self.client.create_comment(
                entity_id, text, parent_id=parent_id
            )
        except CommentApiError as e:
            self._notify_failure(entity_id, CREATE_FAILED, e)
            return None

        self._comments[entity_id] = [*self._comments.get(entity_id, []), created]
        await self.refresh(entity_id)
        return created

    async def delete(self, entity_id: EntityId, comment_id: CommentId) -> int:
        """Delete a comment and its replies.

        Returns:
            Deleted count reported by the backend, 0 on failure or if missing
        """
        try:
            deleted = await self.client.delete_comment(entity_id, comment_id)
        except CommentApiError as e:
            self._notify_failure(entity_id, DELETE_FAILED, e)
            return 0

        remaining, _ = delete_by_id(self.thread(entity_id), comment_id)
        self._comments[entity_id] = flatten(remaining)
        await self.refresh(entity_id)
        return deleted
