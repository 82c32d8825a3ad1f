"""Reply notification delivery."""

import asyncio
from abc import ABC, abstractmethod

import logfire

from canopy.domain.value import ReplyNotification


class NotificationSink(ABC):
    """Receives "someone replied to your comment" events."""

    @abstractmethod
    async def notify_reply(self, notification: ReplyNotification) -> None:
        """Deliver a reply notification.

        Args:
            notification: Reply event
        """
        pass


class NotificationDispatcher:
    """Delivers reply notifications in the background.

    ``dispatch`` returns immediately; the comment that triggered the
    notification never waits on the sink. Delivery failures are logged and
    dropped. Pending deliveries are tracked so they are not garbage collected
    mid-flight and can be awaited on shutdown.
    """

    def __init__(self, sink: NotificationSink) -> None:
        self.sink = sink
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._pending)

    def dispatch(self, notification: ReplyNotification) -> None:
        """Schedule delivery on the running event loop."""
        task = asyncio.create_task(self._deliver(notification))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, notification: ReplyNotification) -> None:
        try:
            await self.sink.notify_reply(notification)
        except Exception as e:
            logfire.warn(
                "Reply notification failed",
                recipient_id=notification.recipient_id,
                comment_id=notification.comment_id,
                error=str(e),
            )
            return
        logfire.info(
            "Reply notification sent",
            recipient_id=notification.recipient_id,
            comment_id=notification.comment_id,
        )

    async def drain(self) -> None:
        """Wait for every delivery scheduled so far."""
        while self._pending:
            await asyncio.gather(*self._pending)
