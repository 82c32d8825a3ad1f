"""Notification sink implementations.

The activity feed that shows "X replied to your comment" lives outside this
service. Production posts each event to its webhook; environments without a
webhook only log the event.
"""

import httpx
import logfire

from canopy.adapter.error import NotificationDeliveryError
from canopy.domain.service.notification import NotificationSink
from canopy.domain.value import ReplyNotification


class LogNotificationSink(NotificationSink):
    """Sink that only records notifications in the logs."""

    async def notify_reply(self, notification: ReplyNotification) -> None:
        """Log the reply notification."""
        logfire.info(
            "Reply notification (log only)",
            recipient_id=notification.recipient_id,
            comment_id=notification.comment_id,
            message=notification.message,
        )


class WebhookNotificationSink(NotificationSink):
    """Sink that POSTs notifications to the activity service."""

    def __init__(
        self,
        webhook_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize webhook sink.

        Args:
            webhook_url: Activity service endpoint
            timeout_seconds: Request timeout; delivery is best effort
            transport: Optional httpx transport (tests)
        """
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def notify_reply(self, notification: ReplyNotification) -> None:
        """POST the notification as an activity entry.

        Raises:
            NotificationDeliveryError: If the request fails or is rejected
        """
        payload = {
            "type": "received_reply",
            "userId": notification.recipient_id,
            "title": notification.message,
            "fromUser": notification.actor_name,
            "fromUserId": notification.actor_id,
            "entityId": notification.entity_id,
            "commentId": notification.comment_id,
            "parentCommentId": notification.parent_comment_id,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(
                f"Failed to deliver reply notification: {e}"
            ) from e


class MockNotificationSink(NotificationSink):
    """Sink that keeps notifications in memory for tests."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[ReplyNotification] = []
        self.fail = fail

    async def notify_reply(self, notification: ReplyNotification) -> None:
        """Record the notification, or fail if configured to."""
        if self.fail:
            raise NotificationDeliveryError("Mock delivery failure")
        self.sent.append(notification)
