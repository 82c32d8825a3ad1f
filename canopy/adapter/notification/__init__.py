"""Reply notification sinks."""

from .sink import LogNotificationSink, MockNotificationSink, WebhookNotificationSink

__all__ = [
    "LogNotificationSink",
    "MockNotificationSink",
    "WebhookNotificationSink",
]
