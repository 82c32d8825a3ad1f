"""Reply notification infrastructure providers."""

from dishka import Scope, provide

from canopy.adapter.notification import LogNotificationSink, WebhookNotificationSink
from canopy.config import NotificationSettings
from canopy.domain.service import NotificationSink
from canopy.util.di.base import ProviderBase
from canopy.util.error import ConfigurationError


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notifications"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_sink(
        self, notification_settings: NotificationSettings
    ) -> NotificationSink:
        """Provide the reply notification sink.

        Posts to the activity webhook when one is configured, otherwise
        only logs.

        Raises:
            ConfigurationError: If the webhook URL is not an http(s) URL
        """
        url = notification_settings.webhook_url
        if not url:
            return LogNotificationSink()
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError(
                "notifications.webhook_url", url, "must be an http(s) URL"
            )
        return WebhookNotificationSink(
            webhook_url=url, timeout_seconds=notification_settings.timeout_seconds
        )
