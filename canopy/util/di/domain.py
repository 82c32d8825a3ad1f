"""Domain layer DI providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from canopy.config import AuthSettings, CommentSettings
from canopy.domain.repository import CommentRepository
from canopy.domain.service import (
    CommentService,
    JWTService,
    NotificationDispatcher,
    NotificationSink,
)
from canopy.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    async def get_notification_dispatcher(
        self, notification_sink: NotificationSink
    ) -> AsyncIterator[NotificationDispatcher]:
        """Provide the background notification dispatcher.

        Deliveries still in flight are awaited when the container closes.
        """
        dispatcher = NotificationDispatcher(notification_sink)
        yield dispatcher
        await dispatcher.drain()

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        notification_dispatcher: NotificationDispatcher,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            notification_dispatcher=notification_dispatcher,
            comment_settings=comment_settings,
        )
