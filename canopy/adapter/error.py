"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class NotificationDeliveryError(AdapterError):
    """A reply notification could not be delivered."""

    pass


class CommentApiError(AdapterError):
    """The comments backend failed or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
