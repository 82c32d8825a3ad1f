"""Comment domain errors."""


class DomainError(Exception):
    """Base domain error."""


class ValidationError(DomainError):
    """Comment input rejected, e.g. empty or oversized text."""


class InvalidPathError(DomainError):
    """A comment path does not address a node in the current thread.

    Paths are render-time handles, so this usually means the thread changed
    (e.g. a concurrent delete) after the path was computed.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid comment path {path!r}: {reason}")


class NotFoundError(DomainError):
    """A comment does not exist on the entity it was looked up on."""

    def __init__(self, entity_id: str, comment_id: str):
        self.entity_id = entity_id
        self.comment_id = comment_id
        super().__init__(f"Comment {comment_id} not found on {entity_id}")


class NotAuthorizedError(DomainError):
    """A user tried to delete a comment they did not write."""

    def __init__(self, comment_id: str, user_id: str):
        self.comment_id = comment_id
        self.user_id = user_id
        super().__init__(f"User {user_id} may not delete comment {comment_id}")
