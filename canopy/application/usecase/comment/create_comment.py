"""Create comment use case."""

from pydantic import BaseModel

from canopy.application.usecase.base import BaseUseCase
from canopy.domain.model import CurrentUser
from canopy.domain.service import CommentService
from canopy.domain.value import CommentId, EntityId, normalize_optional_id

from .wire import CommentWire


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    entity_id: str
    text: str
    user: CurrentUser  # Authenticated poster; stamps author and author_id
    parent_id: str | int | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CommentWire]):
    """Use case for commenting on an entity or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentWire:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment in wire form

        Raises:
            ValidationError: If the text is empty or too long
        """
        parent_id = normalize_optional_id(request.parent_id)
        comment = await self.comment_service.create_comment(
            entity_id=EntityId(request.entity_id),
            author=request.user.display_name,
            author_id=request.user.id,
            text=request.text,
            parent_id=CommentId(parent_id) if parent_id is not None else None,
        )
        return CommentWire.from_comment(comment)
