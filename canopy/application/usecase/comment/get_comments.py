"""Get comments use case."""

from pydantic import BaseModel

from canopy.application.usecase.base import BaseUseCase
from canopy.domain.service import CommentService
from canopy.domain.value import EntityId

from .wire import CommentWire


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    entity_id: str


class GetCommentsUseCase(BaseUseCase[GetCommentsRequest, list[CommentWire]]):
    """Use case for getting the flat comment list of an entity.

    Clients that build the thread themselves poll this endpoint.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> list[CommentWire]:
        """Execute get comments flow.

        Args:
            request: Get comments request

        Returns:
            Comments in wire form, oldest first
        """
        comments = await self.comment_service.get_comments(EntityId(request.entity_id))
        ordered = sorted(comments, key=lambda c: (c.created_at, c.id))
        return [CommentWire.from_comment(comment) for comment in ordered]
