"""Delete comment use case."""

from pydantic import BaseModel, ConfigDict, Field

from canopy.application.usecase.base import BaseUseCase
from canopy.domain.error import NotAuthorizedError, NotFoundError
from canopy.domain.model import CurrentUser
from canopy.domain.service import CommentService
from canopy.domain.value import CommentId, EntityId, normalize_id


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    entity_id: str
    comment_id: str | int
    user: CurrentUser  # Must own the comment


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    model_config = ConfigDict(populate_by_name=True)

    deleted_count: int = Field(serialization_alias="deletedCount")


class DeleteCommentUseCase(
    BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]
):
    """Use case for deleting a comment together with all of its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Steps:
        1. Find the comment (404 when missing)
        2. Check the user owns it
        3. Cascade delete through the service

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user is not the author
        """
        entity_id = EntityId(request.entity_id)
        comment_id = CommentId(normalize_id(request.comment_id))

        comment = await self.comment_service.get_comment(entity_id, comment_id)
        if comment is None:
            raise NotFoundError(entity_id, comment_id)

        if not self.comment_service.can_delete(comment, request.user):
            raise NotAuthorizedError(comment_id, request.user.id)

        deleted = await self.comment_service.delete_comment(entity_id, comment_id)
        if deleted == 0:
            # Removed by someone else between the lookup and the delete
            raise NotFoundError(entity_id, comment_id)
        return DeleteCommentResponse(deleted_count=deleted)
