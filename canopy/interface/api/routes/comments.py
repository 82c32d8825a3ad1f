"""Comment routes."""

from typing import Any

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from canopy.application.usecase.comment import (
    CommentThreadResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentThreadRequest,
    GetCommentThreadUseCase,
)
from canopy.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from canopy.domain.model import CurrentUser
from canopy.domain.service import JWTService

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    ``author``, ``userId`` and ``mentions`` are accepted from older clients
    but ignored: the author comes from the auth token and mentions are
    extracted from the text.
    """

    model_config = ConfigDict(populate_by_name=True)

    comment: str = Field(validation_alias=AliasChoices("comment", "text"))
    parent_id: str | int | None = Field(
        default=None, validation_alias=AliasChoices("parentId", "parent_id")
    )
    author: str | None = None
    user_id: str | int | None = Field(
        default=None, validation_alias=AliasChoices("userId", "authorId")
    )
    mentions: list[str] | None = None


def _require_user(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> CurrentUser:
    user = jwt_service.get_current_user(auth_token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action} comments",
        )
    return user


@router.get("/{entity_id}")
async def get_comments(
    entity_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
) -> JSONResponse:
    """Get the flat comment list of an entity.

    The front end rebuilds the thread from ``parentId`` links.

    Args:
        entity_id: Entity the comments belong to
        get_comments_use_case: Get comments use case from DI

    Returns:
        Comments oldest first, in wire form
    """
    comments = await get_comments_use_case.execute(
        GetCommentsRequest(entity_id=entity_id)
    )
    return JSONResponse(
        content=[c.model_dump(mode="json", by_alias=True) for c in comments]
    )


@router.get(
    "/{entity_id}/thread",
    response_model=CommentThreadResponse,
    response_model_by_alias=True,
)
async def get_comment_thread(
    entity_id: str,
    get_thread_use_case: FromDishka[GetCommentThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentThreadResponse:
    """Get the nested, display-ready thread of an entity.

    Authentication is optional; it only affects ``canDelete``.

    Args:
        entity_id: Entity the comments belong to
        get_thread_use_case: Get thread use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)

    Returns:
        Thread with render hints
    """
    user = jwt_service.get_current_user(auth_token)
    return await get_thread_use_case.execute(
        GetCommentThreadRequest(entity_id=entity_id, user=user)
    )


@router.post("/{entity_id}", status_code=status.HTTP_201_CREATED)
async def create_comment(
    entity_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> JSONResponse:
    """Create a comment on an entity or reply to another comment.

    Requires authentication.

    Args:
        entity_id: Entity being commented on
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment in wire form

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user = _require_user(jwt_service, auth_token, "create")

    if request.author is not None and request.author != user.display_name:
        logfire.debug(
            "Ignoring author from request body",
            body_author=request.author,
            user_id=user.id,
        )

    try:
        created = await create_comment_use_case.execute(
            CreateCommentRequest(
                entity_id=entity_id,
                text=request.comment,
                user=user,
                parent_id=request.parent_id,
            )
        )
    except ValidationError as e:
        logfire.warn("Comment creation rejected", entity_id=entity_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    body: dict[str, Any] = created.model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=body)


@router.delete("/{entity_id}/{comment_id}")
async def delete_comment(
    entity_id: str,
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> JSONResponse:
    """Delete a comment and all of its replies.

    Only the comment author can delete.

    Args:
        entity_id: Entity the comment belongs to
        comment_id: Comment ID
        delete_comment_use_case: Delete comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        ``{"deletedCount": n}``

    Raises:
        HTTPException: If not authenticated, not authorized, or not found
    """
    user = _require_user(jwt_service, auth_token, "delete")

    try:
        result = await delete_comment_use_case.execute(
            DeleteCommentRequest(entity_id=entity_id, comment_id=comment_id, user=user)
        )
    except NotFoundError as e:
        logfire.warn("Comment delete failed - not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except Exception as e:
        logfire.error("Unexpected error deleting comment", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete comment",
        )

    return JSONResponse(content=result.model_dump(by_alias=True))
