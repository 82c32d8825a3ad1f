"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comments import GetCommentsRequest, GetCommentsUseCase
from .get_thread import (
    CommentThreadResponse,
    CommentView,
    GetCommentThreadRequest,
    GetCommentThreadUseCase,
)
from .wire import CommentWire

__all__ = [
    "CommentThreadResponse",
    "CommentView",
    "CommentWire",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentThreadRequest",
    "GetCommentThreadUseCase",
    "GetCommentsRequest",
    "GetCommentsUseCase",
]
