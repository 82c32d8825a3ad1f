"""Application layer DI providers."""

from dishka import Scope, provide

from canopy.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetCommentThreadUseCase,
)
from canopy.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Comment use cases, built per request from their constructor hints."""

    scope = Scope.REQUEST

    create_comment = provide(CreateCommentUseCase)
    get_comments = provide(GetCommentsUseCase)
    get_thread = provide(GetCommentThreadUseCase)
    delete_comment = provide(DeleteCommentUseCase)
