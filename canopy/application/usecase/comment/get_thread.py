"""Get comment thread use case."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from canopy.application.usecase.base import BaseUseCase
from canopy.config import CommentSettings
from canopy.domain.model import CommentNode, CurrentUser
from canopy.domain.service import CommentService, DisplayPolicy
from canopy.domain.service.comment_tree import count_nodes
from canopy.domain.value import CommentPath, EntityId, TextSegment, segment_text
from canopy.util.time import format_relative_time, utc_now


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommentView(CamelModel):
    """A comment as displayed, with its replies.

    ``path`` addresses the node in this response only; it changes as soon
    as comments are added or removed above it.
    """

    id: str
    author: str
    author_id: str | None
    text: str
    date: datetime
    time_ago: str
    parent_id: str | None
    mentions: list[str]
    segments: list[TextSegment]
    path: str
    depth: int
    indent: int
    nested: bool
    collapsible: bool
    reply_count: int
    can_delete: bool
    replies: list["CommentView"]


class GetCommentThreadRequest(BaseModel):
    """Get comment thread request."""

    entity_id: str
    user: CurrentUser | None = None  # Viewer, used for delete affordances


class CommentThreadResponse(CamelModel):
    """Get comment thread response."""

    entity_id: str
    comments: list[CommentView]
    total: int
    refresh_after_seconds: float


class GetCommentThreadUseCase(
    BaseUseCase[GetCommentThreadRequest, CommentThreadResponse]
):
    """Use case for getting the rendered, nested thread of an entity."""

    def __init__(
        self, comment_service: CommentService, comment_settings: CommentSettings
    ) -> None:
        """Initialize get comment thread use case.

        Args:
            comment_service: Comment domain service
            comment_settings: Display depths and poll interval
        """
        self.comment_service = comment_service
        self.comment_settings = comment_settings
        self.policy = DisplayPolicy(
            max_nested_depth=comment_settings.max_nested_depth,
            collapsible_depth=comment_settings.collapsible_depth,
        )

    async def execute(self, request: GetCommentThreadRequest) -> CommentThreadResponse:
        """Execute get thread flow.

        Args:
            request: Entity ID and optional viewer

        Returns:
            Thread newest first, with render hints on every node
        """
        tree = await self.comment_service.get_thread(EntityId(request.entity_id))
        now = utc_now()
        views = [
            self._to_view(node, CommentPath.from_indices([index]), request.user, now)
            for index, node in enumerate(tree)
        ]
        return CommentThreadResponse(
            entity_id=request.entity_id,
            comments=views,
            total=count_nodes(tree),
            refresh_after_seconds=self.comment_settings.poll_interval_seconds,
        )

    def _to_view(
        self,
        node: CommentNode,
        path: CommentPath,
        user: CurrentUser | None,
        now: datetime,
    ) -> CommentView:
        comment = node.comment
        depth = path.depth
        return CommentView(
            id=comment.id,
            author=comment.author,
            author_id=comment.author_id,
            text=comment.text,
            date=comment.created_at,
            time_ago=format_relative_time(comment.created_at, now=now),
            parent_id=comment.parent_id,
            mentions=comment.mentions,
            segments=segment_text(comment.text),
            path=str(path),
            depth=depth,
            indent=self.policy.indent_level(depth),
            nested=self.policy.is_nested(depth),
            collapsible=self.policy.is_collapsible(depth, len(node.replies)),
            reply_count=len(node.replies),
            can_delete=self.comment_service.can_delete(comment, user),
            replies=[
                self._to_view(reply, path.child(index), user, now)
                for index, reply in enumerate(node.replies)
            ],
        )
