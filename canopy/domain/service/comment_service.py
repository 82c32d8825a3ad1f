"""Comment domain service."""

import secrets

import logfire

from canopy.config import CommentSettings
from canopy.domain.error import ValidationError
from canopy.domain.model import Comment, CommentNode, CurrentUser
from canopy.domain.repository import CommentRepository
from canopy.domain.value import CommentId, EntityId, ReplyNotification, UserId
from canopy.util.time import utc_now

from .comment_tree import collect_subtree_ids, reconstruct
from .notification import NotificationDispatcher


def generate_comment_id() -> CommentId:
    """Generate a comment id: epoch milliseconds plus a random suffix."""
    millis = int(utc_now().timestamp() * 1000)
    return CommentId(f"{millis}-{secrets.token_hex(4)}")


class CommentService:
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        notification_dispatcher: NotificationDispatcher,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            notification_dispatcher: Background delivery of reply notifications
            comment_settings: Comment limits and display settings
        """
        self.comment_repository = comment_repository
        self.notification_dispatcher = notification_dispatcher
        self.comment_settings = comment_settings

    async def create_comment(
        self,
        entity_id: EntityId,
        author: str,
        author_id: UserId | None,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on an entity or a reply to another comment.

        A reply whose parent no longer exists is still saved; it shows up as
        a top-level comment when the thread is rebuilt. If the parent exists
        and belongs to someone else, its author is notified.

        Args:
            entity_id: Entity the comment is posted on
            author: Author display name
            author_id: Author user ID (None for anonymous legacy clients)
            text: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If text is empty or too long
        """
        with logfire.span(
            "comment_service.create_comment",
            entity_id=entity_id,
            author_id=author_id,
            parent_id=parent_id,
        ):
            body = text.strip()
            if not body:
                raise ValidationError("Comment text is required")
            if len(body) > self.comment_settings.max_text_length:
                raise ValidationError(
                    f"Comment text exceeds {self.comment_settings.max_text_length} characters"
                )

            parent: Comment | None = None
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(entity_id, parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found, reply will display top-level",
                        parent_id=parent_id,
                        entity_id=entity_id,
                    )

            comment = Comment(
                id=generate_comment_id(),
                entity_id=entity_id,
                author=author,
                author_id=author_id,
                text=body,
                parent_id=parent_id,
                created_at=utc_now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                entity_id=entity_id,
                is_reply=saved.is_reply,
                mentions=len(saved.mentions),
            )

            if parent is not None:
                self._notify_parent_author(parent, saved)
            return saved

    def _notify_parent_author(self, parent: Comment, reply: Comment) -> None:
        """Tell the parent's author about a reply, unless they replied to themselves.

        Delivery happens in the background, so the reply never waits on it.
        """
        if parent.author_id is None or parent.author_id == reply.author_id:
            return

        notification = ReplyNotification(
            recipient_id=parent.author_id,
            actor_name=reply.author,
            actor_id=reply.author_id,
            entity_id=reply.entity_id,
            comment_id=reply.id,
            parent_comment_id=parent.id,
        )
        self.notification_dispatcher.dispatch(notification)

    async def get_comments(self, entity_id: EntityId) -> list[Comment]:
        """Get the flat comment list of an entity.

        Args:
            entity_id: Entity ID

        Returns:
            Comments in storage order
        """
        with logfire.span("comment_service.get_comments", entity_id=entity_id):
            comments = await self.comment_repository.find_by_entity(entity_id)
            logfire.info(
                "Comments retrieved for entity",
                entity_id=entity_id,
                count=len(comments),
            )
            return comments

    async def get_thread(self, entity_id: EntityId) -> list[CommentNode]:
        """Get the nested thread of an entity, newest first at every level."""
        comments = await self.get_comments(entity_id)
        return reconstruct(comments)

    async def get_comment(
        self, entity_id: EntityId, comment_id: CommentId
    ) -> Comment | None:
        """Get a comment by ID.

        Args:
            entity_id: Entity ID
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment", entity_id=entity_id, comment_id=comment_id
        ):
            comment = await self.comment_repository.find_by_id(entity_id, comment_id)
            if comment:
                logfire.info("Comment found", comment_id=comment_id)
            else:
                logfire.warn("Comment not found", comment_id=comment_id)
            return comment

    async def delete_comment(self, entity_id: EntityId, comment_id: CommentId) -> int:
        """Delete a comment and all of its replies.

        Args:
            entity_id: Entity ID
            comment_id: Comment ID

        Returns:
            Number of deleted comments (1 + descendants), 0 if not found
        """
        with logfire.span(
            "comment_service.delete_comment",
            entity_id=entity_id,
            comment_id=comment_id,
        ):
            comments = await self.comment_repository.find_by_entity(entity_id)
            subtree_ids = collect_subtree_ids(comments, comment_id)
            if not subtree_ids:
                logfire.warn(
                    "Comment not found for delete",
                    entity_id=entity_id,
                    comment_id=comment_id,
                )
                return 0

            deleted = await self.comment_repository.delete_many(
                entity_id, [CommentId(cid) for cid in subtree_ids]
            )
            if deleted != len(subtree_ids):
                # Another client removed part of the subtree first
                logfire.warn(
                    "Deleted fewer comments than expected",
                    expected=len(subtree_ids),
                    deleted=deleted,
                )
            logfire.info(
                "Comment deleted",
                entity_id=entity_id,
                comment_id=comment_id,
                deleted_count=deleted,
            )
            return deleted

    @staticmethod
    def can_delete(comment: Comment, user: CurrentUser | None) -> bool:
        """Whether ``user`` may delete ``comment``.

        Owners are matched by author_id. Legacy comments without an author_id
        fall back to matching the author's display name.
        """
        if user is None:
            return False
        if comment.author_id is not None:
            return comment.author_id == user.id
        return comment.author == user.display_name
