"""
Comment operations.
"""

import logging
import uuid
from datetime import datetime, timezone

from django.conf import settings
from django.db import InterfaceError, OperationalError, transaction
from django.db.models import Count, QuerySet

from apps.blog.models import PostStatus
from apps.blog.services import can_manage, posts
from apps.users.models import User, UserRole
from core.exceptions import Forbidden, NotFound, StorageError, ValidationError
from .models import Comment, CommentLike

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 1000


def _clean_content(content: str | None) -> str:
    content = (content or "").strip()
    if not content or len(content) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Comment content is required and cannot exceed {MAX_CONTENT_LENGTH} characters"
        )
    return content


def _as_uuid(value, label: str) -> uuid.UUID:
    try:
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
    except ValueError:
        raise ValidationError(f"Valid {label} ID is required")


class CommentRepository:
    def queryset(self) -> QuerySet:
        return (
            Comment.objects.select_related("author", "post")
            .annotate(like_total=Count("like_set", distinct=True), reply_total=Count("replies", distinct=True))
        )

    def get(self, comment_id) -> Comment:
        comment = self.queryset().filter(id=_as_uuid(comment_id, "comment")).first()
        if comment is None:
            raise NotFound("Comment not found")
        return comment

    def get_visible(self, comment_id, viewer: User | None) -> Comment:
        """A comment is hidden wherever its post is hidden."""
        comment = self.get(comment_id)
        if comment.post.status != PostStatus.PUBLISHED and not can_manage(comment.post, viewer):
            raise NotFound("Comment not found")
        return comment

    def for_post(self, post_id, viewer: User | None = None) -> QuerySet:
        """Approved top-level comments of a post, newest first."""
        post = posts.get_visible(_as_uuid(post_id, "post"), viewer)
        return (
            self.queryset()
            .filter(post_id=post.id, parent_comment__isnull=True, is_approved=True)
            .prefetch_related("replies__author")
            .order_by("-created_at")
        )

    def recent(self, limit: int = 10) -> QuerySet:
        if not 1 <= limit <= settings.BLOG_MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {settings.BLOG_MAX_PAGE_SIZE}")
        return self.queryset().filter(is_approved=True).order_by("-created_at")[:limit]

    def create(self, author: User, post_id, content: str, parent_id=None) -> Comment:
        """Add a comment. Replies to replies attach to the top-level parent."""
        content = _clean_content(content)

        post = posts.get_visible(_as_uuid(post_id, "post"), author)

        parent = None
        if parent_id:
            parent = Comment.objects.filter(id=_as_uuid(parent_id, "parent comment")).first()
            if parent is None:
                raise NotFound("Parent comment not found")
            if parent.post_id != post.id:
                raise ValidationError("Parent comment belongs to a different post")
            if parent.parent_comment_id is not None:
                parent = parent.parent_comment

        try:
            comment = Comment.objects.create(
                content=content,
                author=author,
                post=post,
                parent_comment=parent,
            )
        except (OperationalError, InterfaceError) as e:
            raise StorageError() from e

        logger.info(f"[Comments] {author.username} commented on post {post.id}")
        return self.get(comment.id)

    def update(self, comment_id, content: str, caller: User) -> Comment:
        """Edit content. Only the author may edit."""
        content = _clean_content(content)
        comment = self.get(comment_id)
        if comment.author_id != caller.id:
            raise Forbidden("Not authorized to update this comment")

        comment.content = content
        comment.edited = True
        comment.edited_at = datetime.now(timezone.utc)
        comment.save(update_fields=["content", "edited", "edited_at", "updated_at"])
        return comment

    def delete(self, comment_id, caller: User) -> None:
        """Delete a comment together with its direct replies."""
        comment = self.get(comment_id)
        if comment.author_id != caller.id and caller.role != UserRole.ADMIN:
            raise Forbidden("Not authorized to delete this comment")

        try:
            with transaction.atomic():
                Comment.objects.filter(parent_comment=comment).delete()
                comment.delete()
        except (OperationalError, InterfaceError) as e:
            raise StorageError() from e

    def toggle_like(self, comment_id, user: User) -> tuple[int, bool]:
        """Like or unlike. Returns (likes count, liked now)."""
        comment = self.get_visible(comment_id, user)
        with transaction.atomic():
            removed, _ = CommentLike.objects.filter(comment=comment, user=user).delete()
            if not removed:
                CommentLike.objects.get_or_create(comment=comment, user=user)
        return comment.likes.count(), not removed


comments = CommentRepository()
