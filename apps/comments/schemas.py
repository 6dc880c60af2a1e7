"""
Comment schemas for API.
"""

from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import Field, ConfigDict

from apps.users.schemas import AuthorOut


def _like_count(obj) -> int:
    total = getattr(obj, "like_total", None)
    return total if total is not None else obj.likes.count()


class ReplyOut(Schema):
    """Reply embedded under its top-level comment."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    content: str
    author: AuthorOut
    likeCount: int = 0
    edited: bool = False
    editedAt: datetime | None = Field(validation_alias="edited_at", default=None)
    createdAt: datetime = Field(validation_alias="created_at")

    @staticmethod
    def resolve_likeCount(obj) -> int:
        return _like_count(obj)


class PostRefOut(Schema):
    id: UUID
    title: str
    slug: str


class CommentOut(Schema):
    """Comment output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    content: str
    author: AuthorOut
    postId: UUID = Field(validation_alias="post_id")
    parentComment: UUID | None = Field(validation_alias="parent_comment_id", default=None)
    isApproved: bool = Field(validation_alias="is_approved", default=True)
    edited: bool = False
    editedAt: datetime | None = Field(validation_alias="edited_at", default=None)
    likeCount: int = 0
    replyCount: int = 0
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    @staticmethod
    def resolve_likeCount(obj) -> int:
        return _like_count(obj)

    @staticmethod
    def resolve_replyCount(obj) -> int:
        total = getattr(obj, "reply_total", None)
        return total if total is not None else obj.replies.count()


class CommentThreadOut(CommentOut):
    """Top-level comment with its replies."""

    replies: list[ReplyOut] = []

    @staticmethod
    def resolve_replies(obj):
        return list(obj.replies.all())


class CommentDetailOut(CommentThreadOut):
    post: PostRefOut


class CommentCreateIn(Schema):
    content: str = Field(min_length=1, max_length=1000)
    post: UUID
    parentComment: UUID | None = None


class CommentUpdateIn(Schema):
    content: str = Field(min_length=1, max_length=1000)


class LikeOut(Schema):
    likesCount: int
    isLiked: bool
