"""
Blog schemas for API.
"""

from datetime import datetime
from uuid import UUID
from ninja import Schema
from pydantic import Field, ConfigDict

from apps.comments.schemas import CommentOut
from apps.users.schemas import AuthorOut

# camelCase input key -> Post model field
POST_INPUT_FIELDS = {
    "title": "title",
    "slug": "slug",
    "content": "content",
    "excerpt": "excerpt",
    "featuredImage": "featured_image",
    "status": "status",
    "category": "category",
    "tags": "tags",
    "seoTitle": "seo_title",
    "seoDescription": "seo_description",
}


class PostOut(Schema):
    """Post list output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    slug: str
    excerpt: str | None = None
    featuredImage: str | None = Field(validation_alias="featured_image", default=None)
    status: str
    category: str | None = None
    tags: list[str] = []
    seoTitle: str | None = Field(validation_alias="seo_title", default=None)
    seoDescription: str | None = Field(validation_alias="seo_description", default=None)
    readingTime: int = Field(validation_alias="reading_time", default=0)
    views: int = 0
    likeCount: int = Field(validation_alias="like_count", default=0)
    commentCount: int = Field(validation_alias="comment_count", default=0)
    authorId: UUID = Field(validation_alias="author_id")
    author: AuthorOut | None = None
    publishedAt: datetime | None = Field(validation_alias="published_at", default=None)
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    @staticmethod
    def resolve_tags(obj) -> list[str]:
        return obj.tags if isinstance(obj.tags, list) else []


class PostDetailOut(PostOut):
    """Post detail output with content and comments."""

    content: str
    comments: list[CommentOut] = []

    @staticmethod
    def resolve_comments(obj):
        return list(obj.comments.filter(is_approved=True).select_related("author").order_by("created_at"))


class PaginationOut(Schema):
    """Pagination info."""

    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


class PostsListOut(Schema):
    """Paginated posts list response."""

    posts: list[PostOut]
    pagination: PaginationOut


class PostCreateIn(Schema):
    """Post create input."""

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    slug: str | None = None
    excerpt: str | None = Field(default=None, max_length=300)
    featuredImage: str | None = None
    status: str = "draft"
    category: str | None = Field(default=None, max_length=50)
    tags: list[str] = []
    seoTitle: str | None = Field(default=None, max_length=60)
    seoDescription: str | None = Field(default=None, max_length=160)

    def to_fields(self) -> dict:
        return {POST_INPUT_FIELDS[key]: value for key, value in self.dict().items()}


class PostUpdateIn(Schema):
    """Post update input."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    slug: str | None = None
    excerpt: str | None = Field(default=None, max_length=300)
    featuredImage: str | None = None
    status: str | None = None
    category: str | None = Field(default=None, max_length=50)
    tags: list[str] | None = None
    seoTitle: str | None = Field(default=None, max_length=60)
    seoDescription: str | None = Field(default=None, max_length=160)

    def to_fields(self) -> dict:
        """Only the keys the client sent, renamed to model fields."""
        return {POST_INPUT_FIELDS[key]: value for key, value in self.dict(exclude_unset=True).items()}
