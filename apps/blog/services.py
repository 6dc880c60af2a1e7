"""
Post persistence pipeline.

Every create/update runs slug generation, uniqueness resolution, the
publication state rule and reading-time recomputation before the row is
written. The unique index on ``posts.slug`` is the only concurrency guard:
two requests with the same title can both pass ``resolve_unique_slug`` and
the loser of the insert race gets one retry with a fresh suffix search.
"""

import logging
import math
import re
import uuid
from datetime import datetime, timezone

from django.conf import settings
from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from django.db.models import Count, F, Q, QuerySet
from django.utils.html import strip_tags

from apps.comments.models import Comment
from apps.users.models import User, UserRole
from core.exceptions import Conflict, Forbidden, NotFound, StorageError, ValidationError
from .models import Post, PostLike, PostStatus

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "untitled"
AUTHORING_ROLES = (UserRole.AUTHOR, UserRole.ADMIN)

# Model field -> max length, checked before any write.
FIELD_LIMITS = {
    "title": 200,
    "excerpt": 300,
    "category": 50,
    "seo_title": 60,
    "seo_description": 160,
}
TAG_MAX_LENGTH = 30

SORT_FIELDS = {
    "title": "title",
    "publishedAt": "published_at",
    "views": "views",
    "readingTime": "reading_time",
    "createdAt": "created_at",
}


def slugify(title: str, max_length: int | None = None) -> str:
    """Turn a title into a lowercase, hyphenated URL segment."""
    max_length = max_length or settings.BLOG_SLUG_MAX_LENGTH
    text = re.sub(r"[^a-z0-9\s]", "", title.lower())
    text = re.sub(r"\s+", "-", text.strip())
    text = text[:max_length].strip("-")
    return text or DEFAULT_SLUG


def resolve_unique_slug(candidate: str, post_id: uuid.UUID | None = None) -> str:
    """Append -2, -3, ... to ``candidate`` until no other post holds it."""
    others = Post.objects.all()
    if post_id is not None:
        others = others.exclude(id=post_id)

    slug = candidate
    counter = 2
    while others.filter(slug=slug).exists():
        slug = f"{candidate}-{counter}"
        counter += 1
    return slug


def compute_reading_time(content: str | None, words_per_minute: int | None = None) -> int:
    """Minutes to read ``content``: ceil(words / wpm), at least 1 when non-empty."""
    if not content or not content.strip():
        return 0
    words_per_minute = words_per_minute or settings.BLOG_WORDS_PER_MINUTE
    word_count = len(strip_tags(content).split())
    return max(1, math.ceil(word_count / words_per_minute))


def set_status(post: Post, status: str, now: datetime | None = None) -> None:
    """Move ``post`` to ``status``.

    Any state may move to any other. The first entry into ``published``
    stamps ``published_at``; it is never cleared or moved afterwards.
    """
    if status not in PostStatus.values:
        raise ValidationError(
            "Status must be draft, published, or archived",
            details=[{"field": "status", "value": status}],
        )

    if status == PostStatus.PUBLISHED and post.published_at is None:
        post.published_at = now or datetime.now(timezone.utc)
    post.status = status


def _parse_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _validate(fields: dict, creating: bool) -> dict:
    errors = []

    if "title" in fields or creating:
        title = (fields.get("title") or "").strip()
        if not title:
            errors.append({"field": "title", "message": "Title is required"})
        fields["title"] = title

    if "content" in fields or creating:
        content = (fields.get("content") or "").strip()
        if not content:
            errors.append({"field": "content", "message": "Content is required"})

    for name, limit in FIELD_LIMITS.items():
        value = fields.get(name)
        if value is not None and len(value) > limit:
            errors.append({"field": name, "message": f"Cannot exceed {limit} characters"})

    if "tags" in fields and fields["tags"] is None:
        fields["tags"] = []
    tags = fields.get("tags")
    if tags is not None:
        if not isinstance(tags, list):
            errors.append({"field": "tags", "message": "Tags must be an array"})
        elif any(len(tag) > TAG_MAX_LENGTH for tag in tags):
            errors.append({"field": "tags", "message": f"Each tag cannot exceed {TAG_MAX_LENGTH} characters"})
        else:
            fields["tags"] = [tag.strip() for tag in tags]

    if errors:
        raise ValidationError("Validation failed", details=errors)
    return fields


def can_manage(post: Post, user: User | None) -> bool:
    """Owner or admin."""
    if user is None:
        return False
    return user.role == UserRole.ADMIN or post.author_id == user.id


class PostRepository:
    """Persistence boundary for posts."""

    editable_fields = (
        "title",
        "content",
        "excerpt",
        "featured_image",
        "category",
        "tags",
        "seo_title",
        "seo_description",
    )

    def queryset(self) -> QuerySet:
        return Post.objects.select_related("author").annotate(
            like_total=Count("like_set", distinct=True),
            comment_total=Count("comments", distinct=True),
        )

    # ==================== READS ====================

    def get(self, lookup) -> Post:
        """Find a post by id, falling back to slug."""
        post = None
        post_id = _parse_uuid(lookup)
        if post_id is not None:
            post = self.queryset().filter(id=post_id).first()
        if post is None:
            post = self.queryset().filter(slug=str(lookup)).first()
        if post is None:
            raise NotFound("Post not found")
        return post

    def get_visible(self, lookup, viewer: User | None) -> Post:
        """Published posts are public; others only reach their owner or an admin."""
        post = self.get(lookup)
        if post.status != PostStatus.PUBLISHED and not can_manage(post, viewer):
            raise NotFound("Post not found")
        return post

    def record_view(self, post: Post) -> None:
        if post.status != PostStatus.PUBLISHED:
            return
        Post.objects.filter(pk=post.pk).update(views=F("views") + 1)
        post.views += 1

    def list_published(
        self,
        category: str | None = None,
        author: str | None = None,
        search: str | None = None,
        sort: str | None = None,
        order: str = "desc",
    ) -> QuerySet:
        queryset = self.queryset().filter(status=PostStatus.PUBLISHED)

        if category:
            queryset = queryset.filter(category=category)
        if author:
            author_id = _parse_uuid(author)
            if author_id is None:
                raise ValidationError("Valid author ID is required")
            queryset = queryset.filter(author_id=author_id)
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(content__icontains=search))

        if sort:
            if sort not in SORT_FIELDS:
                raise ValidationError("Invalid sort field")
            sort_field = SORT_FIELDS[sort]
            if order.lower() != "asc":
                sort_field = f"-{sort_field}"
            return queryset.order_by(sort_field)
        return queryset.order_by("-published_at")

    def list_by_author(self, author: User, status: str | None = None) -> QuerySet:
        queryset = self.queryset().filter(author=author)
        if status:
            if status not in PostStatus.values:
                raise ValidationError("Status must be draft, published, or archived")
            queryset = queryset.filter(status=status)
        return queryset.order_by("-created_at")

    # ==================== WRITES ====================

    def create(self, author: User, data: dict) -> Post:
        """Create a post owned by ``author``. Starts as draft unless told otherwise."""
        if author.role not in AUTHORING_ROLES:
            raise Forbidden(f"User role {author.role} is not authorized to create posts")

        fields = _validate({k: v for k, v in data.items() if k in self.editable_fields}, creating=True)
        post = Post(author=author, **fields)

        base_slug = slugify(data.get("slug") or post.title)
        post.slug = resolve_unique_slug(base_slug, post.id)
        post.reading_time = compute_reading_time(post.content)
        set_status(post, data.get("status") or PostStatus.DRAFT)

        self._commit(post, creating=True, base_slug=base_slug)
        logger.info(f"[Blog] Created post {post.id} slug={post.slug} by {author.username}")
        return post

    def update(self, lookup, data: dict, caller: User) -> Post:
        """Apply a partial update. ``author`` is never taken from ``data``."""
        post = self.get(lookup)
        if not can_manage(post, caller):
            raise Forbidden("Not authorized to update this post")

        fields = _validate({k: v for k, v in data.items() if k in self.editable_fields}, creating=False)
        title_changed = "title" in fields and fields["title"] != post.title
        content_changed = "content" in fields and fields["content"] != post.content

        for name, value in fields.items():
            setattr(post, name, value)

        base_slug = None
        if "slug" in data:
            if data["slug"]:
                explicit = slugify(data["slug"])
                if explicit != post.slug:
                    if Post.objects.filter(slug=explicit).exclude(id=post.id).exists():
                        raise Conflict(f"Slug '{explicit}' is already in use")
                    post.slug = explicit
            else:
                post.slug = ""

        if not post.slug and (title_changed or "slug" in data):
            base_slug = slugify(post.title)
            post.slug = resolve_unique_slug(base_slug, post.id)

        if content_changed:
            post.reading_time = compute_reading_time(post.content)

        if data.get("status") is not None and data["status"] != post.status:
            set_status(post, data["status"])

        self._commit(post, creating=False, base_slug=base_slug)
        logger.info(f"[Blog] Updated post {post.id} by {caller.username}")
        return post

    def delete(self, lookup, caller: User) -> None:
        """Delete a post and every comment on it."""
        post = self.get(lookup)
        if not can_manage(post, caller):
            raise Forbidden("Not authorized to delete this post")

        try:
            with transaction.atomic():
                removed, _ = Comment.objects.filter(post=post).delete()
                post.delete()
        except (OperationalError, InterfaceError) as e:
            raise StorageError() from e

        logger.info(f"[Blog] Deleted post {lookup} and {removed} comment rows by {caller.username}")

    def toggle_like(self, lookup, user: User) -> tuple[int, bool]:
        """Like or unlike. Returns (likes count, liked now)."""
        post = self.get_visible(lookup, user)
        try:
            with transaction.atomic():
                removed, _ = PostLike.objects.filter(post=post, user=user).delete()
                if not removed:
                    PostLike.objects.get_or_create(post=post, user=user)
        except (OperationalError, InterfaceError) as e:
            raise StorageError() from e
        return post.likes.count(), not removed

    def _commit(self, post: Post, creating: bool, base_slug: str | None) -> None:
        """Write ``post``; on a slug collision regenerate once, then give up with Conflict."""
        for attempt in range(2):
            try:
                with transaction.atomic():
                    post.save(force_insert=creating)
                return
            except IntegrityError as e:
                if base_slug is None or attempt:
                    raise Conflict(f"Slug '{post.slug}' is already in use, please retry") from e
                logger.warning(f"[Blog] Slug collision on '{post.slug}', regenerating")
                post.slug = resolve_unique_slug(base_slug, post.id)
            except (OperationalError, InterfaceError) as e:
                logger.error(f"[Blog] Storage failure writing post {post.id}: {e}")
                raise StorageError() from e


posts = PostRepository()
