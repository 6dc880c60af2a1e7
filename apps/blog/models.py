"""
Post model and its like memberships.
"""

import uuid
from django.db import models
from apps.users.models import User


class PostStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"
    ARCHIVED = "archived", "Archived"


class Post(models.Model):
    """Blog post model."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True)
    content = models.TextField()
    excerpt = models.CharField(max_length=300, null=True, blank=True)
    featured_image = models.URLField(max_length=500, null=True, blank=True, db_column="featuredImage")
    status = models.CharField(max_length=20, choices=PostStatus.choices, default=PostStatus.DRAFT)
    category = models.CharField(max_length=50, null=True, blank=True)
    tags = models.JSONField(default=list, blank=True)
    seo_title = models.CharField(max_length=60, null=True, blank=True, db_column="seoTitle")
    seo_description = models.CharField(max_length=160, null=True, blank=True, db_column="seoDescription")
    reading_time = models.IntegerField(default=0, db_column="readingTime")
    views = models.IntegerField(default=0)
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name="posts", db_column="authorId")
    likes = models.ManyToManyField(User, through="PostLike", related_name="liked_posts", blank=True)
    published_at = models.DateTimeField(null=True, blank=True, db_column="publishedAt")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "posts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["-published_at"]),
            models.Index(fields=["category"]),
        ]

    def __str__(self) -> str:
        return self.title

    # like_total and comment_total are annotated by PostRepository.queryset()
    @property
    def like_count(self) -> int:
        total = getattr(self, "like_total", None)
        return total if total is not None else self.likes.count()

    @property
    def comment_count(self) -> int:
        total = getattr(self, "comment_total", None)
        return total if total is not None else self.comments.count()


class PostLike(models.Model):
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="like_set", db_column="postId")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="post_likes", db_column="userId")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")

    class Meta:
        db_table = "post_likes"
        constraints = [
            models.UniqueConstraint(fields=["post", "user"], name="unique_post_like"),
        ]
