"""
Comment model - single-level threaded comments on posts.
"""

import uuid
from django.db import models
from apps.users.models import User
from apps.blog.models import Post


class Comment(models.Model):
    """Comment on a post, optionally replying to a top-level comment."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    content = models.TextField(max_length=1000)
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name="comments", db_column="authorId")
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments", db_column="postId")
    parent_comment = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="replies",
        db_column="parentComment",
    )
    is_approved = models.BooleanField(default=True, db_column="isApproved")
    likes = models.ManyToManyField(User, through="CommentLike", related_name="liked_comments", blank=True)
    edited = models.BooleanField(default=False)
    edited_at = models.DateTimeField(null=True, blank=True, db_column="editedAt")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "comments"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["post"]),
            models.Index(fields=["parent_comment"]),
            models.Index(fields=["-created_at"]),
        ]

    def __str__(self) -> str:
        return self.content[:20]


class CommentLike(models.Model):
    comment = models.ForeignKey(Comment, on_delete=models.CASCADE, related_name="like_set", db_column="commentId")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="comment_likes", db_column="userId")
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")

    class Meta:
        db_table = "comment_likes"
        constraints = [
            models.UniqueConstraint(fields=["comment", "user"], name="unique_comment_like"),
        ]
