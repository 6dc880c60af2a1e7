"""
Comments API endpoints.
"""

from django.http import HttpRequest
from ninja import Router

from utils.auth import AuthBearer, OptionalAuthBearer, get_current_user, get_optional_user, require_admin
from .schemas import (
    CommentOut,
    CommentThreadOut,
    CommentDetailOut,
    CommentCreateIn,
    CommentUpdateIn,
    LikeOut,
)
from .services import comments

router = Router()


@router.get("/post/{post_id}", response=list[CommentThreadOut], auth=OptionalAuthBearer())
def list_post_comments(request: HttpRequest, post_id: str):
    """Approved top-level comments of a post, with replies."""
    return list(comments.for_post(post_id, get_optional_user(request)))


# IMPORTANT: /recent MUST be before /{comment_id}
@router.get("/recent", response=list[CommentDetailOut], auth=AuthBearer())
def list_recent_comments(request: HttpRequest, limit: int = 10):
    """Most recent comments across all posts (admin only)."""
    require_admin(request)
    return list(comments.recent(limit))


@router.get("/{comment_id}", response=CommentDetailOut, auth=OptionalAuthBearer())
def get_comment(request: HttpRequest, comment_id: str):
    """Get a comment with its post and replies."""
    return comments.get_visible(comment_id, get_optional_user(request))


@router.post("/", response={201: CommentOut}, auth=AuthBearer())
def create_comment(request: HttpRequest, data: CommentCreateIn):
    """Comment on a post, or reply to a comment."""
    user = get_current_user(request)
    comment = comments.create(user, data.post, data.content, parent_id=data.parentComment)
    return 201, comment


@router.put("/{comment_id}", response=CommentOut, auth=AuthBearer())
def update_comment(request: HttpRequest, comment_id: str, data: CommentUpdateIn):
    """Edit a comment (author only)."""
    user = get_current_user(request)
    return comments.update(comment_id, data.content, user)


@router.delete("/{comment_id}", auth=AuthBearer())
def delete_comment(request: HttpRequest, comment_id: str):
    """Delete a comment and its replies (author or admin)."""
    user = get_current_user(request)
    comments.delete(comment_id, user)
    return {"message": "Comment deleted successfully"}


@router.put("/{comment_id}/like", response=LikeOut, auth=AuthBearer())
def like_comment(request: HttpRequest, comment_id: str):
    """Like or unlike a comment."""
    user = get_current_user(request)
    likes_count, is_liked = comments.toggle_like(comment_id, user)
    return LikeOut(likesCount=likes_count, isLiked=is_liked)
