"""
Admin API endpoints - user management and post moderation.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Q
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from utils.auth import AuthBearer, require_admin
from utils.pagination import paginate
from apps.users.models import User, UserRole
from apps.users.schemas import AuthorOut
from apps.users.services import update_user
from apps.blog.models import Post, PostStatus
from apps.blog.schemas import PostDetailOut, PostsListOut
from apps.blog.services import posts
from apps.comments.models import Comment
from .schemas import (
    AdminUserOut,
    AdminUserDetailOut,
    AdminUserUpdateIn,
    UsersListOut,
    UserStatsOut,
)

logger = logging.getLogger(__name__)

router = Router(auth=AuthBearer())


# ==================== USERS ====================


# IMPORTANT: /users/stats and /users/authors MUST be before /users/{user_id}
@router.get("/users/stats", response=UserStatsOut)
def get_user_stats(request: HttpRequest):
    """User and post statistics for the admin dashboard."""
    require_admin(request)

    return UserStatsOut(
        totalUsers=User.objects.count(),
        activeUsers=User.objects.filter(is_active=True).count(),
        adminUsers=User.objects.filter(role=UserRole.ADMIN).count(),
        authorUsers=User.objects.filter(role=UserRole.AUTHOR).count(),
        totalPosts=Post.objects.count(),
        publishedPosts=Post.objects.filter(status=PostStatus.PUBLISHED).count(),
        recentUsers=list(User.objects.order_by("-created_at")[:5]),
    )


@router.get("/users/authors", response=list[AuthorOut])
def list_authors(request: HttpRequest):
    """Active users who can own posts."""
    require_admin(request)
    return list(
        User.objects.filter(role__in=[UserRole.AUTHOR, UserRole.ADMIN], is_active=True).order_by("username")
    )


@router.get("/users", response=UsersListOut)
def list_users(
    request: HttpRequest,
    page: int = 1,
    limit: int | None = None,
    search: str | None = None,
    role: str | None = None,
    isActive: bool | None = None,
):
    """List all users with pagination (admin only)."""
    require_admin(request)

    queryset = User.objects.all()
    if search:
        queryset = queryset.filter(Q(email__icontains=search) | Q(username__icontains=search))
    if role:
        queryset = queryset.filter(role=role)
    if isActive is not None:
        queryset = queryset.filter(is_active=isActive)

    users, pagination = paginate(queryset.order_by("-created_at"), page, limit)
    return {"users": users, "pagination": pagination}


def _get_user(user_id: UUID) -> User:
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise HttpError(404, "User not found")


@router.get("/users/{user_id}", response=AdminUserDetailOut)
def get_user(request: HttpRequest, user_id: UUID):
    """Get user details with post count (admin only)."""
    require_admin(request)
    return _get_user(user_id)


@router.put("/users/{user_id}", response=AdminUserOut)
def update_user_by_admin(request: HttpRequest, user_id: UUID, data: AdminUserUpdateIn):
    """Update profile, role or active flag (admin only)."""
    require_admin(request)
    user = _get_user(user_id)

    if data.role is not None and data.role not in UserRole.values:
        raise HttpError(400, "Role must be admin or author")

    changes = data.dict(exclude_unset=True)
    extra = {"role": changes.pop("role", None), "is_active": changes.pop("isActive", None)}
    return update_user(user, changes, extra_fields=extra)


@router.delete("/users/{user_id}")
def delete_user(request: HttpRequest, user_id: UUID):
    """Delete a user together with their posts (admin only)."""
    admin = require_admin(request)

    if admin.id == user_id:
        raise HttpError(400, "Cannot delete your own account")

    user = _get_user(user_id)
    with transaction.atomic():
        Comment.objects.filter(post__author=user).delete()
        Post.objects.filter(author=user).delete()
        user.delete()

    logger.info(f"[Admin] {admin.username} deleted user {user_id}")
    return {"message": "User deleted successfully"}


# ==================== POSTS ====================


@router.get("/posts", response=PostsListOut)
def list_all_posts(
    request: HttpRequest,
    page: int = 1,
    limit: int | None = None,
    status: str | None = None,
    search: str | None = None,
):
    """List posts in every status (admin only)."""
    require_admin(request)

    queryset = posts.queryset()
    if status:
        queryset = queryset.filter(status=status)
    if search:
        queryset = queryset.filter(title__icontains=search)

    items, pagination = paginate(queryset.order_by("-created_at"), page, limit)
    return {"posts": items, "pagination": pagination}


@router.post("/posts/{lookup}/publish", response=PostDetailOut)
def publish_post(request: HttpRequest, lookup: str):
    """Publish a post (admin only)."""
    admin = require_admin(request)
    return posts.update(lookup, {"status": PostStatus.PUBLISHED}, admin)


@router.post("/posts/{lookup}/unpublish", response=PostDetailOut)
def unpublish_post(request: HttpRequest, lookup: str):
    """Revert a post to draft (admin only)."""
    admin = require_admin(request)
    return posts.update(lookup, {"status": PostStatus.DRAFT}, admin)


@router.post("/posts/{lookup}/archive", response=PostDetailOut)
def archive_post(request: HttpRequest, lookup: str):
    """Archive a post (admin only)."""
    admin = require_admin(request)
    return posts.update(lookup, {"status": PostStatus.ARCHIVED}, admin)
