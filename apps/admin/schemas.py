"""
Admin schemas for API.
"""

from datetime import datetime
from uuid import UUID
from ninja import Schema
from pydantic import Field, ConfigDict

from apps.blog.schemas import PaginationOut
from apps.users.schemas import UserUpdateIn


class AdminUserOut(Schema):
    """Admin user output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    email: str
    username: str
    firstName: str | None = Field(validation_alias="first_name", default=None)
    lastName: str | None = Field(validation_alias="last_name", default=None)
    bio: str | None = None
    avatar: str | None = None
    role: str
    isActive: bool = Field(validation_alias="is_active", default=True)
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class AdminUserDetailOut(AdminUserOut):
    postsCount: int = 0

    @staticmethod
    def resolve_postsCount(obj) -> int:
        return obj.posts.count()


class AdminUserUpdateIn(UserUpdateIn):
    role: str | None = None
    isActive: bool | None = None


class UsersListOut(Schema):
    """Paginated users list response."""

    users: list[AdminUserOut]
    pagination: PaginationOut


class RecentUserOut(Schema):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    username: str
    firstName: str | None = Field(validation_alias="first_name", default=None)
    lastName: str | None = Field(validation_alias="last_name", default=None)
    role: str
    createdAt: datetime = Field(validation_alias="created_at")


class UserStatsOut(Schema):
    """User and post counts for the admin dashboard."""

    totalUsers: int
    activeUsers: int
    adminUsers: int
    authorUsers: int
    totalPosts: int
    publishedPosts: int
    recentUsers: list[RecentUserOut]
