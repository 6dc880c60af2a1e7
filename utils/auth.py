"""
JWT Authentication utilities for Django Ninja.

Tokens are issued by the identity service; this module only verifies them.
"""

from typing import Any

import jwt
from django.conf import settings
from django.http import HttpRequest
from ninja.errors import HttpError
from ninja.security import HttpBearer

from apps.users.models import User, UserRole


def verify_token(token: str) -> dict[str, Any] | None:
    """Verify JWT token and return payload."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.InvalidTokenError:
        return None


def _user_from_token(request: HttpRequest, token: str) -> User | None:
    payload = verify_token(token)
    if not payload:
        return None
    user_id = payload.get("userId")
    if not user_id:
        return None

    user = User.objects.filter(id=user_id, is_active=True).first()
    if user:
        request.auth_user = user
    return user


class AuthBearer(HttpBearer):
    """JWT Bearer token authentication."""

    def authenticate(self, request: HttpRequest, token: str) -> User | None:
        return _user_from_token(request, token)


class OptionalAuthBearer(HttpBearer):
    """Optional JWT authentication - anonymous requests pass through."""

    def __call__(self, request: HttpRequest) -> Any:
        user = super().__call__(request)
        # Ninja treats a falsy result as an auth failure; let anonymous calls in.
        return user or True

    def authenticate(self, request: HttpRequest, token: str) -> User | None:
        if not token:
            return None
        return _user_from_token(request, token)


def get_current_user(request: HttpRequest) -> User:
    """Get authenticated user from request."""
    return getattr(request, "auth_user", request.auth)


def get_optional_user(request: HttpRequest) -> User | None:
    """Get the user behind an OptionalAuthBearer route, or None."""
    return getattr(request, "auth_user", None)


def require_admin(request: HttpRequest) -> User:
    """Require admin role."""
    user = get_current_user(request)
    if user.role != UserRole.ADMIN:
        raise HttpError(403, "Admin access required")
    return user


def require_role(request: HttpRequest, *roles: str) -> User:
    """Require one of the given roles."""
    user = get_current_user(request)
    if user.role not in roles:
        raise HttpError(403, f"User role {user.role} is not authorized to access this route")
    return user
