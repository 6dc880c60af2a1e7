"""
User account operations shared by the users and admin routers.
"""

import logging

from django.db import IntegrityError, transaction

from core.exceptions import Conflict, ValidationError
from .models import User, hash_password

logger = logging.getLogger(__name__)

# Profile fields a user may clear by sending null
NULLABLE_FIELDS = {"first_name", "last_name", "bio", "avatar"}

PROFILE_FIELDS = {
    "username": "username",
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
    "bio": "bio",
    "avatar": "avatar",
}


def _ensure_identity_free(username: str | None, email: str | None, exclude_id=None) -> None:
    queryset = User.objects.all()
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)

    if username and queryset.filter(username=username).exists():
        raise ValidationError("Username already taken")
    if email and queryset.filter(email=email).exists():
        raise ValidationError("Email already registered")


def register_user(
    username: str,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Create a new author account."""
    _ensure_identity_free(username, email)

    try:
        with transaction.atomic():
            user = User.objects.create(
                username=username,
                email=email,
                password=hash_password(password),
                first_name=first_name,
                last_name=last_name,
            )
    except IntegrityError:
        raise Conflict("Username or email already registered")

    logger.info(f"[Users] Registered {user.username} ({user.email})")
    return user


def update_user(user: User, changes: dict, extra_fields: dict | None = None) -> User:
    """Apply profile changes (camelCase keys) plus optional raw model fields."""
    fields = {
        PROFILE_FIELDS[key]: value
        for key, value in changes.items()
        if key in PROFILE_FIELDS and (value is not None or PROFILE_FIELDS[key] in NULLABLE_FIELDS)
    }
    if extra_fields:
        fields.update({k: v for k, v in extra_fields.items() if v is not None})

    _ensure_identity_free(fields.get("username"), fields.get("email"), exclude_id=user.id)

    for name, value in fields.items():
        setattr(user, name, value)

    try:
        with transaction.atomic():
            user.save()
    except IntegrityError:
        raise Conflict("Username or email already registered")
    return user
