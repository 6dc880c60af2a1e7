"""
User model - the ownership anchor for posts and comments.
"""

import uuid

import bcrypt
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager


class UserRole(models.TextChoices):
    AUTHOR = "author", "Author"
    ADMIN = "admin", "Admin"


def hash_password(password: str) -> str:
    """Hash password using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash."""
    return bcrypt.checkpw(password.encode(), hashed.encode())


class UserManager(BaseUserManager):
    def create_user(self, email: str, username: str, password: str | None = None, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, username=username, **extra_fields)
        if password:
            user.password = hash_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email: str, username: str, password: str, **extra_fields):
        extra_fields.setdefault("role", UserRole.ADMIN)
        extra_fields.setdefault("is_active", True)
        return self.create_user(email, username, password, **extra_fields)


class User(AbstractBaseUser):
    """Blog user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    username = models.CharField(max_length=20, unique=True)
    password = models.CharField(max_length=255, null=True, blank=True)
    first_name = models.CharField(max_length=50, null=True, blank=True, db_column="firstName")
    last_name = models.CharField(max_length=50, null=True, blank=True, db_column="lastName")
    bio = models.TextField(max_length=500, null=True, blank=True)
    avatar = models.URLField(max_length=500, null=True, blank=True)
    role = models.CharField(max_length=10, choices=UserRole.choices, default=UserRole.AUTHOR)

    is_active = models.BooleanField(default=True, db_column="isActive")

    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")
    last_login = models.DateTimeField(null=True, blank=True, db_column="last_login")

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        db_table = "users"

    def __str__(self) -> str:
        return self.username

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def check_password(self, raw_password: str) -> bool:
        if not self.password:
            return False
        return verify_password(raw_password, self.password)
