"""
Pytest configuration and fixtures.
"""

import json
import pytest
from django.test import Client

from apps.blog.models import Post, PostStatus
from apps.users.models import User, UserRole, hash_password


class APIClient:
    """Wrapper around Django test client for API testing."""

    def __init__(self):
        self.client = Client()

    def _make_request(self, method, path, data=None, headers=None):
        """Make HTTP request."""
        kwargs = {"content_type": "application/json"}

        if headers:
            kwargs.update(headers)

        if data is not None:
            kwargs["data"] = json.dumps(data)

        # Prepend /api if not present
        if not path.startswith("/api"):
            path = f"/api{path}"

        response = getattr(self.client, method.lower())(path, **kwargs)
        return APIResponse(response)

    def get(self, path, headers=None, **kwargs):
        return self._make_request("GET", path, headers=headers)

    def post(self, path, json=None, headers=None, **kwargs):
        return self._make_request("POST", path, data=json, headers=headers)

    def put(self, path, json=None, headers=None, **kwargs):
        return self._make_request("PUT", path, data=json, headers=headers)

    def delete(self, path, headers=None, **kwargs):
        return self._make_request("DELETE", path, headers=headers)


class APIResponse:
    """Wrapper around Django response for easier testing."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        return json.loads(self._response.content)


@pytest.fixture
def api_client():
    """API test client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create admin user for testing."""
    return User.objects.create(
        email="admin@test.com",
        username="admin",
        first_name="Admin",
        role=UserRole.ADMIN,
        password=hash_password("Admin123"),
    )


@pytest.fixture
def author_user(db):
    """Create author user for testing."""
    return User.objects.create(
        email="author@test.com",
        username="author",
        first_name="Ada",
        role=UserRole.AUTHOR,
        password=hash_password("Author123"),
    )


@pytest.fixture
def other_author(db):
    """A second author who owns nothing in the fixtures."""
    return User.objects.create(
        email="other@test.com",
        username="other",
        role=UserRole.AUTHOR,
        password=hash_password("Other123"),
    )


@pytest.fixture
def published_post(author_user):
    return Post.objects.create(
        title="Published Post",
        slug="published-post",
        content="Some published words",
        status=PostStatus.PUBLISHED,
        author=author_user,
    )


@pytest.fixture
def draft_post(author_user):
    return Post.objects.create(
        title="Draft Post",
        slug="draft-post",
        content="Work in progress",
        status=PostStatus.DRAFT,
        author=author_user,
    )


def create_token(user):
    """Create JWT token for user."""
    import jwt
    from datetime import datetime, timedelta, timezone
    from django.conf import settings

    payload = {
        "userId": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(timezone.utc) + timedelta(hours=24),
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def admin_headers(admin_user):
    """Get auth headers for admin user."""
    token = create_token(admin_user)
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


@pytest.fixture
def author_headers(author_user):
    """Get auth headers for author user."""
    token = create_token(author_user)
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


@pytest.fixture
def other_headers(other_author):
    """Get auth headers for the second author."""
    token = create_token(other_author)
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}
