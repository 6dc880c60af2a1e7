"""
Django Ninja API configuration.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from django.db import InterfaceError, OperationalError
from django.http import HttpRequest, HttpResponse
from ninja import NinjaAPI
from ninja.renderers import JSONRenderer
from ninja.errors import ValidationError, HttpError
from pydantic import ValidationError as PydanticValidationError

from .exceptions import BlogError, StorageError

logger = logging.getLogger(__name__)


class SuccessWrapperRenderer(JSONRenderer):
    """Wrap all responses in {success: true, data: ...} format for frontend compatibility."""

    def render(self, request: HttpRequest, data: Any, *, response_status: int) -> Any:
        # Don't wrap error responses (they already have success: false)
        if isinstance(data, dict) and "success" in data:
            return super().render(request, data, response_status=response_status)

        if 200 <= response_status < 300:
            wrapped = {"success": True, "data": data}
        else:
            wrapped = {"success": False, "error": data}

        return super().render(request, wrapped, response_status=response_status)


api = NinjaAPI(
    title="Blog Management API",
    version="1.0.0",
    description="Posts, comments and user management for the blog",
    renderer=SuccessWrapperRenderer(),
)


@api.exception_handler(BlogError)
def blog_errors(request: HttpRequest, exc: BlogError) -> HttpResponse:
    body = {"success": False, "error": exc.message}
    if exc.details:
        body["details"] = exc.details
    if getattr(exc, "retryable", False):
        body["retryable"] = True
    return api.create_response(request, body, status=exc.status_code)


@api.exception_handler(OperationalError)
@api.exception_handler(InterfaceError)
def storage_errors(request: HttpRequest, exc: Exception) -> HttpResponse:
    logger.error(f"[API] Storage failure on {request.method} {request.path}: {exc}")
    return blog_errors(request, StorageError())


@api.exception_handler(ValidationError)
def validation_errors(request: HttpRequest, exc: ValidationError) -> HttpResponse:
    return api.create_response(
        request,
        {"success": False, "error": exc.errors},
        status=422,
    )


@api.exception_handler(PydanticValidationError)
def pydantic_validation_errors(request: HttpRequest, exc: PydanticValidationError) -> HttpResponse:
    return api.create_response(
        request,
        {"success": False, "error": exc.errors()},
        status=422,
    )


@api.exception_handler(HttpError)
def http_error_handler(request: HttpRequest, exc: HttpError) -> HttpResponse:
    return api.create_response(
        request,
        {"success": False, "error": str(exc)},
        status=exc.status_code,
    )


@api.exception_handler(Exception)
def generic_error_handler(request: HttpRequest, exc: Exception) -> HttpResponse:
    logger.exception(f"[API] Unhandled error on {request.method} {request.path}")
    return api.create_response(
        request,
        {"success": False, "error": "Server error"},
        status=500,
    )


# Health check
@api.get("/health")
def health_check(request: HttpRequest) -> dict:
    return {
        "status": "ok",
        "version": "1.0.0",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Import and register routers
from apps.users.api import router as users_router
from apps.blog.api import router as posts_router
from apps.comments.api import router as comments_router
from apps.admin.api import router as admin_router

api.add_router("/users", users_router, tags=["Users"])
api.add_router("/posts", posts_router, tags=["Posts"])
api.add_router("/comments", comments_router, tags=["Comments"])
api.add_router("/admin", admin_router, tags=["Admin"])
