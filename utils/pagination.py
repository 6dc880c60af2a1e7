"""
Page/limit pagination shared by list endpoints.
"""

import math

from django.conf import settings
from django.db.models import QuerySet

from core.exceptions import ValidationError


def paginate(queryset: QuerySet, page: int = 1, limit: int | None = None) -> tuple[list, dict]:
    """Slice ``queryset`` and return (items, pagination info)."""
    limit = limit or settings.BLOG_PAGE_SIZE
    if page < 1:
        raise ValidationError("Page must be a positive integer")
    if not 1 <= limit <= settings.BLOG_MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {settings.BLOG_MAX_PAGE_SIZE}")

    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset : offset + limit])

    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit),
        "hasNext": page * limit < total,
        "hasPrev": page > 1,
    }
