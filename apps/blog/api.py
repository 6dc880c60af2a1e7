"""
Blog API endpoints.
"""

from django.http import HttpRequest
from ninja import Router

from apps.comments.schemas import LikeOut
from apps.users.models import UserRole
from utils.auth import AuthBearer, OptionalAuthBearer, get_current_user, get_optional_user, require_role
from utils.pagination import paginate
from .schemas import PostOut, PostDetailOut, PostsListOut, PostCreateIn, PostUpdateIn
from .services import posts

router = Router()


@router.get("/", response=PostsListOut)
def list_posts(
    request: HttpRequest,
    page: int = 1,
    limit: int | None = None,
    category: str | None = None,
    author: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    order: str = "desc",
):
    """List published posts."""
    queryset = posts.list_published(
        category=category,
        author=author,
        search=search,
        sort=sort,
        order=order,
    )
    items, pagination = paginate(queryset, page, limit)
    return {"posts": items, "pagination": pagination}


@router.get("/mine", response=PostsListOut, auth=AuthBearer())
def list_my_posts(
    request: HttpRequest,
    page: int = 1,
    limit: int | None = None,
    status: str | None = None,
):
    """List the current user's posts in every status."""
    user = get_current_user(request)
    items, pagination = paginate(posts.list_by_author(user, status=status), page, limit)
    return {"posts": items, "pagination": pagination}


@router.get("/category/{category}", response=list[PostOut])
def list_posts_by_category(request: HttpRequest, category: str):
    """List published posts in a category."""
    return list(posts.list_published(category=category))


@router.get("/{lookup}", response=PostDetailOut, auth=OptionalAuthBearer())
def get_post(request: HttpRequest, lookup: str):
    """Get a post by id or slug. Drafts are visible to their author and admins only."""
    post = posts.get_visible(lookup, get_optional_user(request))
    posts.record_view(post)
    return post


@router.post("/", response={201: PostDetailOut}, auth=AuthBearer())
def create_post(request: HttpRequest, data: PostCreateIn):
    """Create a new post (authors and admins)."""
    user = require_role(request, UserRole.AUTHOR, UserRole.ADMIN)
    return 201, posts.create(user, data.to_fields())


@router.put("/{lookup}", response=PostDetailOut, auth=AuthBearer())
def update_post(request: HttpRequest, lookup: str, data: PostUpdateIn):
    """Update a post (owner or admin)."""
    user = get_current_user(request)
    return posts.update(lookup, data.to_fields(), user)


@router.delete("/{lookup}", auth=AuthBearer())
def delete_post(request: HttpRequest, lookup: str):
    """Delete a post and its comments (owner or admin)."""
    user = get_current_user(request)
    posts.delete(lookup, user)
    return {"message": "Post deleted successfully"}


@router.put("/{lookup}/like", response=LikeOut, auth=AuthBearer())
def like_post(request: HttpRequest, lookup: str):
    """Like or unlike a post."""
    user = get_current_user(request)
    likes_count, is_liked = posts.toggle_like(lookup, user)
    return LikeOut(likesCount=likes_count, isLiked=is_liked)
