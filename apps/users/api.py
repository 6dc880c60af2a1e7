"""
Users API endpoints.
"""

from ninja import Router
from django.http import HttpRequest

from utils.auth import AuthBearer, get_current_user
from .schemas import RegisterIn, UserProfileOut, UserUpdateIn
from .services import register_user, update_user

router = Router()


@router.post("/register", response={201: UserProfileOut})
def register(request: HttpRequest, data: RegisterIn):
    """Register a new author account."""
    user = register_user(
        username=data.username,
        email=data.email,
        password=data.password,
        first_name=data.firstName,
        last_name=data.lastName,
    )
    return 201, user


@router.get("/me", response=UserProfileOut, auth=AuthBearer())
def get_profile(request: HttpRequest):
    """Get current user profile."""
    return get_current_user(request)


@router.put("/me", response=UserProfileOut, auth=AuthBearer())
def update_profile(request: HttpRequest, data: UserUpdateIn):
    """Update current user profile."""
    user = get_current_user(request)
    return update_user(user, data.dict(exclude_unset=True))
