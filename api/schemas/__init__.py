"""
Pydantic schemas for API request/response validation.
"""

from api.schemas.blog import (
    BlogCreateRequest,
    BlogOwner,
    BlogResponse,
    BlogStatisticsResponse,
    BlogUpdateRequest,
)
from api.schemas.user import (
    LoginRequest,
    LoginResponse,
    UserBlog,
    UserCreateRequest,
    UserResponse,
)

__all__ = [
    "BlogCreateRequest",
    "BlogOwner",
    "BlogResponse",
    "BlogStatisticsResponse",
    "BlogUpdateRequest",
    "LoginRequest",
    "LoginResponse",
    "UserBlog",
    "UserCreateRequest",
    "UserResponse",
]
