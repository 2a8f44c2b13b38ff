"""
User and login schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.storage import BlogRecord, UserRecord


class UserCreateRequest(BaseModel):
    """Request body for registering a user."""

    username: str = Field(
        ...,
        min_length=3,
        description="Unique login name",
        examples=["mluukkai"],
    )
    name: Optional[str] = Field(
        default=None,
        description="Display name",
        examples=["Matti Luukkainen"],
    )
    # Length is checked by the service so the error message matches
    # the other registration errors
    password: Optional[str] = Field(
        default=None,
        description="Plain text password, at least three characters",
    )


class LoginRequest(BaseModel):
    """Request body for logging in."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Access token issued after a successful login."""

    token: str = Field(
        ...,
        description="Bearer token for the Authorization header",
    )
    username: str
    name: Optional[str] = None


class UserBlog(BaseModel):
    """Blog summary embedded in a user."""

    id: str
    title: str
    author: Optional[str] = None
    url: str
    likes: int = 0

    @classmethod
    def from_record(cls, blog: BlogRecord) -> "UserBlog":
        return cls(
            id=blog.id,
            title=blog.title,
            author=blog.author,
            url=blog.url,
            likes=blog.likes,
        )


class UserResponse(BaseModel):
    """A user with their blogs populated. Never includes the password hash."""

    id: str
    username: str
    name: Optional[str] = None
    blogs: list[UserBlog] = Field(default_factory=list)

    @classmethod
    def from_records(
        cls,
        user: UserRecord,
        blogs: Optional[list[BlogRecord]] = None,
    ) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            blogs=[UserBlog.from_record(blog) for blog in blogs or []],
        )
