"""
Blog-related request and response schemas.

These Pydantic models define the API contract and provide
automatic validation and documentation.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from core.storage import BlogRecord, UserRecord


class BlogCreateRequest(BaseModel):
    """Request body for creating a blog."""

    title: str = Field(
        ...,
        min_length=1,
        description="Blog title",
        examples=["React patterns"],
    )
    author: Optional[str] = Field(
        default=None,
        description="Name of the blog's author",
        examples=["Michael Chan"],
    )
    url: str = Field(
        ...,
        min_length=1,
        description="Link to the blog",
        examples=["https://reactpatterns.com/"],
    )
    likes: Optional[int] = Field(
        default=None,
        ge=0,
        description="Initial number of likes (defaults to 0)",
    )


class BlogUpdateRequest(BaseModel):
    """Request body for updating a blog. Omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = None
    url: Optional[str] = Field(default=None, min_length=1)
    likes: Optional[int] = Field(default=None, ge=0)


class BlogOwner(BaseModel):
    """The user a blog belongs to."""

    id: str
    username: str
    name: Optional[str] = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "BlogOwner":
        return cls(id=user.id, username=user.username, name=user.name)


class BlogResponse(BaseModel):
    """A blog with its owner populated."""

    id: str
    title: str
    author: Optional[str] = None
    url: str
    likes: int = 0
    user: Optional[BlogOwner] = None

    @classmethod
    def from_records(
        cls,
        blog: BlogRecord,
        user: Optional[UserRecord] = None,
    ) -> "BlogResponse":
        return cls(
            id=blog.id,
            title=blog.title,
            author=blog.author,
            url=blog.url,
            likes=blog.likes,
            user=BlogOwner.from_record(user) if user is not None else None,
        )


class BlogStatisticsResponse(BaseModel):
    """Aggregations over every stored blog."""

    total_likes: int = Field(
        ...,
        description="Sum of likes across all blogs",
    )
    favorite_blog: dict[str, Any] = Field(
        default_factory=dict,
        description="Title, author and likes of the most liked blog",
    )
    most_blogs: dict[str, Any] = Field(
        default_factory=dict,
        description="Author with the most blogs and the count",
    )
    most_likes: dict[str, Any] = Field(
        default_factory=dict,
        description="Author with the most likes and the total",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "total_likes": 36,
                    "favorite_blog": {
                        "title": "Canonical string reduction",
                        "author": "Edsger W. Dijkstra",
                        "likes": 12,
                    },
                    "most_blogs": {"author": "Robert C. Martin", "blogs": 3},
                    "most_likes": {"author": "Edsger W. Dijkstra", "likes": 17},
                }
            ]
        }
    }
