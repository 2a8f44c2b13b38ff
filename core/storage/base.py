"""
Abstract base classes for storage backends.

This module defines the contracts that all storage implementations must follow,
enabling pluggable backends for user and blog persistence.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    """Generate a fresh id in the same format MongoDB uses."""
    return str(ObjectId())


def parse_object_id(value: str) -> ObjectId:
    """
    Convert a string id into an ObjectId.

    Raises:
        MalformedIdError: If value is not a 24 character hex string
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise MalformedIdError(f"malformatted id: {value!r}")
    return ObjectId(value)


@dataclass
class UserRecord:
    """
    Record structure for user storage.

    blogs holds the ids of the user's blogs in creation order.
    """
    username: str
    password_hash: str
    name: Optional[str] = None
    id: str = field(default_factory=new_object_id)
    blogs: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "password_hash": self.password_hash,
            "blogs": list(self.blogs),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserRecord":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            username=data["username"],
            name=data.get("name"),
            password_hash=data["password_hash"],
            blogs=[str(blog_id) for blog_id in data.get("blogs", [])],
            created_at=data.get("created_at", utcnow()),
        )


@dataclass
class BlogRecord:
    """
    Record structure for blog storage.

    user_id references the owning UserRecord. It may be None for
    blogs that were seeded without an owner.
    """
    title: str
    author: Optional[str]
    url: str
    likes: int = 0
    user_id: Optional[str] = None
    id: str = field(default_factory=new_object_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "url": self.url,
            "likes": self.likes,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BlogRecord":
        """Create from dictionary."""
        user_id = data.get("user_id")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            author=data.get("author"),
            url=data["url"],
            likes=data.get("likes", 0),
            user_id=str(user_id) if user_id is not None else None,
            created_at=data.get("created_at", utcnow()),
            updated_at=data.get("updated_at", utcnow()),
        )


class BaseUserRepository(ABC):
    """Abstract base class for user storage."""

    @abstractmethod
    async def setup(self) -> None:
        """
        Initialize the storage (create collections/indexes).

        This should be idempotent.
        """
        pass

    @abstractmethod
    async def create(self, record: UserRecord) -> UserRecord:
        """
        Persist a new user.

        Raises:
            DuplicateUsernameError: If the username is already taken
        """
        pass

    @abstractmethod
    async def get(self, user_id: str) -> Optional[UserRecord]:
        """Get a user by id."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Get a user by username."""
        pass

    @abstractmethod
    async def list_all(self) -> list[UserRecord]:
        """Get all users in creation order."""
        pass

    @abstractmethod
    async def add_blog(self, user_id: str, blog_id: str) -> bool:
        """
        Append a blog id to the user's blog list.

        Returns True if the user was found.
        """
        pass

    @abstractmethod
    async def remove_blog(self, user_id: str, blog_id: str) -> bool:
        """
        Remove a blog id from the user's blog list.

        Returns True if the user was found.
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        pass


class BaseBlogRepository(ABC):
    """Abstract base class for blog storage."""

    @abstractmethod
    async def setup(self) -> None:
        """
        Initialize the storage (create collections/indexes).

        This should be idempotent.
        """
        pass

    @abstractmethod
    async def create(self, record: BlogRecord) -> BlogRecord:
        """Persist a new blog."""
        pass

    @abstractmethod
    async def get(self, blog_id: str) -> Optional[BlogRecord]:
        """
        Get a blog by id.

        Raises:
            MalformedIdError: If blog_id is not a valid id
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[BlogRecord]:
        """Get all blogs in insertion order."""
        pass

    @abstractmethod
    async def update(
        self,
        blog_id: str,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        url: Optional[str] = None,
        likes: Optional[int] = None,
    ) -> Optional[BlogRecord]:
        """
        Update specific fields of a blog.

        Only provided fields will be updated.
        Returns the updated record, or None if it doesn't exist.
        """
        pass

    @abstractmethod
    async def delete(self, blog_id: str) -> bool:
        """
        Delete a blog.

        Returns True if the blog existed.
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MalformedIdError(StorageError):
    """Id is not a valid ObjectId string."""
    pass


class DuplicateUsernameError(StorageError):
    """Username is already registered."""
    pass
