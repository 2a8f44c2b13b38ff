"""
In-memory storage backend.

Keeps users and blogs in process-local dictionaries. Used by the test
suite and for running the API locally without a MongoDB server.
Data is lost when the process exits.

Records are copied on the way in and out so callers can never mutate
stored state by accident.
"""

import asyncio
from copy import deepcopy
from typing import Optional

from core.logging import get_logger
from core.storage.base import (
    BaseBlogRepository,
    BaseUserRepository,
    BlogRecord,
    DuplicateUsernameError,
    UserRecord,
    parse_object_id,
    utcnow,
)


logger = get_logger(__name__)


class InMemoryUserRepository(BaseUserRepository):
    """Dictionary-backed user repository."""

    def __init__(self):
        self._users: dict[str, UserRecord] = {}
        self._lock = asyncio.Lock()

    async def setup(self) -> None:
        logger.info("In-memory user repository initialized")

    async def create(self, record: UserRecord) -> UserRecord:
        parse_object_id(record.id)
        async with self._lock:
            if any(u.username == record.username for u in self._users.values()):
                raise DuplicateUsernameError(
                    f"username {record.username!r} is already taken"
                )
            self._users[record.id] = deepcopy(record)
        return deepcopy(record)

    async def get(self, user_id: str) -> Optional[UserRecord]:
        parse_object_id(user_id)
        user = self._users.get(user_id)
        return deepcopy(user) if user is not None else None

    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self._users.values():
            if user.username == username:
                return deepcopy(user)
        return None

    async def list_all(self) -> list[UserRecord]:
        return [deepcopy(user) for user in self._users.values()]

    async def add_blog(self, user_id: str, blog_id: str) -> bool:
        parse_object_id(user_id)
        parse_object_id(blog_id)
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            user.blogs.append(blog_id)
        return True

    async def remove_blog(self, user_id: str, blog_id: str) -> bool:
        parse_object_id(user_id)
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            user.blogs = [b for b in user.blogs if b != blog_id]
        return True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._users.clear()
        logger.info("In-memory user repository closed")


class InMemoryBlogRepository(BaseBlogRepository):
    """Dictionary-backed blog repository."""

    def __init__(self):
        self._blogs: dict[str, BlogRecord] = {}
        self._lock = asyncio.Lock()

    async def setup(self) -> None:
        logger.info("In-memory blog repository initialized")

    async def create(self, record: BlogRecord) -> BlogRecord:
        parse_object_id(record.id)
        async with self._lock:
            self._blogs[record.id] = deepcopy(record)
        return deepcopy(record)

    async def get(self, blog_id: str) -> Optional[BlogRecord]:
        parse_object_id(blog_id)
        blog = self._blogs.get(blog_id)
        return deepcopy(blog) if blog is not None else None

    async def list_all(self) -> list[BlogRecord]:
        return [deepcopy(blog) for blog in self._blogs.values()]

    async def update(
        self,
        blog_id: str,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        url: Optional[str] = None,
        likes: Optional[int] = None,
    ) -> Optional[BlogRecord]:
        parse_object_id(blog_id)
        async with self._lock:
            blog = self._blogs.get(blog_id)
            if blog is None:
                return None

            if title is not None:
                blog.title = title
            if author is not None:
                blog.author = author
            if url is not None:
                blog.url = url
            if likes is not None:
                blog.likes = likes
            blog.updated_at = utcnow()

            return deepcopy(blog)

    async def delete(self, blog_id: str) -> bool:
        parse_object_id(blog_id)
        async with self._lock:
            return self._blogs.pop(blog_id, None) is not None

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._blogs.clear()
        logger.info("In-memory blog repository closed")
