"""
MongoDB storage backend implementation.

Provides MongoDB implementations for:
- User repository ("users" collection)
- Blog repository ("blogs" collection)

Documents use ObjectId for _id and for references between collections;
records exposed to the rest of the application carry string ids.
"""

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

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


class _MongoDBRepository:
    """Connection handling shared by the MongoDB repositories."""

    COLLECTION_NAME = ""

    def __init__(
        self,
        connection_string: str,
        database_name: str = "blog_list",
    ):
        """
        Initialize MongoDB repository.

        Args:
            connection_string: MongoDB connection URI
            database_name: Database name
        """
        self._connection_string = connection_string
        self._database_name = database_name
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    def _connect(self) -> None:
        self._client = AsyncIOMotorClient(self._connection_string)
        self._db = self._client[self._database_name]

    @property
    def _collection(self):
        if self._db is None:
            raise RuntimeError(
                "Repository not initialized. Call setup() first."
            )
        return self._db[self.COLLECTION_NAME]

    async def ping(self) -> bool:
        """Run the server ping command."""
        if self._db is None:
            return False
        try:
            await self._db.command("ping")
        except PyMongoError as e:
            logger.warning(
                "MongoDB ping failed",
                collection=self.COLLECTION_NAME,
                error=str(e),
            )
            return False
        return True

    async def close(self) -> None:
        """Close MongoDB connection."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
        logger.info(
            "MongoDB repository closed",
            collection=self.COLLECTION_NAME,
        )


class MongoDBUserRepository(_MongoDBRepository, BaseUserRepository):
    """MongoDB-based user repository."""

    COLLECTION_NAME = "users"

    async def setup(self) -> None:
        """Initialize connection and create indexes."""
        self._connect()
        await self._collection.create_index("username", unique=True)

        logger.info(
            "MongoDB user repository initialized",
            database=self._database_name,
            collection=self.COLLECTION_NAME,
        )

    @staticmethod
    def _to_document(record: UserRecord) -> dict[str, Any]:
        doc = record.to_dict()
        doc["_id"] = parse_object_id(doc.pop("id"))
        doc["blogs"] = [parse_object_id(blog_id) for blog_id in record.blogs]
        return doc

    @staticmethod
    def _from_document(doc: dict[str, Any]) -> UserRecord:
        doc["id"] = doc.pop("_id")
        return UserRecord.from_dict(doc)

    async def create(self, record: UserRecord) -> UserRecord:
        """Insert a user; the unique index rejects duplicate usernames."""
        try:
            await self._collection.insert_one(self._to_document(record))
        except DuplicateKeyError as e:
            raise DuplicateUsernameError(
                f"username {record.username!r} is already taken"
            ) from e

        logger.debug("User record created", user_id=record.id)
        return record

    async def get(self, user_id: str) -> Optional[UserRecord]:
        """Get a user by id."""
        doc = await self._collection.find_one({"_id": parse_object_id(user_id)})
        if doc is None:
            return None
        return self._from_document(doc)

    async def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Get a user by username."""
        doc = await self._collection.find_one({"username": username})
        if doc is None:
            return None
        return self._from_document(doc)

    async def list_all(self) -> list[UserRecord]:
        """Get all users in creation order."""
        cursor = self._collection.find({}).sort("_id", ASCENDING)
        docs = await cursor.to_list(length=None)
        return [self._from_document(doc) for doc in docs]

    async def add_blog(self, user_id: str, blog_id: str) -> bool:
        """Append a blog reference to the user."""
        result = await self._collection.update_one(
            {"_id": parse_object_id(user_id)},
            {"$push": {"blogs": parse_object_id(blog_id)}},
        )
        return result.matched_count > 0

    async def remove_blog(self, user_id: str, blog_id: str) -> bool:
        """Drop a blog reference from the user."""
        result = await self._collection.update_one(
            {"_id": parse_object_id(user_id)},
            {"$pull": {"blogs": parse_object_id(blog_id)}},
        )
        return result.matched_count > 0


class MongoDBBlogRepository(_MongoDBRepository, BaseBlogRepository):
    """MongoDB-based blog repository."""

    COLLECTION_NAME = "blogs"

    async def setup(self) -> None:
        """Initialize connection and create indexes."""
        self._connect()
        await self._collection.create_index("user_id")

        logger.info(
            "MongoDB blog repository initialized",
            database=self._database_name,
            collection=self.COLLECTION_NAME,
        )

    @staticmethod
    def _to_document(record: BlogRecord) -> dict[str, Any]:
        doc = record.to_dict()
        doc["_id"] = parse_object_id(doc.pop("id"))
        if record.user_id is not None:
            doc["user_id"] = parse_object_id(record.user_id)
        return doc

    @staticmethod
    def _from_document(doc: dict[str, Any]) -> BlogRecord:
        doc["id"] = doc.pop("_id")
        return BlogRecord.from_dict(doc)

    async def create(self, record: BlogRecord) -> BlogRecord:
        """Insert a blog."""
        await self._collection.insert_one(self._to_document(record))
        logger.debug("Blog record created", blog_id=record.id)
        return record

    async def get(self, blog_id: str) -> Optional[BlogRecord]:
        """Get a blog by id."""
        doc = await self._collection.find_one({"_id": parse_object_id(blog_id)})
        if doc is None:
            return None
        return self._from_document(doc)

    async def list_all(self) -> list[BlogRecord]:
        """Get all blogs in insertion order."""
        cursor = self._collection.find({}).sort("_id", ASCENDING)
        docs = await cursor.to_list(length=None)
        return [self._from_document(doc) for doc in docs]

    async def update(
        self,
        blog_id: str,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        url: Optional[str] = None,
        likes: Optional[int] = None,
    ) -> Optional[BlogRecord]:
        """Update specific fields of a blog and return the new version."""
        update_fields: dict[str, Any] = {"updated_at": utcnow()}

        if title is not None:
            update_fields["title"] = title
        if author is not None:
            update_fields["author"] = author
        if url is not None:
            update_fields["url"] = url
        if likes is not None:
            update_fields["likes"] = likes

        doc = await self._collection.find_one_and_update(
            {"_id": parse_object_id(blog_id)},
            {"$set": update_fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return self._from_document(doc)

    async def delete(self, blog_id: str) -> bool:
        """Delete a blog."""
        result = await self._collection.delete_one({"_id": parse_object_id(blog_id)})
        return result.deleted_count > 0
