"""
Storage factory for creating storage backend instances.

This module provides factory functions to create the appropriate
storage implementations based on configuration.
"""

from enum import Enum
from typing import TYPE_CHECKING

from core.logging import get_logger
from core.storage.base import BaseBlogRepository, BaseUserRepository


if TYPE_CHECKING:
    from core.config import Settings


logger = get_logger(__name__)


class StorageBackend(str, Enum):
    """Supported storage backends."""
    MONGODB = "mongodb"
    MEMORY = "memory"


def get_storage_backend(settings: "Settings") -> StorageBackend:
    """
    Determine which storage backend to use based on settings.

    Args:
        settings: Application settings

    Returns:
        The configured storage backend
    """
    return StorageBackend(settings.storage_backend)


def create_user_repository(settings: "Settings") -> BaseUserRepository:
    """
    Create a user repository instance based on settings.

    Args:
        settings: Application settings

    Returns:
        Configured repository instance (not yet initialized)
    """
    backend = get_storage_backend(settings)

    if backend == StorageBackend.MONGODB:
        from core.storage.mongodb import MongoDBUserRepository

        logger.info(
            "Creating MongoDB user repository",
            database=settings.mongodb_database,
        )
        return MongoDBUserRepository(
            connection_string=settings.mongodb_url,
            database_name=settings.mongodb_database,
        )

    from core.storage.memory import InMemoryUserRepository

    logger.info("Creating in-memory user repository")
    return InMemoryUserRepository()


def create_blog_repository(settings: "Settings") -> BaseBlogRepository:
    """
    Create a blog repository instance based on settings.

    Args:
        settings: Application settings

    Returns:
        Configured repository instance (not yet initialized)
    """
    backend = get_storage_backend(settings)

    if backend == StorageBackend.MONGODB:
        from core.storage.mongodb import MongoDBBlogRepository

        logger.info(
            "Creating MongoDB blog repository",
            database=settings.mongodb_database,
        )
        return MongoDBBlogRepository(
            connection_string=settings.mongodb_url,
            database_name=settings.mongodb_database,
        )

    from core.storage.memory import InMemoryBlogRepository

    logger.info("Creating in-memory blog repository")
    return InMemoryBlogRepository()
