"""
Storage abstraction layer.

Provides pluggable storage backends for:
- User accounts
- Blog entries

Supported backends:
- MongoDB (recommended for production)
- In-memory (tests and local development)
"""

from core.storage.base import (
    BaseBlogRepository,
    BaseUserRepository,
    BlogRecord,
    DuplicateUsernameError,
    MalformedIdError,
    StorageError,
    UserRecord,
)
from core.storage.factory import (
    create_blog_repository,
    create_user_repository,
    get_storage_backend,
    StorageBackend,
)

__all__ = [
    # Abstract interfaces
    "BaseBlogRepository",
    "BaseUserRepository",
    "BlogRecord",
    "UserRecord",
    # Errors
    "StorageError",
    "MalformedIdError",
    "DuplicateUsernameError",
    # Factory functions
    "create_blog_repository",
    "create_user_repository",
    "get_storage_backend",
    "StorageBackend",
]
