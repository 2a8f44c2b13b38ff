"""
Blog service - the single entry point for user and blog operations.

Sits between the API layer and the storage repositories: owns the
repository lifecycle, enforces registration rules and blog ownership,
and joins users and blogs for the API responses.
"""

from typing import Any, Optional

from core.config import settings
from core.logging import get_logger
from core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from core.storage import (
    BaseBlogRepository,
    BaseUserRepository,
    BlogRecord,
    DuplicateUsernameError,
    MalformedIdError,
    UserRecord,
    create_blog_repository,
    create_user_repository,
)
from stats.aggregator import summarize


logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 3
# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


class BlogService:
    """
    User and blog lifecycle manager.

    - Register users and issue access tokens
    - Create, update and delete blogs with ownership checks
    - Join blogs with their owners for listing
    - Compute list statistics over all blogs

    Uses the abstract repository interfaces, so any storage backend
    (MongoDB, in-memory) can be plugged in.
    """

    def __init__(
        self,
        user_repository: Optional[BaseUserRepository] = None,
        blog_repository: Optional[BaseBlogRepository] = None,
    ):
        """
        Initialize the service.

        Args:
            user_repository: Optional user repository (default created from settings)
            blog_repository: Optional blog repository (default created from settings)
        """
        self._user_repo = user_repository
        self._blog_repo = blog_repository
        self._initialized = False

    async def initialize(self) -> None:
        """Create and set up the storage backends."""
        if self._initialized:
            return

        logger.info(
            "Initializing blog service",
            storage_backend=settings.storage_backend,
        )

        if self._user_repo is None:
            self._user_repo = create_user_repository(settings)

        if self._blog_repo is None:
            self._blog_repo = create_blog_repository(settings)

        await self._user_repo.setup()
        await self._blog_repo.setup()

        self._initialized = True
        logger.info("Blog service initialized")

    async def shutdown(self) -> None:
        """Close storage connections."""
        logger.info("Shutting down blog service")

        if self._user_repo is not None:
            await self._user_repo.close()

        if self._blog_repo is not None:
            await self._blog_repo.close()

        self._initialized = False
        logger.info("Blog service shut down")

    async def is_ready(self) -> dict[str, bool]:
        """Reachability of each repository."""
        if not self._initialized:
            return {"users": False, "blogs": False}
        return {
            "users": await self._user_repo.ping(),
            "blogs": await self._blog_repo.ping(),
        }

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def register_user(
        self,
        username: str,
        password: str,
        name: Optional[str] = None,
    ) -> UserRecord:
        """
        Create a new user account.

        Raises:
            UserValidationError: Password too short or too long, or username taken
        """
        self._ensure_initialized()

        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise UserValidationError(
                "password must be at least three characters long"
            )

        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise UserValidationError(
                f"password must be at most {MAX_PASSWORD_BYTES} bytes long"
            )

        record = UserRecord(
            username=username,
            name=name,
            password_hash=hash_password(password),
        )

        try:
            user = await self._user_repo.create(record)
        except DuplicateUsernameError as e:
            logger.info("Username already taken", username=username)
            raise UserValidationError("expected `username` to be unique") from e

        logger.info("User registered", user_id=user.id, username=username)
        return user

    async def authenticate(self, username: str, password: str) -> tuple[str, UserRecord]:
        """
        Check credentials and issue an access token.

        Returns:
            (token, user)

        Raises:
            AuthenticationError: Unknown user or wrong password
        """
        self._ensure_initialized()

        user = await self._user_repo.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed", username=username)
            raise AuthenticationError("invalid username or password")

        token = create_access_token(user.username, user.id)
        logger.info("User logged in", user_id=user.id)
        return token, user

    async def user_from_token(self, token: str) -> UserRecord:
        """
        Resolve a bearer token to the stored user.

        Raises:
            AuthenticationError: Token invalid or user no longer exists
        """
        self._ensure_initialized()

        try:
            claims = decode_access_token(token)
            user = await self._user_repo.get(claims["id"])
        except (InvalidTokenError, MalformedIdError) as e:
            raise AuthenticationError(str(e)) from e

        if user is None:
            raise AuthenticationError("token missing or invalid")
        return user

    async def list_users(self) -> list[dict[str, Any]]:
        """All users with their blogs populated."""
        self._ensure_initialized()

        users = await self._user_repo.list_all()
        blogs = {blog.id: blog for blog in await self._blog_repo.list_all()}

        return [
            {
                "user": user,
                "blogs": [blogs[blog_id] for blog_id in user.blogs if blog_id in blogs],
            }
            for user in users
        ]

    # ------------------------------------------------------------------
    # Blogs
    # ------------------------------------------------------------------

    async def list_blogs(self) -> list[dict[str, Any]]:
        """All blogs with their owning user populated."""
        self._ensure_initialized()

        blogs = await self._blog_repo.list_all()
        users = {user.id: user for user in await self._user_repo.list_all()}

        return [
            {"blog": blog, "user": users.get(blog.user_id)}
            for blog in blogs
        ]

    async def get_blog(self, blog_id: str) -> dict[str, Any]:
        """
        A single blog with its owner.

        Raises:
            BlogNotFoundError: No blog with this id
            MalformedIdError: blog_id is not a valid id
        """
        self._ensure_initialized()

        blog = await self._blog_repo.get(blog_id)
        if blog is None:
            raise BlogNotFoundError("blog not found")
        return {"blog": blog, "user": await self._owner_of(blog)}

    async def create_blog(
        self,
        user: UserRecord,
        title: str,
        url: str,
        author: Optional[str] = None,
        likes: Optional[int] = None,
    ) -> dict[str, Any]:
        """Create a blog owned by user; likes default to 0."""
        self._ensure_initialized()

        blog = await self._blog_repo.create(
            BlogRecord(
                title=title,
                author=author,
                url=url,
                likes=likes or 0,
                user_id=user.id,
            )
        )
        await self._user_repo.add_blog(user.id, blog.id)

        logger.info("Blog created", blog_id=blog.id, user_id=user.id)
        return {"blog": blog, "user": await self._owner_of(blog)}

    async def update_blog(
        self,
        blog_id: str,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        url: Optional[str] = None,
        likes: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Replace the given fields of a blog.

        Raises:
            BlogNotFoundError: No blog with this id
        """
        self._ensure_initialized()

        blog = await self._blog_repo.update(
            blog_id,
            title=title,
            author=author,
            url=url,
            likes=likes,
        )
        if blog is None:
            raise BlogNotFoundError("blog not found")

        logger.info("Blog updated", blog_id=blog_id, likes=blog.likes)
        return {"blog": blog, "user": await self._owner_of(blog)}

    async def delete_blog(self, user: UserRecord, blog_id: str) -> None:
        """
        Delete a blog owned by user.

        Raises:
            BlogNotFoundError: No blog with this id
            PermissionDeniedError: user is not the owner
        """
        self._ensure_initialized()

        blog = await self._blog_repo.get(blog_id)
        if blog is None:
            raise BlogNotFoundError("blog not found")

        if blog.user_id != user.id:
            logger.warning(
                "Blog delete refused",
                blog_id=blog_id,
                user_id=user.id,
                owner_id=blog.user_id,
            )
            raise PermissionDeniedError("invalid username")

        await self._blog_repo.delete(blog_id)
        await self._user_repo.remove_blog(user.id, blog_id)
        logger.info("Blog deleted", blog_id=blog_id, user_id=user.id)

    async def blog_statistics(self) -> dict[str, Any]:
        """Aggregations over every stored blog."""
        self._ensure_initialized()

        blogs = await self._blog_repo.list_all()
        return summarize([blog.to_dict() for blog in blogs])

    async def _owner_of(self, blog: BlogRecord) -> Optional[UserRecord]:
        if blog.user_id is None:
            return None
        return await self._user_repo.get(blog.user_id)

    def _ensure_initialized(self) -> None:
        """Raise if initialize() has not been called."""
        if not self._initialized:
            raise RuntimeError(
                "Blog service not initialized. Call initialize() first."
            )


class BlogServiceError(Exception):
    """Base exception for blog service operations."""
    pass


class BlogNotFoundError(BlogServiceError):
    """Blog id doesn't exist."""
    pass


class PermissionDeniedError(BlogServiceError):
    """User is not allowed to modify this blog."""
    pass


class AuthenticationError(BlogServiceError):
    """Credentials or token were rejected."""
    pass


class UserValidationError(BlogServiceError):
    """Registration data was rejected."""
    pass
