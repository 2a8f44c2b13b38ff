"""
FastAPI dependencies for dependency injection.

Provides the blog service singleton and bearer-token authentication
to route handlers.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.storage import UserRecord
from manager.blog_service import AuthenticationError, BlogService


# Global singleton (set during app lifespan)
_blog_service: Optional[BlogService] = None

bearer_scheme = HTTPBearer(auto_error=False)


def set_blog_service(service: Optional[BlogService]) -> None:
    """Set the global blog service instance."""
    global _blog_service
    _blog_service = service


async def get_blog_service() -> BlogService:
    """
    Dependency that provides the blog service.

    Usage:
        @router.get("/blogs")
        async def list_blogs(
            service: BlogService = Depends(get_blog_service)
        ):
            ...
    """
    if _blog_service is None:
        raise RuntimeError("Blog service not initialized")
    return _blog_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    service: BlogService = Depends(get_blog_service),
) -> UserRecord:
    """
    Dependency that resolves the Authorization bearer token to a user.

    Responds 401 when the header is missing or the token is rejected.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="token missing or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await service.user_from_token(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
