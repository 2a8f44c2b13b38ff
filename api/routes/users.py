"""
User registration and login endpoints.

- GET /api/users - List users with their blogs
- POST /api/users - Register a user
- POST /api/login - Exchange credentials for a bearer token
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_blog_service
from api.schemas.user import (
    LoginRequest,
    LoginResponse,
    UserCreateRequest,
    UserResponse,
)
from core.logging import get_logger
from manager.blog_service import (
    AuthenticationError,
    BlogService,
    UserValidationError,
)


logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    service: BlogService = Depends(get_blog_service),
) -> list[UserResponse]:
    """List every user with their blogs."""
    entries = await service.list_users()
    return [
        UserResponse.from_records(entry["user"], entry["blogs"])
        for entry in entries
    ]


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    request: UserCreateRequest,
    service: BlogService = Depends(get_blog_service),
) -> UserResponse:
    """
    Register a new user.

    username must be unique and at least three characters long;
    password must be at least three characters long.
    """
    try:
        user = await service.register_user(
            username=request.username,
            password=request.password or "",
            name=request.name,
        )
    except UserValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return UserResponse.from_records(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    service: BlogService = Depends(get_blog_service),
) -> LoginResponse:
    """Log in and receive a bearer token."""
    try:
        token, user = await service.authenticate(request.username, request.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    return LoginResponse(token=token, username=user.username, name=user.name)
