"""
Blog endpoints.

- GET /api/blogs - List blogs with their owners
- GET /api/blogs/stats - List statistics
- GET /api/blogs/{blog_id} - Get one blog
- POST /api/blogs - Create blog (bearer token)
- PUT /api/blogs/{blog_id} - Update blog (bearer token)
- DELETE /api/blogs/{blog_id} - Delete own blog (bearer token)
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_blog_service, get_current_user
from api.schemas.blog import (
    BlogCreateRequest,
    BlogResponse,
    BlogStatisticsResponse,
    BlogUpdateRequest,
)
from core.logging import get_logger
from core.storage import MalformedIdError, UserRecord
from manager.blog_service import (
    BlogNotFoundError,
    BlogService,
    PermissionDeniedError,
)


logger = get_logger(__name__)
router = APIRouter(prefix="/api/blogs", tags=["Blogs"])


def _malformed_id() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="malformatted id",
    )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="blog not found",
    )


@router.get("", response_model=list[BlogResponse])
async def list_blogs(
    service: BlogService = Depends(get_blog_service),
) -> list[BlogResponse]:
    """List every blog with the owning user's id, username and name."""
    entries = await service.list_blogs()
    return [
        BlogResponse.from_records(entry["blog"], entry["user"])
        for entry in entries
    ]


@router.get("/stats", response_model=BlogStatisticsResponse)
async def blog_statistics(
    service: BlogService = Depends(get_blog_service),
) -> BlogStatisticsResponse:
    """
    Aggregations over all blogs.

    Returns total likes, the most liked blog, the author with the most
    blogs and the author with the most likes. The last three are empty
    objects when there are no blogs.
    """
    return BlogStatisticsResponse(**await service.blog_statistics())


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(
    blog_id: str,
    service: BlogService = Depends(get_blog_service),
) -> BlogResponse:
    """Get a single blog."""
    try:
        entry = await service.get_blog(blog_id)
    except MalformedIdError:
        raise _malformed_id()
    except BlogNotFoundError:
        raise _not_found()

    return BlogResponse.from_records(entry["blog"], entry["user"])


@router.post("", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
async def create_blog(
    request: BlogCreateRequest,
    user: UserRecord = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
) -> BlogResponse:
    """
    Create a blog owned by the authenticated user.

    title and url are required; likes default to 0.
    """
    logger.info(
        "Creating blog",
        title=request.title,
        user_id=user.id,
    )

    entry = await service.create_blog(
        user,
        title=request.title,
        author=request.author,
        url=request.url,
        likes=request.likes,
    )
    return BlogResponse.from_records(entry["blog"], entry["user"])


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: str,
    request: BlogUpdateRequest,
    user: UserRecord = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
) -> BlogResponse:
    """
    Update a blog.

    Any logged-in user may update a blog; this is how likes are given.
    """
    logger.debug("Updating blog", blog_id=blog_id, user_id=user.id)

    try:
        entry = await service.update_blog(
            blog_id,
            title=request.title,
            author=request.author,
            url=request.url,
            likes=request.likes,
        )
    except MalformedIdError:
        raise _malformed_id()
    except BlogNotFoundError:
        raise _not_found()

    return BlogResponse.from_records(entry["blog"], entry["user"])


@router.delete("/{blog_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blog(
    blog_id: str,
    user: UserRecord = Depends(get_current_user),
    service: BlogService = Depends(get_blog_service),
) -> Response:
    """Delete a blog. Only its owner may do this."""
    try:
        await service.delete_blog(user, blog_id)
    except MalformedIdError:
        raise _malformed_id()
    except BlogNotFoundError:
        raise _not_found()
    except PermissionDeniedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
