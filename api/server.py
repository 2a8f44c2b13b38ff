"""
FastAPI application entry point.

Sets up the application with:
- Lifespan management (startup/shutdown)
- Route registration
- Middleware configuration
- Error handling
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import set_blog_service
from api.routes import blogs_router, health_router, users_router
from core.config import settings
from core.logging import configure_logging, get_logger
from manager.blog_service import BlogService


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup: configure logging, initialize the blog service (and its storage)
    Shutdown: close storage connections
    """
    configure_logging()

    logger.info(
        "Starting blog list service...",
        storage_backend=settings.storage_backend,
    )

    service = BlogService()
    await service.initialize()
    set_blog_service(service)

    logger.info(
        "Blog list service started",
        host=settings.server_host,
        port=settings.server_port,
        storage_backend=settings.storage_backend,
    )

    yield

    logger.info("Shutting down blog list service...")

    await service.shutdown()
    set_blog_service(None)

    logger.info("Blog list service stopped")


def _format_validation_errors(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        # Drop the leading "body"/"path" location segment
        loc = [str(part) for part in error.get("loc", ())[1:]]
        field = ".".join(loc) or "request"
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return messages


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    """
    app = FastAPI(
        title="Blog List",
        description=(
            "Blog list REST API.\n\n"
            "Users register and log in, then share links to blogs "
            "they like. Includes list statistics over all blogs."
        ),
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(blogs_router)
    app.include_router(users_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ):
        messages = _format_validation_errors(exc)
        logger.info(
            "Request validation failed",
            path=request.url.path,
            method=request.method,
            errors=messages,
        )
        return JSONResponse(status_code=400, content={"detail": messages})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "message": str(exc) if settings.debug else "An error occurred",
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.server:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )
