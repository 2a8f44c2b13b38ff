"""
API route modules.
"""

from api.routes.blogs import router as blogs_router
from api.routes.health import router as health_router
from api.routes.users import router as users_router

__all__ = ["blogs_router", "health_router", "users_router"]
