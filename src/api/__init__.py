"""HTTP routers and middleware."""

from src.api.auth import router as auth_router
from src.api.middleware import CorrelationIdMiddleware, parse_accept_language
from src.api.routes import router as health_router
from src.api.user_platforms import router as user_platforms_router
from src.api.users import router as users_router

__all__ = [
    "CorrelationIdMiddleware",
    "auth_router",
    "health_router",
    "parse_accept_language",
    "user_platforms_router",
    "users_router",
]
