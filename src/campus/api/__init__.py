"""Campus HTTP API package."""

from campus.api.errors import register_error_handlers
from campus.api.routes import (
    cafeteria_router,
    feedback_router,
    order_router,
    profile_router,
    registration_router,
)

__all__ = [
    "cafeteria_router",
    "feedback_router",
    "order_router",
    "profile_router",
    "register_error_handlers",
    "registration_router",
]
