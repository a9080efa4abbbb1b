"""Film catalog API package."""

from filmcatalog.api.errors import register_error_handlers
from filmcatalog.api.routes import moderation_router, review_router, watch_router, watchlist_router

__all__ = [
    "watch_router",
    "review_router",
    "moderation_router",
    "watchlist_router",
    "register_error_handlers",
]
