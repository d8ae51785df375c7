"""API routers."""

from slotshare.api.availabilities import router as availabilities_router
from slotshare.api.health import router as health_router
from slotshare.api.search import router as search_router

__all__ = [
    "availabilities_router",
    "health_router",
    "search_router",
]
