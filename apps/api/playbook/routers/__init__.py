from .pickup_lines import router as pickup_lines_router
from .tags import router as tags_router
from .users import router as users_router

ROUTERS = (pickup_lines_router, tags_router, users_router)

__all__ = [
    "ROUTERS",
    "pickup_lines_router",
    "tags_router",
    "users_router",
]
