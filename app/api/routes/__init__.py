from app.api.routes.auth import router as auth_router
from app.api.routes.carousel import router as carousel_router
from app.api.routes.hero import router as hero_router
from app.api.routes.presentation import router as presentation_router

__all__ = [
    "auth_router",
    "carousel_router",
    # Site sections
    "hero_router",
    "presentation_router",
]
