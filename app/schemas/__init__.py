from app.schemas.common import (
    DataResponse,
    ListResponse,
    MessageResponse,
    parse_form,
)
from app.schemas.auth import (
    UserLogin,
    UserResponse,
    LoginResponse,
)
from app.schemas.carousel import (
    CarouselItemCreate,
    CarouselItemUpdate,
    CarouselItemResponse,
    ReorderEntry,
    ReorderRequest,
)
from app.schemas.hero import (
    HeroUpdate,
    HeroResponse,
)
from app.schemas.presentation import (
    ContentBlock,
    PresentationUpdate,
    PresentationResponse,
)

__all__ = [
    "DataResponse",
    "ListResponse",
    "MessageResponse",
    "parse_form",
    "UserLogin",
    "UserResponse",
    "LoginResponse",
    # Carousel schemas
    "CarouselItemCreate",
    "CarouselItemUpdate",
    "CarouselItemResponse",
    "ReorderEntry",
    "ReorderRequest",
    # Site section schemas
    "HeroUpdate",
    "HeroResponse",
    "ContentBlock",
    "PresentationUpdate",
    "PresentationResponse",
]
