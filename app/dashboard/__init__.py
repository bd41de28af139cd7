from app.dashboard.carousel_manager import CarouselManager
from app.dashboard.client import ApiError, CmsApiClient
from app.dashboard.feedback import FeedbackChannel, FeedbackLevel, Toast
from app.dashboard.reorder import BoardRow, BoardState, EmptyPlanError, ReorderBoard

__all__ = [
    "ApiError",
    "BoardRow",
    "BoardState",
    "CarouselManager",
    "CmsApiClient",
    "EmptyPlanError",
    "FeedbackChannel",
    "FeedbackLevel",
    "ReorderBoard",
    "Toast",
]
