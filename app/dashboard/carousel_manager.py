"""Carousel management screen logic: list, edit, delete and reorder."""

import logging
from typing import Any

from app.dashboard.client import ApiError, CmsApiClient, ImageFile
from app.dashboard.feedback import FeedbackChannel
from app.dashboard.reorder import BoardRow, EmptyPlanError, ReorderBoard
from app.schemas.carousel import CarouselItemResponse

logger = logging.getLogger(__name__)


class CarouselManager:
    """Drives the carousel screen against the CMS API.

    Every mutating call reports ``info`` while in flight and then ``success``
    or ``error``; failures never propagate to the caller. The list re-fetch
    that follows a mutation is silent so the mutation's own message stays
    on screen.
    """

    def __init__(
        self,
        client: CmsApiClient,
        feedback: FeedbackChannel | None = None,
        board: ReorderBoard | None = None,
    ):
        self.client = client
        self.feedback = feedback or FeedbackChannel()
        self.board = board or ReorderBoard()
        self.items: list[CarouselItemResponse] = []
        self.loading = False

    async def fetch_all(self, announce: bool = True) -> bool:
        """Reload the canonical list.

        ``announce`` controls the "loaded" notification; pass ``False`` when
        the fetch is only the tail of another operation.
        """
        self.loading = True
        try:
            items = await self.client.list_carousel_items()
        except ApiError as e:
            logger.error(f"Failed to load carousel items: {e.message}")
            self.feedback.error(f"Failed to load carousel items: {e.message}")
            return False
        finally:
            self.loading = False

        self.items = sorted(items, key=lambda item: item.order)
        self.board.load(BoardRow.from_item(item) for item in self.items)
        if announce:
            self.feedback.success("Carousel items loaded successfully.")
        return True

    async def save_item(
        self,
        fields: dict[str, Any],
        image: ImageFile | None = None,
        item_id: str | None = None,
    ) -> bool:
        """Create an item, or update ``item_id`` when given."""
        action = "update" if item_id else "create"
        self.feedback.info("Updating item..." if item_id else "Creating item...")
        try:
            if item_id:
                await self.client.update_carousel_item(item_id, fields, image)
            else:
                await self.client.create_carousel_item(fields, image)
        except ApiError as e:
            self.feedback.error(f"Failed to {action} carousel item: {e.message}")
            return False

        self.feedback.success(
            "Carousel item updated successfully." if item_id else "Carousel item created successfully."
        )
        await self.fetch_all(announce=False)
        return True

    async def delete_item(self, item_id: str) -> bool:
        self.feedback.info("Deleting item...")
        try:
            await self.client.delete_carousel_item(item_id)
        except ApiError as e:
            self.feedback.error(f"Failed to delete carousel item: {e.message}")
            return False

        self.feedback.success("Carousel item deleted successfully.")
        await self.fetch_all(announce=False)
        return True

    async def commit_order(self) -> bool:
        """Send the pending arrangement as one batch."""
        try:
            entries = self.board.begin_commit()
        except EmptyPlanError:
            self.feedback.warning("No valid items to reorder.")
            return False

        self.feedback.info("Saving new order...")
        try:
            await self.client.reorder_carousel_items(entries)
        except ApiError as e:
            self.board.commit_failed()
            self.feedback.error(f"Failed to update order: {e.message}")
            return False

        self.feedback.success("Order updated successfully.")
        if not await self.fetch_all(announce=False):
            # keep the committed arrangement on screen until the next fetch works
            self.board.commit_succeeded(self.board.rows)
        return True

    def discard_order(self) -> None:
        self.board.discard()
