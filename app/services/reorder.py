"""Batch reordering of order-keyed rows inside one transaction."""

import logging
from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import (
    CMSError,
    ConcurrentModificationError,
    DuplicateOrderError,
    ItemNotFoundError,
    TransactionError,
)
from app.schemas.carousel import ReorderEntry

logger = logging.getLogger(__name__)


def _parse_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


class OrderKeyReorderer:
    """Reassigns the unique ``order`` column of many rows at once.

    Works on any mapped class with ``id`` (UUID) and ``order`` (unique int)
    columns. A reorder runs in three phases on the caller's session:

    1. validate - every named row must exist, otherwise nothing is written;
    2. displace - every named row moves to ``order + offset`` so no target
       value is still held by a row of the batch. The offset is raised above
       the highest stored order when needed;
    3. assign - every row is written with its final order.

    The transaction is committed at the end and rolled back on any failure,
    so readers see either the old or the new arrangement.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[Any],
        offset: int | None = None,
        label: str = "item",
    ):
        self.db = db
        self.model = model
        self.offset = offset if offset is not None else settings.reorder_temp_offset
        self.label = label

    async def apply(self, entries: Sequence[ReorderEntry]) -> None:
        """Apply a complete arrangement atomically."""
        logger.info(f"Reordering {len(entries)} {self.label}(s): {[e.id for e in entries]}")
        try:
            rows = await self._validate(entries)
            await self._displace(rows)
            await self._assign(entries)
            await self.db.commit()
        except CMSError as e:
            await self.db.rollback()
            logger.warning(f"Reorder of {self.label}s rolled back: {e.message}")
            raise
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Reorder of {self.label}s hit a unique constraint: {e.orig}")
            raise DuplicateOrderError(
                message=(
                    "Unique constraint violated while reordering. "
                    "Make sure all order values are distinct and do not clash "
                    "with items outside the batch."
                )
            ) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Reorder of {self.label}s failed, transaction rolled back: {e}", exc_info=True)
            raise TransactionError(f"Failed to reorder {self.label}s.") from e

        logger.info(f"Reorder of {len(entries)} {self.label}(s) committed")

    async def _validate(self, entries: Sequence[ReorderEntry]) -> list[Any]:
        """Load every named row or fail with the ids that are missing."""
        parsed = {entry.id: _parse_id(entry.id) for entry in entries}
        wanted = [item_id for item_id in parsed.values() if item_id is not None]

        rows: list[Any] = []
        if wanted:
            result = await self.db.execute(
                select(self.model)
                .where(self.model.id.in_(wanted))
                .execution_options(populate_existing=True)
            )
            rows = list(result.scalars().all())

        found = {row.id for row in rows}
        missing = [raw for raw, item_id in parsed.items() if item_id not in found]
        if missing:
            raise ItemNotFoundError(
                f"One or more {self.label}s not found for reordering.",
                missing_ids=missing,
            )
        return rows

    async def _displacement(self) -> int:
        """The configured offset, raised past the highest order already stored."""
        result = await self.db.execute(select(func.max(self.model.order)))
        highest = result.scalar_one_or_none() or 0
        return max(self.offset, highest + 1)

    async def _displace(self, rows: Sequence[Any]) -> None:
        """Move every row of the batch out of the live order range."""
        offset = await self._displacement()
        for row in rows:
            await self.db.execute(
                update(self.model)
                .where(self.model.id == row.id)
                .values(order=row.order + offset)
            )
        logger.debug(f"Displaced {len(rows)} {self.label}(s) by {offset}")

    async def _assign(self, entries: Sequence[ReorderEntry]) -> None:
        """Write final order values; a vanished row aborts the batch."""
        for entry in entries:
            result = await self.db.execute(
                update(self.model)
                .where(self.model.id == UUID(entry.id))
                .values(order=entry.order)
            )
            if result.rowcount == 0:
                raise ConcurrentModificationError(entry.id)
