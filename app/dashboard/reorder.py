"""Local drag-and-drop reordering of the carousel list.

Dragging only rearranges a local copy of the canonical list; nothing is sent
to the server until the operator commits the pending arrangement.
"""

import enum
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, replace

from app.schemas.carousel import CarouselItemResponse, ReorderEntry

logger = logging.getLogger(__name__)

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def is_persisted_id(value: str) -> bool:
    """Rows that were never saved carry a local placeholder id."""
    return bool(_UUID_PATTERN.match(value))


class BoardState(str, enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    PENDING_COMMIT = "pending_commit"
    COMMITTING = "committing"


class EmptyPlanError(Exception):
    """The pending arrangement contains no saved rows."""


@dataclass(frozen=True)
class BoardRow:
    id: str
    order: int
    title: str | None = None
    image_url: str | None = None

    @classmethod
    def from_item(cls, item: CarouselItemResponse) -> "BoardRow":
        return cls(id=str(item.id), order=item.order, title=item.title, image_url=item.image_url)


class ReorderBoard:
    """State machine behind the reorder table."""

    def __init__(self) -> None:
        self.state = BoardState.IDLE
        self.canonical: list[BoardRow] = []
        self.rows: list[BoardRow] = []
        self.source_id: str | None = None
        # state to fall back to when a drag ends without changing anything
        self._resting_state = BoardState.IDLE

    def load(self, rows: Iterable[BoardRow]) -> None:
        """Install a freshly fetched canonical list, dropping local changes."""
        self.canonical = sorted(rows, key=lambda row: row.order)
        self.rows = list(self.canonical)
        self.source_id = None
        self._resting_state = BoardState.IDLE
        self.state = BoardState.IDLE

    def _index_of(self, row_id: str) -> int | None:
        for index, row in enumerate(self.rows):
            if row.id == row_id:
                return index
        return None

    def drag_start(self, row_id: str) -> bool:
        if self.state == BoardState.COMMITTING or self._index_of(row_id) is None:
            return False
        if self.state != BoardState.DRAGGING:
            self._resting_state = self.state
        self.source_id = row_id
        self.state = BoardState.DRAGGING
        return True

    def drag_over(self, row_id: str) -> bool:
        """Whether ``row_id`` would accept the current drag."""
        return (
            self.state == BoardState.DRAGGING
            and self.source_id is not None
            and self.source_id != row_id
            and self._index_of(row_id) is not None
        )

    def drop(self, row_id: str) -> bool:
        """Move the dragged row to the target's position.

        Returns ``True`` when the local arrangement changed.
        """
        if not self.drag_over(row_id):
            self.drag_end()
            return False

        source_index = self._index_of(self.source_id)
        target_index = self._index_of(row_id)

        rows = list(self.rows)
        moved = rows.pop(source_index)
        rows.insert(target_index, moved)
        self.rows = [replace(row, order=index + 1) for index, row in enumerate(rows)]

        logger.debug(f"Moved row {moved.id} from position {source_index + 1} to {target_index + 1}")
        self.source_id = None
        self._resting_state = BoardState.PENDING_COMMIT
        self.state = BoardState.PENDING_COMMIT
        return True

    def drag_end(self) -> None:
        """End the drag wherever the pointer was released."""
        self.source_id = None
        if self.state == BoardState.DRAGGING:
            self.state = self._resting_state

    def plan(self) -> list[ReorderEntry]:
        return [
            ReorderEntry(id=row.id, order=row.order)
            for row in self.rows
            if is_persisted_id(row.id)
        ]

    def begin_commit(self) -> list[ReorderEntry]:
        """Freeze the board while the arrangement is sent to the server."""
        entries = self.plan()
        if not entries:
            raise EmptyPlanError("No saved items to reorder")
        self.source_id = None
        self.state = BoardState.COMMITTING
        return entries

    def commit_succeeded(self, canonical: Iterable[BoardRow]) -> None:
        self.load(canonical)

    def commit_failed(self) -> None:
        """Keep the local arrangement so the operator can retry."""
        self._resting_state = BoardState.PENDING_COMMIT
        self.state = BoardState.PENDING_COMMIT

    def discard(self) -> None:
        self.load(self.canonical)
