"""Domain errors raised by services and translated to HTTP responses by routes."""

from fastapi import status


class CMSError(Exception):
    """Base class for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CMSError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingImageError(ValidationError):
    """An image is required but none was uploaded."""

    def __init__(self, message: str = "An image is required to create this item."):
        super().__init__(message)


class DuplicateOrderError(CMSError):
    """The requested order value is already taken by another item."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, order: int | None = None, message: str | None = None):
        if message is None:
            message = (
                f"An item with order '{order}' already exists. "
                "Please choose a different order number."
            )
        super().__init__(message)
        self.order = order


class ItemNotFoundError(CMSError):
    """One or more referenced items do not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, missing_ids: list[str] | None = None):
        super().__init__(message)
        self.missing_ids = missing_ids or []


class ConcurrentModificationError(CMSError):
    """A row vanished between the validate and commit phases of a reorder."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, item_id: str):
        super().__init__(
            f"Failed to update order: item {item_id} was not found during final update."
        )
        self.item_id = item_id


class TransactionError(CMSError):
    """Unexpected failure inside a database transaction."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
