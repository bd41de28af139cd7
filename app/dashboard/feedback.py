"""Operator notifications shown by the dashboard."""

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class FeedbackLevel(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    level: FeedbackLevel
    message: str
    shown_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class FeedbackChannel:
    """Holds the notification currently on screen plus everything shown so far.

    A new notification replaces the current one. ``listener`` is called with
    each toast as it is shown, and with ``None`` when it is dismissed.
    """

    def __init__(self, listener: Callable[[Toast | None], None] | None = None):
        self.listener = listener
        self.current: Toast | None = None
        self.history: list[Toast] = []

    def show(self, level: FeedbackLevel, message: str) -> Toast:
        toast = Toast(level=level, message=message)
        self.current = toast
        self.history.append(toast)
        logger.debug(f"[{level.value}] {message}")
        if self.listener:
            self.listener(toast)
        return toast

    def info(self, message: str) -> Toast:
        return self.show(FeedbackLevel.INFO, message)

    def success(self, message: str) -> Toast:
        return self.show(FeedbackLevel.SUCCESS, message)

    def warning(self, message: str) -> Toast:
        return self.show(FeedbackLevel.WARNING, message)

    def error(self, message: str) -> Toast:
        return self.show(FeedbackLevel.ERROR, message)

    def dismiss(self) -> None:
        self.current = None
        if self.listener:
            self.listener(None)

    def messages(self, level: FeedbackLevel | None = None) -> list[str]:
        return [t.message for t in self.history if level is None or t.level == level]
