from enum import Enum
from typing import List, Protocol

from pydantic import BaseModel, Field

from course_admin.utils.logging import get_logger

logger = get_logger()


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """A toast-style message for the user."""

    title: str = Field(..., description="Short heading")
    description: str = Field(default="", description="Detail line")
    variant: NotificationVariant = Field(default=NotificationVariant.DEFAULT)

    @classmethod
    def success(cls, title: str, description: str = "") -> "Notification":
        return cls(title=title, description=description)

    @classmethod
    def error(cls, description: str, title: str = "Error") -> "Notification":
        return cls(
            title=title,
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
        )

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingNotifier:
    """Default notifier: writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        if notification.is_error:
            logger.warning(f"{notification.title}: {notification.description}")
        else:
            logger.info(f"{notification.title}: {notification.description}")


class RecordingNotifier(LoggingNotifier):
    """Keeps every notification so an embedding UI can render them."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        super().notify(notification)
        self.notifications.append(notification)

    @property
    def last(self) -> Notification:
        return self.notifications[-1]

    def clear(self) -> None:
        self.notifications.clear()
