"""Transient user-facing notifications (toasts)."""

from pydantic import BaseModel, ConfigDict

from .enums import NotificationVariant


class Notification(BaseModel):
    """A toast shown to the user after an action."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @classmethod
    def success(cls, title: str, description: str) -> "Notification":
        return cls(title=title, description=description)

    @classmethod
    def error(cls, title: str, description: str) -> "Notification":
        return cls(
            title=title,
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
        )
