"""Notification sink and host UI event bus collaborators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

logger = logging.getLogger(__name__)

NotificationVariant = Literal["success", "destructive"]
SWITCH_TAB_EVENT = "switch-semantic-tab"


@dataclass(frozen=True, slots=True)
class Notification:
    """User-visible toast."""

    title: str
    description: str = ""
    variant: NotificationVariant = "success"


class NotificationSink(ABC):
    """Receives toasts for the host UI."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver one notification."""

    def success(self, title: str, description: str = "") -> None:
        self.notify(Notification(title=title, description=description, variant="success"))

    def failure(self, title: str, description: str = "") -> None:
        self.notify(Notification(title=title, description=description, variant="destructive"))


class LoggingNotificationSink(NotificationSink):
    """Sink used by the API process; toasts end up in the application log."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == "destructive" else logging.INFO
        logger.log(
            level,
            "semgraph.notification variant=%s title=%s description=%s",
            notification.variant,
            notification.title,
            notification.description,
        )


class CollectingNotificationSink(NotificationSink):
    """Keeps every notification in memory, in delivery order."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def failures(self) -> list[Notification]:
        return [item for item in self.notifications if item.variant == "destructive"]


@dataclass(frozen=True, slots=True)
class UiEvent:
    name: str
    detail: dict[str, Any] = field(default_factory=dict)


class UiEventBus:
    """Synchronous fan-out of named events to host UI listeners."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[UiEvent], None]] = []
        self.emitted: list[UiEvent] = []

    def subscribe(self, listener: Callable[[UiEvent], None]) -> None:
        self._listeners.append(listener)

    def emit(self, name: str, detail: dict[str, Any] | None = None) -> UiEvent:
        event = UiEvent(name=name, detail=dict(detail or {}))
        self.emitted.append(event)
        for listener in list(self._listeners):
            listener(event)
        return event

    def switch_tab(self, tab: str) -> UiEvent:
        return self.emit(SWITCH_TAB_EVENT, {"tab": tab})
