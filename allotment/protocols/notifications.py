"""
Notification Sink Protocol — Interface for best-effort event delivery.

Allotment defines this protocol; the host application (alerts table,
e-mail, chat, message bus) implements it. Delivery is never essential to
an allocation: failures are logged and swallowed by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class Notification:
    """Event emitted after an allocation state change commits."""

    event: str  # "allocation.submitted", "allocation.approved", ...
    payload: dict[str, Any] = field(default_factory=dict)
    warehouse: str | None = None  # Warehouse code, for routing to its managers


@runtime_checkable
class NotificationSink(Protocol):
    """
    Protocol for notification delivery.

    Implementations may raise any exception on failure; Allotment wraps it
    in DependencyError, logs it and carries on.
    """

    def publish(self, notification: Notification) -> None:
        """
        Deliver one notification.

        Args:
            notification: Event name plus JSON-safe payload
        """
        ...
