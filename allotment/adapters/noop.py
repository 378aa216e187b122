"""
Noop Notification Sink — Default adapter that only logs.

Usage in settings.py:
    ALLOTMENT = {
        "NOTIFICATION_SINK": "allotment.adapters.noop.NoopNotificationSink",
    }

Nothing is delivered anywhere; events end up in the 'allotment' logger at
DEBUG level. Suitable for development, tests and deployments that have no
alerting yet.
"""

from __future__ import annotations

import logging

from allotment.protocols.notifications import Notification

logger = logging.getLogger('allotment')


class NoopNotificationSink:
    """No-operation sink implementing the ``NotificationSink`` protocol."""

    def publish(self, notification: Notification) -> None:
        logger.debug(
            "allocation.notify.noop",
            extra={
                "event": notification.event,
                "warehouse": notification.warehouse,
            },
        )


class RecordingNotificationSink:
    """
    Sink that keeps every notification in memory.

    Handy in tests and shell sessions:
        sink = get_notification_sink()
        sink.published[-1].event  # "allocation.approved"
    """

    def __init__(self):
        self.published: list[Notification] = []

    def publish(self, notification: Notification) -> None:
        self.published.append(notification)
