"""
Allotment Adapters.

Implementations of protocols for external systems.
"""

from allotment.adapters.loader import get_notification_sink, reset_notification_sink
from allotment.adapters.noop import NoopNotificationSink, RecordingNotificationSink

__all__ = [
    "get_notification_sink",
    "reset_notification_sink",
    "NoopNotificationSink",
    "RecordingNotificationSink",
]
