"""
Allotment Protocols.

Defines interfaces for external system integration.
"""

from allotment.protocols.notifications import Notification, NotificationSink

__all__ = [
    "Notification",
    "NotificationSink",
]
