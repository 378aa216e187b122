"""
Allotment sink loader — loads the configured NotificationSink from settings.

Usage:
    from allotment.adapters import get_notification_sink

    sink = get_notification_sink()
    sink.publish(Notification("allocation.approved", {...}))

Settings:
    ALLOTMENT = {
        "NOTIFICATION_SINK": "myproject.alerts.AlertTableSink",
    }

If the dotted path cannot be imported, get_notification_sink() raises
ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from allotment.conf import allotment_settings
from allotment.protocols.notifications import NotificationSink

logger = logging.getLogger(__name__)


# Cached sink instance
_lock = threading.Lock()
_notification_sink: NotificationSink | None = None


def get_notification_sink() -> NotificationSink:
    """
    Return the configured notification sink.

    Raises:
        ImproperlyConfigured: If NOTIFICATION_SINK is empty or import fails
    """
    global _notification_sink

    if _notification_sink is None:
        with _lock:
            if _notification_sink is None:  # double-checked
                sink_path = allotment_settings.NOTIFICATION_SINK

                if not sink_path:
                    raise ImproperlyConfigured(
                        "ALLOTMENT['NOTIFICATION_SINK'] must be configured. "
                        "Example: 'allotment.adapters.noop.NoopNotificationSink'"
                    )

                try:
                    sink_class = import_string(sink_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import notification sink '{sink_path}': {e}"
                    ) from e
                _notification_sink = sink_class()
                logger.debug("Loaded notification sink: %s", sink_path)

    return _notification_sink


def reset_notification_sink() -> None:
    """Reset the cached sink. Useful for testing."""
    global _notification_sink
    _notification_sink = None
