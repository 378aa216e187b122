"""
Best-effort notifications.

Notifications are sent only after the surrounding transaction commits and
never affect its outcome: any failure is wrapped in DependencyError and
logged at WARNING.
"""

import logging
from functools import partial

from django.db import transaction

from allotment.adapters.loader import get_notification_sink
from allotment.exceptions import DependencyError
from allotment.protocols.notifications import Notification

logger = logging.getLogger('allotment')


def notify(event: str, payload: dict | None = None, warehouse: str | None = None) -> bool:
    """
    Publish one notification, swallowing delivery failures.

    Returns:
        True if the sink accepted it, False if it failed
    """
    notification = Notification(event=event, payload=payload or {}, warehouse=warehouse)
    try:
        get_notification_sink().publish(notification)
    except Exception as exc:
        error = DependencyError('NOTIFICATION_FAILED', event=event, cause=repr(exc))
        logger.warning(
            "allocation.notify.failed",
            extra={
                "code": error.code,
                "event": event,
                "cause": error.data["cause"],
            },
            exc_info=True,
        )
        return False
    return True


def notify_on_commit(event: str, payload: dict | None = None, warehouse: str | None = None) -> None:
    """Schedule notify() to run once the current transaction commits."""
    transaction.on_commit(partial(notify, event, payload, warehouse))
