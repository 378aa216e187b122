"""
Allotment configuration.

Usage in settings.py:
    ALLOTMENT = {
        "NOTIFICATION_SINK": "myproject.notifications.AlertSink",
        "DELIVERY_ESTIMATE_DAYS": 3,
        "DEFAULT_UNIT": "kg",
        "RANK_UNDERSIZED_BATCHES": False,
        "DEMAND_KEYWORDS": [("retail", "fresh"), ("factory", "high")],
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class AllotmentSettings:
    """Allotment configuration settings."""

    # Notification sink backend (dotted path)
    NOTIFICATION_SINK: str = "allotment.adapters.noop.NoopNotificationSink"

    # Offset applied to Dispatch.estimated_delivery on approval
    DELIVERY_ESTIMATE_DAYS: int = 3

    # Unit used when a request is submitted without one
    DEFAULT_UNIT: str = "kg"

    # Include batches smaller than the requested quantity in rankings
    RANK_UNDERSIZED_BATCHES: bool = False

    # Ordered (keyword, tier) pairs; None = built-in table
    DEMAND_KEYWORDS: Any = None


def get_allotment_settings() -> AllotmentSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "ALLOTMENT", {})
    return AllotmentSettings(**{
        k: v for k, v in user_settings.items()
        if k in AllotmentSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_allotment_settings(), name)


allotment_settings = _LazySettings()
