"""Django app configuration for Allotment."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AllotmentConfig(AppConfig):
    """Configuration for Allotment app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "allotment"
    verbose_name = _("Allocation & Fulfillment")
