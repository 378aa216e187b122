"""
Warehouse model — Where inventory is stored.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Warehouse(models.Model):
    """
    Storage location holding inventory batches.

    Warehouses are owned by the surrounding application; Allotment only
    reads them to scope requests and rankings.

    Examples:
        Warehouse.objects.create(code='nashik-cold', name='Nashik Cold Store')
    """

    code = models.SlugField(
        unique=True,
        max_length=50,
        verbose_name=_('Code'),
        help_text=_('Unique identifier (e.g. nashik-cold)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    location = models.CharField(
        max_length=255,
        blank=True,
        default='',
        verbose_name=_('Location'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Active'),
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_('Metadata'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Warehouse')
        verbose_name_plural = _('Warehouses')
        ordering = ['code']

    def __str__(self) -> str:
        return self.name
