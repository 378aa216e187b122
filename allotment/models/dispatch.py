"""
Dispatch model — outbound shipment of an allocated quantity.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from allotment.models.enums import DispatchStatus


class DispatchQuerySet(models.QuerySet):
    """Custom QuerySet for Dispatch."""

    def for_requester(self, user):
        """Dispatches spawned by a requester's allocation requests."""
        if user is None:
            return self
        return self.filter(request__requester=user)

    def transition(self, pk, target: str, now=None, **changes) -> bool:
        """Conditional status change, see AllocationRequestQuerySet.transition()."""
        from allotment.lifecycle import DISPATCH_TRANSITIONS, sources_for

        updated = self.filter(
            pk=pk,
            status__in=sources_for(target, DISPATCH_TRANSITIONS),
        ).update(
            status=target,
            updated_at=now or timezone.now(),
            **changes,
        )
        return bool(updated)


class Dispatch(models.Model):
    """
    Shipment record linking a deducted batch quantity to a destination.

    Created only by the fulfillment transaction. Afterwards its status moves
    only on explicit operator updates; nothing is inferred automatically.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(
        max_length=30,
        unique=True,
        verbose_name=_('Shipment code'),
    )

    batch = models.ForeignKey(
        'allotment.InventoryBatch',
        on_delete=models.PROTECT,
        related_name='dispatches',
        verbose_name=_('Batch'),
    )
    request = models.ForeignKey(
        'allotment.AllocationRequest',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='dispatches',
        verbose_name=_('Allocation request'),
    )

    destination = models.CharField(max_length=255, verbose_name=_('Destination'))
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity'),
    )
    unit = models.CharField(max_length=20, default='kg', verbose_name=_('Unit'))

    status = models.CharField(
        max_length=20,
        choices=DispatchStatus.choices,
        default=DispatchStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    dispatched_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Dispatched at'))
    estimated_delivery = models.DateTimeField(null=True, blank=True, verbose_name=_('Estimated delivery'))

    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Last updated by'),
    )
    updated_at = models.DateTimeField(auto_now=True)

    objects = DispatchQuerySet.as_manager()

    class Meta:
        verbose_name = _('Dispatch')
        verbose_name_plural = _('Dispatches')
        ordering = ['-dispatched_at']

    def as_dict(self) -> dict:
        return {
            'id': str(self.pk),
            'code': self.code,
            'batch': str(self.batch_id),
            'request': str(self.request_id) if self.request_id else None,
            'destination': self.destination,
            'quantity': str(self.quantity),
            'unit': self.unit,
            'status': self.status,
            'dispatched_at': self.dispatched_at.isoformat(),
            'estimated_delivery': (
                self.estimated_delivery.isoformat() if self.estimated_delivery else None
            ),
        }

    def __str__(self) -> str:
        return f"{self.code}: {self.quantity} {self.unit} → {self.destination} ({self.status})"
