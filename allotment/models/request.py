"""
AllocationRequest model — buyer demand for a quantity of a commodity.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from allotment.models.enums import RequestStatus


class AllocationRequestQuerySet(models.QuerySet):
    """Custom QuerySet for AllocationRequest."""

    def open(self):
        """Requests still waiting for an allocation decision."""
        return self.filter(status__in=[RequestStatus.PENDING, RequestStatus.REVIEWING])

    def for_requester(self, user):
        """Filter by requester (None = no filter)."""
        if user is None:
            return self
        return self.filter(requester=user)

    def transition(self, pk, target: str, now=None, **changes) -> bool:
        """
        Move a request to target if its current status allows it.

        Applied as a single conditional UPDATE (status IN allowed sources),
        so a concurrent transition that already moved the row wins and this
        one reports False.

        Returns:
            True if the row was updated.
        """
        from allotment.lifecycle import sources_for

        updated = self.filter(
            pk=pk,
            status__in=sources_for(target),
        ).update(
            status=target,
            updated_at=now or timezone.now(),
            **changes,
        )
        return bool(updated)


class AllocationRequest(models.Model):
    """
    Demand for a quantity of a commodity, progressing through a lifecycle.

    Created at PENDING by a requester and never deleted. Status changes go
    through AllocationRequestQuerySet.transition(); see allotment.lifecycle
    for the allowed moves.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(
        max_length=30,
        unique=True,
        verbose_name=_('Request code'),
    )
    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='allocation_requests',
        verbose_name=_('Requester'),
    )

    commodity = models.CharField(max_length=100, verbose_name=_('Commodity'))
    variety = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Variety'))
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity'),
    )
    unit = models.CharField(max_length=20, default='kg', verbose_name=_('Unit'))

    deadline = models.DateTimeField(null=True, blank=True, verbose_name=_('Deadline'))
    destination = models.CharField(max_length=255, verbose_name=_('Destination'))
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Offered price'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))

    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    warehouse = models.ForeignKey(
        'allotment.Warehouse',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='allocation_requests',
        verbose_name=_('Warehouse'),
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AllocationRequestQuerySet.as_manager()

    class Meta:
        verbose_name = _('Allocation request')
        verbose_name_plural = _('Allocation requests')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['commodity', 'status'], name='allot_request_commodity_status'),
        ]

    @property
    def demand_text(self) -> str:
        """Free text the demand classifier looks at."""
        return f"{self.destination} {self.notes}"

    @property
    def is_open(self) -> bool:
        return self.status in (RequestStatus.PENDING, RequestStatus.REVIEWING)

    def as_dict(self) -> dict:
        return {
            'id': str(self.pk),
            'code': self.code,
            'requester': self.requester_id,
            'commodity': self.commodity,
            'variety': self.variety,
            'quantity': str(self.quantity),
            'unit': self.unit,
            'deadline': self.deadline.isoformat() if self.deadline else None,
            'destination': self.destination,
            'price': str(self.price) if self.price is not None else None,
            'notes': self.notes,
            'status': self.status,
            'warehouse': self.warehouse.code if self.warehouse_id else None,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self) -> str:
        return f"{self.code}: {self.quantity} {self.unit} {self.commodity} → {self.destination}"
