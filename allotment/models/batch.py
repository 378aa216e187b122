"""
InventoryBatch model — a depleting lot of a commodity in storage.

Batches are created by an intake process outside Allotment. The only
field Allotment mutates is remaining_quantity (plus the status flip and
dispatch date when a batch is fully allocated), and it does so exclusively
through BatchQuerySet.deduct().

Usage:
    batch = InventoryBatch.objects.create(
        code="LOT-2026-0042",
        commodity="Rice",
        remaining_quantity=Decimal("1000"),
        shelf_life_days=180,
        risk_score=35,
        warehouse=warehouse,
    )
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from allotment.models.enums import BatchStatus


class BatchQuerySet(models.QuerySet):
    """Custom QuerySet for InventoryBatch with convenience filters."""

    def active(self):
        """Batches that can still be allocated from."""
        return self.filter(status=BatchStatus.ACTIVE)

    def for_commodity(self, commodity: str):
        """Case-insensitive commodity match."""
        return self.filter(commodity__iexact=commodity.strip())

    def at_warehouse(self, warehouse):
        """Filter by warehouse (None = no filter)."""
        if warehouse is None:
            return self
        return self.filter(warehouse=warehouse)

    def fifo(self):
        """Oldest intake first."""
        return self.order_by('intake_date', 'created_at', 'pk')

    def deduct(self, pk, quantity: Decimal, now=None) -> bool:
        """
        Atomically decrement remaining_quantity by quantity.

        The decrement only happens if the batch is active and still holds at
        least quantity; the check and the write are a single UPDATE, so two
        callers racing on the same batch can never drive it negative.
        When the result is exactly zero the batch becomes DISPATCHED.

        Returns:
            True if the decrement was applied, False otherwise.

        Must be called inside transaction.atomic().
        """
        now = now or timezone.now()
        updated = self.filter(
            pk=pk,
            status=BatchStatus.ACTIVE,
            remaining_quantity__gte=quantity,
        ).update(
            remaining_quantity=F('remaining_quantity') - quantity,
            updated_at=now,
        )
        if not updated:
            return False

        self.filter(
            pk=pk,
            status=BatchStatus.ACTIVE,
            remaining_quantity=0,
        ).update(
            status=BatchStatus.DISPATCHED,
            dispatch_date=now,
            updated_at=now,
        )
        return True


class InventoryBatch(models.Model):
    """
    Lot of a commodity with a depleting remaining quantity.

    risk_score (0-100) is a spoilage-proximity indicator computed upstream;
    higher means closer to spoiling.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('Lot code'),
    )

    commodity = models.CharField(max_length=100, db_index=True, verbose_name=_('Commodity'))
    variety = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Variety'))

    remaining_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name=_('Remaining quantity'),
    )
    unit = models.CharField(max_length=20, default='kg', verbose_name=_('Unit'))

    intake_date = models.DateField(default=date.today, verbose_name=_('Intake date'))
    shelf_life_days = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Shelf life (days)'),
        help_text=_('Estimated days the lot stays usable after intake'),
    )
    risk_score = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        verbose_name=_('Risk score'),
        help_text=_('0-100, higher = closer to spoilage'),
    )

    zone = models.CharField(max_length=50, blank=True, default='', verbose_name=_('Storage zone'))
    warehouse = models.ForeignKey(
        'allotment.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='batches',
        verbose_name=_('Warehouse'),
    )

    status = models.CharField(
        max_length=20,
        choices=BatchStatus.choices,
        default=BatchStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )
    dispatch_date = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Dispatch date'),
        help_text=_('Set when the lot is fully allocated'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BatchQuerySet.as_manager()

    class Meta:
        verbose_name = _('Inventory batch')
        verbose_name_plural = _('Inventory batches')
        ordering = ['intake_date', 'created_at']
        indexes = [
            models.Index(fields=['commodity', 'status'], name='allot_batch_commodity_status'),
            models.Index(fields=['warehouse', 'status'], name='allot_batch_wh_status'),
        ]

    @property
    def risk_tier(self) -> str:
        """Freshness tier derived from risk_score."""
        from allotment.scoring import risk_tier
        return risk_tier(self.risk_score)

    @property
    def expires_on(self) -> date:
        """Last day the lot is expected to be usable."""
        return self.intake_date + timedelta(days=self.shelf_life_days)

    @property
    def remaining_shelf_life(self) -> int:
        """Days of shelf life left (never negative)."""
        return max((self.expires_on - date.today()).days, 0)

    @property
    def is_active(self) -> bool:
        return self.status == BatchStatus.ACTIVE

    def as_dict(self) -> dict:
        return {
            'id': str(self.pk),
            'code': self.code,
            'commodity': self.commodity,
            'variety': self.variety,
            'remaining_quantity': str(self.remaining_quantity),
            'unit': self.unit,
            'intake_date': self.intake_date.isoformat(),
            'shelf_life_days': self.shelf_life_days,
            'risk_score': self.risk_score,
            'zone': self.zone,
            'warehouse': self.warehouse.code if self.warehouse_id else None,
            'status': self.status,
            'dispatch_date': self.dispatch_date.isoformat() if self.dispatch_date else None,
        }

    def __str__(self) -> str:
        return f"Lot {self.code}: {self.remaining_quantity} {self.unit} {self.commodity}"
