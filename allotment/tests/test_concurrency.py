"""
Tests for oversell prevention and all-or-nothing approval.

Races are simulated deterministically: the batch row read by approve() is
made stale so the conditional decrement is what has to catch it.
"""

from decimal import Decimal

import pytest
from django.db import DatabaseError

from allotment import allocation
from allotment.exceptions import InsufficientInventoryError, InvalidStateError
from allotment.models import (
    AllocationRequest,
    BatchStatus,
    Dispatch,
    InventoryBatch,
    RequestStatus,
)
from allotment.services import fulfillment
from allotment.services.queries import lookup


pytestmark = pytest.mark.django_db


@pytest.fixture
def stale_batch_reads(monkeypatch):
    """approve() sees every batch as active with 1000 left, whatever the row says."""

    def _lookup(model, ident, not_found_code, lock=False):
        obj = lookup(model, ident, not_found_code, lock=lock)
        if model is InventoryBatch:
            obj.status = BatchStatus.ACTIVE
            obj.remaining_quantity = Decimal('1000')
        return obj

    monkeypatch.setattr(fulfillment, 'lookup', _lookup)


class TestDeduct:
    """Tests for InventoryBatch.objects.deduct()."""

    def test_deduct_partial(self, rice_batch):
        assert InventoryBatch.objects.deduct(rice_batch.pk, Decimal('400'))

        rice_batch.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('600')
        assert rice_batch.status == BatchStatus.ACTIVE

    def test_deduct_to_zero_dispatches(self, rice_batch):
        assert InventoryBatch.objects.deduct(rice_batch.pk, Decimal('1000'))

        rice_batch.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('0')
        assert rice_batch.status == BatchStatus.DISPATCHED
        assert rice_batch.dispatch_date is not None

    def test_deduct_more_than_remaining(self, rice_batch):
        assert not InventoryBatch.objects.deduct(rice_batch.pk, Decimal('1000.001'))

        rice_batch.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('1000')

    def test_deduct_inactive(self, make_batch):
        batch = make_batch(status=BatchStatus.EXPIRED)

        assert not InventoryBatch.objects.deduct(batch.pk, Decimal('1'))


class TestOversell:
    """Two requests competing for one batch."""

    def test_second_request_refused(self, rice_batch, make_request):
        """600 + 600 against 1000: exactly one succeeds."""
        first = make_request(quantity='600')
        second = make_request(quantity='600')

        allocation.approve(first.pk, rice_batch.pk)
        with pytest.raises(InsufficientInventoryError) as exc:
            allocation.approve(second.pk, rice_batch.pk)

        assert exc.value.available == Decimal('400')
        rice_batch.refresh_from_db()
        second.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('400')
        assert second.status == RequestStatus.PENDING
        assert Dispatch.objects.count() == 1

    def test_stale_read_cannot_oversell(self, rice_batch, make_request, stale_batch_reads):
        """The check passes on stale data but the conditional decrement refuses."""
        first = make_request(quantity='600')
        second = make_request(quantity='600')
        allocation.approve(first.pk, rice_batch.pk)

        with pytest.raises(InsufficientInventoryError) as exc:
            allocation.approve(second.pk, rice_batch.pk)

        assert exc.value.available == Decimal('400')
        rice_batch.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('400')
        assert Dispatch.objects.filter(request=second).count() == 0

    def test_stale_read_of_expired_batch(self, make_batch, rice_request, stale_batch_reads):
        batch = make_batch(status=BatchStatus.EXPIRED)

        with pytest.raises(InvalidStateError) as exc:
            allocation.approve(rice_request.pk, batch.pk)

        assert exc.value.code == 'BATCH_NOT_ACTIVE'
        batch.refresh_from_db()
        assert batch.remaining_quantity == Decimal('1000')

    def test_remaining_never_negative(self, make_batch, make_request, stale_batch_reads):
        """Keep approving against stale reads until the batch runs dry."""
        batch = make_batch(quantity='1000')
        outcomes = []

        for _ in range(5):
            request = make_request(quantity='300')
            try:
                allocation.approve(request.pk, batch.pk)
                outcomes.append(True)
            except InsufficientInventoryError:
                outcomes.append(False)

        batch.refresh_from_db()
        assert outcomes == [True, True, True, False, False]
        assert batch.remaining_quantity == Decimal('100')
        assert batch.status == BatchStatus.ACTIVE


class TestAtomicity:
    """A failure after the decrement rolls everything back."""

    def test_dispatch_failure_rolls_back(self, monkeypatch, rice_batch, rice_request):
        def _explode(*args, **kwargs):
            raise DatabaseError('disk full')

        monkeypatch.setattr(fulfillment, '_create_dispatch', _explode)

        with pytest.raises(DatabaseError):
            allocation.approve(rice_request.pk, rice_batch.pk)

        rice_batch.refresh_from_db()
        rice_request.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('1000')
        assert rice_batch.status == BatchStatus.ACTIVE
        assert rice_request.status == RequestStatus.PENDING
        assert Dispatch.objects.count() == 0

    def test_lost_status_race_rolls_back(self, monkeypatch, rice_batch, rice_request):
        """Request moved by someone else after the read: nothing is kept."""
        monkeypatch.setattr(AllocationRequest.objects, 'transition', lambda *args, **kwargs: False)

        with pytest.raises(InvalidStateError) as exc:
            allocation.approve(rice_request.pk, rice_batch.pk)

        assert exc.value.code == 'CONCURRENT_MODIFICATION'
        rice_batch.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('1000')
        assert Dispatch.objects.count() == 0
