"""
Fulfillment — approving a request against an operator-chosen batch.

approve() is the only place inventory is deducted. Everything it writes
(batch decrement, dispatch record, request status) commits or rolls back
together.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from allotment.codes import DISPATCH_PREFIX, generate_code
from allotment.conf import allotment_settings
from allotment.exceptions import InsufficientInventoryError, InvalidStateError, ValidationError
from allotment.lifecycle import ensure_transition
from allotment.models.batch import InventoryBatch
from allotment.models.dispatch import Dispatch
from allotment.models.enums import BatchStatus, DispatchStatus, RequestStatus
from allotment.models.request import AllocationRequest
from allotment.services.notifications import notify_on_commit
from allotment.services.queries import lookup

logger = logging.getLogger('allotment')


@dataclass(frozen=True)
class ApprovalResult:
    """What approve() committed."""

    request: AllocationRequest
    batch: InventoryBatch
    dispatch: Dispatch

    def as_dict(self) -> dict:
        return {
            'request': self.request.as_dict(),
            'batch': self.batch.as_dict(),
            'dispatch': self.dispatch.as_dict(),
        }


def _check_compatible(request: AllocationRequest, batch: InventoryBatch) -> None:
    if batch.commodity.strip().lower() != request.commodity.strip().lower():
        raise ValidationError(
            'COMMODITY_MISMATCH',
            requested=request.commodity,
            batch=batch.commodity,
        )
    if batch.unit != request.unit:
        raise ValidationError(
            'UNIT_MISMATCH',
            requested=request.unit,
            batch=batch.unit,
        )


def _create_dispatch(request: AllocationRequest, batch: InventoryBatch, now, user=None) -> Dispatch:
    return Dispatch.objects.create(
        code=generate_code(DISPATCH_PREFIX),
        batch=batch,
        request=request,
        destination=request.destination,
        quantity=request.quantity,
        unit=request.unit,
        status=DispatchStatus.PENDING,
        dispatched_at=now,
        estimated_delivery=now + timedelta(days=allotment_settings.DELIVERY_ESTIMATE_DAYS),
        updated_by=user,
    )


class Fulfillment:
    """Approval (fulfillment transaction)."""

    @classmethod
    def approve(cls, request_id, batch_id, user=None) -> ApprovalResult:
        """
        Allocate a request from an explicitly chosen batch.

        1. Validates request status, batch status, commodity/unit, quantity
        2. Deducts request.quantity from the batch (DISPATCHED if it hits 0)
        3. Creates a PENDING Dispatch (ETA = now + DELIVERY_ESTIMATE_DAYS)
        4. Transition: PENDING|REVIEWING → ALLOCATED

        Returns:
            ApprovalResult(request, batch, dispatch), all refreshed

        Raises:
            NotFoundError('REQUEST_NOT_FOUND' | 'BATCH_NOT_FOUND')
            InvalidStateError('INVALID_STATUS'): Request not pending/reviewing
            InvalidStateError('BATCH_NOT_ACTIVE'): Batch dispatched/expired
            ValidationError('INVALID_QUANTITY'): Stored quantity is not positive
            ValidationError('COMMODITY_MISMATCH' | 'UNIT_MISMATCH')
            InsufficientInventoryError('INSUFFICIENT_QUANTITY')

        Concurrency:
            - Runs under transaction.atomic()
            - select_for_update() on request and batch
            - The decrement is a conditional UPDATE (remaining >= quantity),
              so the check cannot be raced even where row locks are ignored
            - Any failure in steps 2-4 rolls back all of them
        """
        now = timezone.now()

        with transaction.atomic():
            request = lookup(AllocationRequest, request_id, 'REQUEST_NOT_FOUND', lock=True)
            ensure_transition(request.status, RequestStatus.ALLOCATED)
            if request.quantity <= 0:
                raise ValidationError(
                    'INVALID_QUANTITY',
                    field='quantity',
                    value=str(request.quantity),
                )

            batch = lookup(InventoryBatch, batch_id, 'BATCH_NOT_FOUND', lock=True)
            if batch.status != BatchStatus.ACTIVE:
                raise InvalidStateError(
                    'BATCH_NOT_ACTIVE',
                    batch=batch.code,
                    current=str(batch.status),
                )

            _check_compatible(request, batch)

            if request.quantity > batch.remaining_quantity:
                raise InsufficientInventoryError(
                    'INSUFFICIENT_QUANTITY',
                    available=batch.remaining_quantity,
                    requested=request.quantity,
                )

            if not InventoryBatch.objects.deduct(batch.pk, request.quantity, now=now):
                # Lost a race: someone deducted after our read
                batch.refresh_from_db()
                if batch.status != BatchStatus.ACTIVE and batch.remaining_quantity >= request.quantity:
                    raise InvalidStateError(
                        'BATCH_NOT_ACTIVE',
                        batch=batch.code,
                        current=str(batch.status),
                    )
                raise InsufficientInventoryError(
                    'INSUFFICIENT_QUANTITY',
                    available=batch.remaining_quantity,
                    requested=request.quantity,
                )

            batch.refresh_from_db()
            dispatch = _create_dispatch(request, batch, now, user=user)

            if not AllocationRequest.objects.transition(request.pk, RequestStatus.ALLOCATED, now=now):
                request.refresh_from_db(fields=['status'])
                raise InvalidStateError(
                    'CONCURRENT_MODIFICATION',
                    current=str(request.status),
                    target=str(RequestStatus.ALLOCATED),
                )
            request.refresh_from_db()

            logger.info(
                "allocation.approve",
                extra={
                    "request": request.code,
                    "batch": batch.code,
                    "dispatch": dispatch.code,
                    "qty": str(request.quantity),
                    "remaining": str(batch.remaining_quantity),
                },
            )
            notify_on_commit(
                'allocation.approved',
                {
                    'request': request.code,
                    'batch': batch.code,
                    'dispatch': dispatch.code,
                    'quantity': str(request.quantity),
                    'unit': request.unit,
                },
                warehouse=batch.warehouse.code if batch.warehouse_id else None,
            )

        return ApprovalResult(request=request, batch=batch, dispatch=dispatch)
