"""
Allocation queries — read-only operations.

All methods are classmethod on Allocation and use no locking, except the
module-level lookup() which state-changing services call with lock=True.
"""

import uuid

from allotment.conf import allotment_settings
from allotment.exceptions import NotFoundError
from allotment.models.batch import InventoryBatch
from allotment.models.dispatch import Dispatch
from allotment.models.request import AllocationRequest


def lookup(model, ident, not_found_code: str, lock: bool = False):
    """
    Fetch a request, batch or dispatch by identity.

    ident may be a model instance, its UUID (string or UUID) or its
    human-readable code. Strings that parse as a UUID are matched against
    the primary key only, never against code.

    Raises:
        NotFoundError(not_found_code): If nothing matches
    """
    if isinstance(ident, model):
        ident = ident.pk

    qs = model.objects.select_for_update() if lock else model.objects.all()

    try:
        key = {'pk': uuid.UUID(str(ident))}
    except ValueError:
        key = {'code': str(ident)}

    try:
        return qs.get(**key)
    except model.DoesNotExist:
        raise NotFoundError(not_found_code, id=str(ident)) from None


class AllocationQueries:
    """Read-only allocation query methods."""

    @classmethod
    def get_request(cls, request_id) -> AllocationRequest:
        """Raises NotFoundError('REQUEST_NOT_FOUND')."""
        return lookup(AllocationRequest, request_id, 'REQUEST_NOT_FOUND')

    @classmethod
    def get_batch(cls, batch_id) -> InventoryBatch:
        """Raises NotFoundError('BATCH_NOT_FOUND')."""
        return lookup(InventoryBatch, batch_id, 'BATCH_NOT_FOUND')

    @classmethod
    def get_dispatch(cls, dispatch_id) -> Dispatch:
        """Raises NotFoundError('DISPATCH_NOT_FOUND')."""
        return lookup(Dispatch, dispatch_id, 'DISPATCH_NOT_FOUND')

    @classmethod
    def list_requests(cls, status: str | None = None, requester=None):
        """Requests, newest first, optionally filtered by status/requester."""
        qs = AllocationRequest.objects.for_requester(requester).select_related('warehouse')
        if status:
            qs = qs.filter(status=status)
        return qs

    @classmethod
    def list_dispatches(cls, status: str | None = None, requester=None):
        """Dispatches, newest first. requester limits to their own orders."""
        qs = Dispatch.objects.for_requester(requester).select_related('batch', 'request')
        if status:
            qs = qs.filter(status=status)
        return qs

    @classmethod
    def candidate_batches(cls, request: AllocationRequest):
        """
        Batches an operator could allocate this request from, FIFO ordered.

        Active, same commodity (case-insensitive) and unit, restricted to the
        request's warehouse when it has one. Batches smaller than the request
        are left out unless RANK_UNDERSIZED_BATCHES is set.
        """
        qs = (
            InventoryBatch.objects
            .active()
            .for_commodity(request.commodity)
            .filter(unit=request.unit)
            .at_warehouse(request.warehouse)
        )
        if not allotment_settings.RANK_UNDERSIZED_BATCHES:
            qs = qs.filter(remaining_quantity__gte=request.quantity)
        return qs.select_related('warehouse').fifo()
