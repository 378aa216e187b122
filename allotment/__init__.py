"""
Django Allotment — allocation and fulfillment for depleting inventory lots.

Usage:
    from allotment import allocation, AllocationError

    request = allocation.submit(Decimal('1000'), 'Rice', 'Hotel Sagar, Nashik')
    allocation.rank(request.pk)                # scored candidates, best first
    allocation.approve(request.pk, batch.pk)   # deduct + dispatch + allocated
    allocation.reject(other.pk, 'no stock available')
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'allocation':
        from allotment.service import Allocation
        return Allocation
    elif name == 'AllocationError':
        from allotment.exceptions import AllocationError
        return AllocationError
    elif name == 'AllocationRequest':
        from allotment.models.request import AllocationRequest
        return AllocationRequest
    elif name == 'InventoryBatch':
        from allotment.models.batch import InventoryBatch
        return InventoryBatch
    elif name == 'Dispatch':
        from allotment.models.dispatch import Dispatch
        return Dispatch
    elif name == 'Warehouse':
        from allotment.models.warehouse import Warehouse
        return Warehouse
    elif name == 'RequestStatus':
        from allotment.models.enums import RequestStatus
        return RequestStatus
    elif name == 'BatchStatus':
        from allotment.models.enums import BatchStatus
        return BatchStatus
    elif name == 'DispatchStatus':
        from allotment.models.enums import DispatchStatus
        return DispatchStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'allocation',
    'AllocationError',
    'AllocationRequest',
    'InventoryBatch',
    'Dispatch',
    'Warehouse',
    'RequestStatus',
    'BatchStatus',
    'DispatchStatus',
]

__version__ = '0.1.0'
