"""
Allotment Models.

Core models for allocation and fulfillment:
- Warehouse: Where inventory is stored
- InventoryBatch: Depleting lot of a commodity
- AllocationRequest: Buyer demand with a lifecycle
- Dispatch: Shipment spawned by an approved allocation
"""

from allotment.models.batch import InventoryBatch
from allotment.models.dispatch import Dispatch
from allotment.models.enums import BatchStatus, DemandTier, DispatchStatus, RequestStatus
from allotment.models.request import AllocationRequest
from allotment.models.warehouse import Warehouse

__all__ = [
    'RequestStatus',
    'BatchStatus',
    'DispatchStatus',
    'DemandTier',
    'Warehouse',
    'InventoryBatch',
    'AllocationRequest',
    'Dispatch',
]
