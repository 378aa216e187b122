"""
Allocation services — modular organization of allocation operations.

    from allotment.services import (
        AllocationQueries, Ranking, AllocationRequests, Fulfillment, Dispatching,
    )
"""

from allotment.services.dispatching import Dispatching
from allotment.services.fulfillment import ApprovalResult, Fulfillment
from allotment.services.queries import AllocationQueries
from allotment.services.ranking import RankedBatch, Ranking, rank_batches
from allotment.services.requests import AllocationRequests

__all__ = [
    'AllocationQueries',
    'Ranking',
    'RankedBatch',
    'rank_batches',
    'AllocationRequests',
    'Fulfillment',
    'ApprovalResult',
    'Dispatching',
]
