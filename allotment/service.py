"""
Allocation Service — The single public interface for allocation operations.

Usage:
    from allotment import allocation

    request = allocation.submit(Decimal('800'), 'Rice', 'FreshMart retail, Pune')
    ranked = allocation.rank(request.pk)          # advisory only
    result = allocation.approve(request.pk, ranked[0].batch.pk)
    allocation.update_dispatch_status(result.dispatch.pk, 'in-transit')
"""

from allotment.services.dispatching import Dispatching
from allotment.services.fulfillment import Fulfillment
from allotment.services.queries import AllocationQueries
from allotment.services.ranking import Ranking
from allotment.services.requests import AllocationRequests


class Allocation(
    AllocationQueries,
    Ranking,
    AllocationRequests,
    Fulfillment,
    Dispatching,
):
    """
    Single interface for all allocation operations.

    Identities (request_id, batch_id, dispatch_id) accept the UUID, the
    human-readable code or the model instance.

    IMPORTANT: All state-changing methods use atomic transactions
    with appropriate locking. See each method's docstring.
    """
