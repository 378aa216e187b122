"""
Lifecycle rules — which status changes are allowed.

Two state machines live here:

AllocationRequest:

    pending ──► reviewing ──► allocated ──► dispatched ──► completed
       │            │             │                            ▲
       │            │             └────────────────────────────┘
       ├────────────┴──► cancelled
       └──► allocated

Dispatch:

    pending ──► in-transit ──► delivered
       │            │
       ├────────────┴──► cancelled
       └──► delivered

Every status has an entry in its table (terminal ones map to an empty set),
so lookups never fall through.
"""

from allotment.exceptions import InvalidStateError
from allotment.models.enums import DispatchStatus, RequestStatus


REQUEST_TRANSITIONS: dict[str, frozenset[str]] = {
    RequestStatus.PENDING: frozenset({
        RequestStatus.REVIEWING,
        RequestStatus.ALLOCATED,
        RequestStatus.CANCELLED,
    }),
    RequestStatus.REVIEWING: frozenset({
        RequestStatus.ALLOCATED,
        RequestStatus.CANCELLED,
    }),
    RequestStatus.ALLOCATED: frozenset({
        RequestStatus.DISPATCHED,
        RequestStatus.COMPLETED,
    }),
    RequestStatus.DISPATCHED: frozenset({
        RequestStatus.COMPLETED,
    }),
    RequestStatus.COMPLETED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
}

DISPATCH_TRANSITIONS: dict[str, frozenset[str]] = {
    DispatchStatus.PENDING: frozenset({
        DispatchStatus.IN_TRANSIT,
        DispatchStatus.DELIVERED,
        DispatchStatus.CANCELLED,
    }),
    DispatchStatus.IN_TRANSIT: frozenset({
        DispatchStatus.DELIVERED,
        DispatchStatus.CANCELLED,
    }),
    DispatchStatus.DELIVERED: frozenset(),
    DispatchStatus.CANCELLED: frozenset(),
}

# Statuses from which a request can be approved or rejected
OPEN_STATUSES = frozenset({RequestStatus.PENDING, RequestStatus.REVIEWING})


def can_transition(current: str, target: str, transitions=REQUEST_TRANSITIONS) -> bool:
    """Is current → target allowed?"""
    return target in transitions[current]


def sources_for(target: str, transitions=REQUEST_TRANSITIONS) -> list[str]:
    """All statuses that may move to target, in table order."""
    return [status for status, targets in transitions.items() if target in targets]


def ensure_transition(current: str, target: str, transitions=REQUEST_TRANSITIONS) -> None:
    """
    Guard a status change.

    Raises:
        InvalidStateError('INVALID_STATUS'): If current → target is not allowed
    """
    if not can_transition(current, target, transitions):
        raise InvalidStateError(
            'INVALID_STATUS',
            current=str(current),
            target=str(target),
            expected=[str(s) for s in sources_for(target, transitions)],
        )
