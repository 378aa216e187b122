"""
Exceptions for Allotment.

All errors are AllocationError subclasses with a structured code for
programmatic handling.
"""

from decimal import Decimal
from typing import Any


class AllocationError(Exception):
    """
    Structured exception for allocation operations.

    Usage:
        try:
            allocation.approve(request_id, batch_id)
        except InsufficientInventoryError as e:
            print(f"Only {e.available} left")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'error': type(self).__name__,
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class ValidationError(AllocationError):
    """Missing or invalid input fields."""

    _default_messages = {
        'MISSING_FIELD': 'Required field is missing',
        'INVALID_QUANTITY': 'Quantity must be a positive number',
        'INVALID_PRICE': 'Price must be a non-negative number',
        'INVALID_DEADLINE': 'Deadline must be a datetime',
        'INVALID_STATUS_VALUE': 'Unknown status value',
        'COMMODITY_MISMATCH': 'Batch commodity does not match the request',
        'UNIT_MISMATCH': 'Batch unit does not match the request',
    }


class NotFoundError(AllocationError):
    """Unknown request, batch or dispatch."""

    _default_messages = {
        'REQUEST_NOT_FOUND': 'Allocation request not found',
        'BATCH_NOT_FOUND': 'Inventory batch not found',
        'DISPATCH_NOT_FOUND': 'Dispatch not found',
    }


class InvalidStateError(AllocationError):
    """Operation not permitted in the current lifecycle state."""

    _default_messages = {
        'INVALID_STATUS': 'Operation not allowed in the current status',
        'BATCH_NOT_ACTIVE': 'Batch is not active',
        'CONCURRENT_MODIFICATION': 'Status was changed by a concurrent operation',
    }

    @property
    def current(self) -> str | None:
        """Shortcut for data['current']."""
        return self.data.get('current')


class InsufficientInventoryError(AllocationError):
    """Requested quantity exceeds what the batch holds."""

    _default_messages = {
        'INSUFFICIENT_QUANTITY': 'Requested quantity exceeds remaining inventory',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))


class DependencyError(AllocationError):
    """A best-effort collaborator (e.g. notifications) failed."""

    _default_messages = {
        'NOTIFICATION_FAILED': 'Notification could not be delivered',
    }
