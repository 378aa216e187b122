"""
Allocation requests — submission and lifecycle moves that don't touch
inventory (submit, start_review, reject, advance).

All state-changing methods use transaction.atomic() and conditional
status updates.
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import DecimalValidator
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from allotment.codes import REQUEST_PREFIX, generate_code
from allotment.conf import allotment_settings
from allotment.exceptions import InvalidStateError, ValidationError
from allotment.lifecycle import ensure_transition
from allotment.models.enums import RequestStatus
from allotment.models.request import AllocationRequest
from allotment.services.notifications import notify_on_commit
from allotment.services.queries import lookup

logger = logging.getLogger('allotment')

# Statuses advance() may set; the rest belong to approve()/reject()/start_review()
ADVANCE_TARGETS = (RequestStatus.DISPATCHED, RequestStatus.COMPLETED)


def _to_decimal(value, code: str, field: str) -> Decimal:
    """Parse value and check it fits the model column for field."""
    try:
        result = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(code, field=field, value=str(value)) from None
    if not result.is_finite():
        raise ValidationError(code, field=field, value=str(value))

    column = AllocationRequest._meta.get_field(field)
    try:
        DecimalValidator(column.max_digits, column.decimal_places)(result.normalize())
    except DjangoValidationError:
        raise ValidationError(
            code,
            field=field,
            value=str(value),
            max_digits=column.max_digits,
            decimal_places=column.decimal_places,
        ) from None
    return result


def _to_deadline(value):
    """Aware datetime, ISO string or None."""
    if value is None or value == '':
        return None
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
    elif isinstance(value, datetime):
        parsed = value
    else:
        parsed = None
    if parsed is None:
        raise ValidationError('INVALID_DEADLINE', field='deadline', value=str(value))
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _transition(request: AllocationRequest, target: str, **changes) -> AllocationRequest:
    """Guard + conditional update; must run inside transaction.atomic()."""
    ensure_transition(request.status, target)
    if not AllocationRequest.objects.transition(request.pk, target, **changes):
        # Moved by someone else between our read and our write
        request.refresh_from_db(fields=['status'])
        raise InvalidStateError(
            'CONCURRENT_MODIFICATION',
            current=str(request.status),
            target=str(target),
        )
    request.refresh_from_db()
    return request


class AllocationRequests:
    """Request submission and lifecycle methods."""

    @classmethod
    def submit(cls, quantity, commodity: str, destination: str, *,
               variety: str = '', unit: str | None = None, deadline=None,
               price=None, notes: str = '', requester=None,
               warehouse=None) -> AllocationRequest:
        """
        Submit a new allocation request (status PENDING).

        Raises:
            ValidationError('MISSING_FIELD'): commodity or destination empty
            ValidationError('INVALID_QUANTITY'): quantity not a positive number
            ValidationError('INVALID_PRICE'): price given but negative/invalid
            ValidationError('INVALID_DEADLINE'): deadline not a datetime or ISO string
        """
        commodity = (commodity or '').strip()
        destination = (destination or '').strip()
        if not commodity:
            raise ValidationError('MISSING_FIELD', field='commodity')
        if not destination:
            raise ValidationError('MISSING_FIELD', field='destination')
        if quantity is None or quantity == '':
            raise ValidationError('MISSING_FIELD', field='quantity')

        quantity = _to_decimal(quantity, 'INVALID_QUANTITY', 'quantity')
        if quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', field='quantity', value=str(quantity))

        if price is not None and price != '':
            price = _to_decimal(price, 'INVALID_PRICE', 'price')
            if price < 0:
                raise ValidationError('INVALID_PRICE', field='price', value=str(price))
        else:
            price = None

        deadline = _to_deadline(deadline)

        with transaction.atomic():
            request = AllocationRequest.objects.create(
                code=generate_code(REQUEST_PREFIX),
                requester=requester,
                commodity=commodity,
                variety=(variety or '').strip(),
                quantity=quantity,
                unit=unit or allotment_settings.DEFAULT_UNIT,
                deadline=deadline,
                destination=destination,
                price=price,
                notes=notes or '',
                status=RequestStatus.PENDING,
                warehouse=warehouse,
            )
            logger.info(
                "allocation.submit",
                extra={
                    "request": request.code,
                    "commodity": commodity,
                    "qty": str(quantity),
                    "unit": request.unit,
                },
            )
            variety_label = f" ({request.variety})" if request.variety else ""
            notify_on_commit(
                'allocation.submitted',
                {
                    'request': request.code,
                    'text': (
                        f"New order request for {quantity}{request.unit} of "
                        f"{commodity}{variety_label} - {request.code}"
                    ),
                },
                warehouse=warehouse.code if warehouse else None,
            )
            return request

    @classmethod
    def start_review(cls, request_id) -> AllocationRequest:
        """
        Operator picks up a request.

        Transition: PENDING → REVIEWING

        Raises:
            NotFoundError('REQUEST_NOT_FOUND')
            InvalidStateError('INVALID_STATUS'): If status is not PENDING
        """
        with transaction.atomic():
            request = lookup(AllocationRequest, request_id, 'REQUEST_NOT_FOUND', lock=True)
            return _transition(request, RequestStatus.REVIEWING)

    @classmethod
    def reject(cls, request_id, reason: str | None = None) -> AllocationRequest:
        """
        Cancel a request, recording the reason in its notes.

        Transition: PENDING|REVIEWING → CANCELLED

        Raises:
            NotFoundError('REQUEST_NOT_FOUND')
            InvalidStateError('INVALID_STATUS'): If already allocated or closed
        """
        reason = (reason or '').strip()
        line = f"Rejected: {reason}" if reason else "Rejected by operator."

        with transaction.atomic():
            request = lookup(AllocationRequest, request_id, 'REQUEST_NOT_FOUND', lock=True)
            notes = f"{request.notes}\n{line}" if request.notes else line
            request = _transition(request, RequestStatus.CANCELLED, notes=notes)

            logger.info(
                "allocation.reject",
                extra={"request": request.code, "reason": reason},
            )
            notify_on_commit(
                'allocation.rejected',
                {'request': request.code, 'reason': reason},
                warehouse=request.warehouse.code if request.warehouse_id else None,
            )
            return request

    @classmethod
    def advance(cls, request_id, status: str) -> AllocationRequest:
        """
        Move an allocated request forward (dispatched, completed).

        Entry point for whatever propagates shipment progress back onto
        requests; Allotment never calls it on its own.

        Raises:
            ValidationError('INVALID_STATUS_VALUE'): Unknown status
            InvalidStateError('INVALID_STATUS'): Transition not allowed
        """
        if status not in ADVANCE_TARGETS:
            raise ValidationError('INVALID_STATUS_VALUE', field='status', value=str(status))
        target = RequestStatus(status)

        with transaction.atomic():
            request = lookup(AllocationRequest, request_id, 'REQUEST_NOT_FOUND', lock=True)
            request = _transition(request, target)
            logger.info(
                "allocation.advance",
                extra={"request": request.code, "status": str(target)},
            )
            return request
