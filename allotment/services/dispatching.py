"""
Dispatch tracking — explicit shipment status updates.
"""

import logging

from django.db import transaction

from allotment.exceptions import InvalidStateError, ValidationError
from allotment.lifecycle import DISPATCH_TRANSITIONS, ensure_transition
from allotment.models.dispatch import Dispatch
from allotment.models.enums import DispatchStatus
from allotment.services.queries import lookup

logger = logging.getLogger('allotment')


class Dispatching:
    """Dispatch status methods."""

    @classmethod
    def update_dispatch_status(cls, dispatch_id, new_status: str, user=None) -> Dispatch:
        """
        Change a dispatch's status on an operator's say-so.

        Transitions: PENDING → IN_TRANSIT|DELIVERED|CANCELLED,
                     IN_TRANSIT → DELIVERED|CANCELLED

        The linked allocation request is not touched; propagating shipment
        progress onto requests is the caller's business (see advance()).

        Raises:
            ValidationError('INVALID_STATUS_VALUE'): Not a DispatchStatus
            NotFoundError('DISPATCH_NOT_FOUND')
            InvalidStateError('INVALID_STATUS'): Transition not allowed
        """
        if new_status not in DispatchStatus.values:
            raise ValidationError(
                'INVALID_STATUS_VALUE',
                field='status',
                value=str(new_status),
                expected=list(DispatchStatus.values),
            )
        target = DispatchStatus(new_status)

        with transaction.atomic():
            dispatch = lookup(Dispatch, dispatch_id, 'DISPATCH_NOT_FOUND', lock=True)
            previous = dispatch.status
            ensure_transition(previous, target, DISPATCH_TRANSITIONS)

            if not Dispatch.objects.transition(dispatch.pk, target, updated_by=user):
                dispatch.refresh_from_db(fields=['status'])
                raise InvalidStateError(
                    'CONCURRENT_MODIFICATION',
                    current=str(dispatch.status),
                    target=str(target),
                )
            dispatch.refresh_from_db()

            logger.info(
                "dispatch.status",
                extra={
                    "dispatch": dispatch.code,
                    "from": str(previous),
                    "to": str(target),
                    "user": getattr(user, 'pk', None),
                },
            )
            return dispatch
