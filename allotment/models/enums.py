"""
Enums for Allotment models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class RequestStatus(models.TextChoices):
    """AllocationRequest lifecycle status."""
    PENDING = 'pending', _('Pending')            # Submitted by requester
    REVIEWING = 'reviewing', _('Reviewing')      # Operator is looking at it
    ALLOCATED = 'allocated', _('Allocated')      # Inventory deducted, dispatch created
    DISPATCHED = 'dispatched', _('Dispatched')   # Shipment left the warehouse
    COMPLETED = 'completed', _('Completed')      # Delivered
    CANCELLED = 'cancelled', _('Cancelled')      # Rejected


class BatchStatus(models.TextChoices):
    """InventoryBatch status."""
    ACTIVE = 'active', _('Active')
    DISPATCHED = 'dispatched', _('Dispatched')   # Fully allocated
    EXPIRED = 'expired', _('Expired')


class DispatchStatus(models.TextChoices):
    """Dispatch (shipment) status."""
    PENDING = 'pending', _('Pending')
    IN_TRANSIT = 'in-transit', _('In transit')
    DELIVERED = 'delivered', _('Delivered')
    CANCELLED = 'cancelled', _('Cancelled')


class DemandTier(models.TextChoices):
    """
    Coarse freshness tier.

    Used both for what a buyer needs (inferred from destination/notes) and
    for what a batch offers (derived from its risk score).
    """
    FRESH = 'fresh', _('Fresh')          # Retail, supermarkets, export
    MODERATE = 'moderate', _('Moderate') # Hotels, restaurants, wholesale
    HIGH = 'high', _('High')             # Processing plants, industry
    UNKNOWN = 'unknown', _('Unknown')
