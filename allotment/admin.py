"""
Allotment Admin — operator views for production debugging.

- Warehouse: list + edit
- InventoryBatch: quantity and status read-only (they only change via approve)
- AllocationRequest: read-only with "reject" action
- Dispatch: read-only with "mark in transit" / "mark delivered" actions

Actions go through the allocation service, never through direct saves.
"""

import logging

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from allotment.exceptions import AllocationError
from allotment.models import (
    AllocationRequest,
    Dispatch,
    DispatchStatus,
    InventoryBatch,
    RequestStatus,
    Warehouse,
)

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """Rows are written by the allocation service only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# WAREHOUSE ADMIN
# =========================================================================

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    """Warehouse admin — editable."""

    list_display = ['code', 'name', 'location', 'is_active']
    list_filter = ['is_active']
    search_fields = ['code', 'name', 'location']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# BATCH ADMIN
# =========================================================================

@admin.register(InventoryBatch)
class InventoryBatchAdmin(admin.ModelAdmin):
    """Batch admin — intake fields editable, quantity/status read-only."""

    list_display = ['code', 'commodity', 'variety', 'remaining_quantity', 'unit',
                    'risk_score', 'risk_tier_display', 'warehouse', 'zone', 'status']
    list_filter = ['status', 'warehouse', 'commodity']
    search_fields = ['code', 'commodity', 'variety']
    readonly_fields = ['remaining_quantity', 'status', 'dispatch_date',
                       'created_at', 'updated_at']
    date_hierarchy = 'intake_date'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Risk tier'))
    def risk_tier_display(self, obj):
        return obj.risk_tier.label


# =========================================================================
# ALLOCATION REQUEST ADMIN (read-only with reject action)
# =========================================================================

@admin.register(AllocationRequest)
class AllocationRequestAdmin(ReadOnlyAdmin):
    """AllocationRequest admin — read-only with reject action."""

    list_display = ['code', 'commodity', 'quantity', 'unit', 'destination',
                    'deadline', 'status', 'requester', 'created_at']
    list_filter = ['status', 'warehouse']
    search_fields = ['code', 'commodity', 'destination']
    readonly_fields = ['code', 'requester', 'commodity', 'variety', 'quantity', 'unit',
                       'deadline', 'destination', 'price', 'notes', 'status',
                       'warehouse', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    actions = ['reject_requests']

    @admin.action(description=_('Reject selected requests'))
    def reject_requests(self, request, queryset):
        from allotment import allocation

        count = 0
        for obj in queryset.filter(status__in=[RequestStatus.PENDING, RequestStatus.REVIEWING]):
            try:
                allocation.reject(obj.pk, reason='Rejected via admin')
                count += 1
            except AllocationError as exc:
                logger.warning("reject_requests: failed to reject %s: %s", obj.code, exc)

        self.message_user(request, _('{count} request(s) rejected.').format(count=count))


# =========================================================================
# DISPATCH ADMIN (read-only with status actions)
# =========================================================================

@admin.register(Dispatch)
class DispatchAdmin(ReadOnlyAdmin):
    """Dispatch admin — read-only with status actions."""

    list_display = ['code', 'batch', 'request', 'destination', 'quantity', 'unit',
                    'status', 'dispatched_at', 'estimated_delivery']
    list_filter = ['status', 'dispatched_at']
    search_fields = ['code', 'destination', 'batch__code', 'request__code']
    readonly_fields = ['code', 'batch', 'request', 'destination', 'quantity', 'unit',
                       'status', 'dispatched_at', 'estimated_delivery',
                       'updated_by', 'updated_at']
    date_hierarchy = 'dispatched_at'
    actions = ['mark_in_transit', 'mark_delivered']

    def _update_status(self, request, queryset, new_status):
        from allotment import allocation

        count = 0
        for obj in queryset:
            try:
                allocation.update_dispatch_status(obj.pk, new_status, user=request.user)
                count += 1
            except AllocationError as exc:
                logger.warning("dispatch admin: %s → %s failed: %s", obj.code, new_status, exc)

        level = messages.SUCCESS if count else messages.WARNING
        self.message_user(
            request,
            _('{count} dispatch(es) updated.').format(count=count),
            level=level,
        )

    @admin.action(description=_('Mark selected as in transit'))
    def mark_in_transit(self, request, queryset):
        self._update_status(request, queryset, DispatchStatus.IN_TRANSIT)

    @admin.action(description=_('Mark selected as delivered'))
    def mark_delivered(self, request, queryset):
        self._update_status(request, queryset, DispatchStatus.DELIVERED)
