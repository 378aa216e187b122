"""
Pytest fixtures for Allotment tests.
"""

import itertools
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from allotment import allocation
from allotment.adapters import get_notification_sink, reset_notification_sink
from allotment.models import InventoryBatch, Warehouse


User = get_user_model()


@pytest.fixture(autouse=True)
def fresh_sink():
    """Drop the cached notification sink around every test."""
    reset_notification_sink()
    yield
    reset_notification_sink()


@pytest.fixture
def recording_sink(settings):
    """Swap in a sink that keeps published notifications in memory."""
    settings.ALLOTMENT = {
        'NOTIFICATION_SINK': 'allotment.adapters.noop.RecordingNotificationSink',
    }
    reset_notification_sink()
    return get_notification_sink()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='operator',
        password='testpass123'
    )


@pytest.fixture
def buyer(db):
    """Create a requester."""
    return User.objects.create_user(
        username='buyer',
        password='testpass123'
    )


@pytest.fixture
def warehouse(db):
    """Main cold store."""
    return Warehouse.objects.create(
        code='nashik-cold',
        name='Nashik Cold Store',
        location='Nashik, MH',
    )


@pytest.fixture
def other_warehouse(db):
    """Second warehouse, for scoping tests."""
    return Warehouse.objects.create(
        code='pune-dry',
        name='Pune Dry Store',
        location='Pune, MH',
    )


@pytest.fixture
def make_batch(db, warehouse):
    """Factory for inventory batches (1000 kg of Rice unless told otherwise)."""
    counter = itertools.count(1)

    def _make(quantity='1000', commodity='Rice', risk_score=35, **kwargs):
        kwargs.setdefault('warehouse', warehouse)
        kwargs.setdefault('shelf_life_days', 180)
        return InventoryBatch.objects.create(
            code=f'LOT-{next(counter):04d}',
            commodity=commodity,
            remaining_quantity=Decimal(str(quantity)),
            risk_score=risk_score,
            **kwargs
        )

    return _make


@pytest.fixture
def rice_batch(make_batch):
    """1000 kg of Rice, moderate risk."""
    return make_batch()


@pytest.fixture
def make_request(db, buyer):
    """Factory for allocation requests submitted through the service."""

    def _make(quantity='1000', commodity='Rice', destination='Central Depot', **kwargs):
        kwargs.setdefault('requester', buyer)
        return allocation.submit(Decimal(str(quantity)), commodity, destination, **kwargs)

    return _make


@pytest.fixture
def rice_request(make_request):
    """Pending request for 1000 kg of Rice."""
    return make_request()


@pytest.fixture
def today():
    """Return today's date."""
    return date.today()


@pytest.fixture
def last_week(today):
    """Return the date a week ago."""
    return today - timedelta(days=7)
