"""
Tests for best-effort notifications and the sink loader.
"""

import logging
from decimal import Decimal

import pytest
from django.core.exceptions import ImproperlyConfigured

from allotment import allocation
from allotment.adapters import (
    NoopNotificationSink,
    RecordingNotificationSink,
    get_notification_sink,
    reset_notification_sink,
)
from allotment.exceptions import InsufficientInventoryError
from allotment.models import RequestStatus
from allotment.protocols import Notification, NotificationSink
from allotment.services.notifications import notify


class ExplodingSink:
    """Sink whose backend is always down."""

    def publish(self, notification):
        raise ConnectionError('alert service unreachable')


@pytest.fixture
def exploding_sink(settings):
    settings.ALLOTMENT = {
        'NOTIFICATION_SINK': 'allotment.tests.test_notifications.ExplodingSink',
    }
    reset_notification_sink()


class TestLoader:
    """Tests for get_notification_sink()."""

    def test_default_is_noop(self):
        sink = get_notification_sink()

        assert isinstance(sink, NoopNotificationSink)
        assert isinstance(sink, NotificationSink)

    def test_cached(self, recording_sink):
        assert get_notification_sink() is recording_sink

    def test_bad_path(self, settings):
        settings.ALLOTMENT = {'NOTIFICATION_SINK': 'allotment.adapters.nowhere.Sink'}

        with pytest.raises(ImproperlyConfigured):
            get_notification_sink()

    def test_empty_path(self, settings):
        settings.ALLOTMENT = {'NOTIFICATION_SINK': ''}

        with pytest.raises(ImproperlyConfigured):
            get_notification_sink()


class TestNotify:
    """Tests for notify()."""

    def test_notify_publishes(self, recording_sink):
        assert notify('allocation.approved', {'request': 'AR-1'}, warehouse='nashik-cold')

        assert recording_sink.published == [
            Notification('allocation.approved', {'request': 'AR-1'}, 'nashik-cold'),
        ]

    def test_notify_failure_is_logged(self, exploding_sink, caplog):
        caplog.set_level(logging.WARNING, logger='allotment')

        assert notify('allocation.approved') is False

        record = next(r for r in caplog.records if r.getMessage() == 'allocation.notify.failed')
        assert record.levelno == logging.WARNING
        assert record.code == 'NOTIFICATION_FAILED'
        assert 'unreachable' in record.cause


@pytest.mark.django_db
class TestServiceNotifications:
    """Notifications emitted by the allocation service."""

    def test_submit_notifies_after_commit(self, recording_sink, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            request = allocation.submit(Decimal('200'), 'Rice', 'Central Depot', variety='Sona Masoori')

        (notification,) = recording_sink.published
        assert notification.event == 'allocation.submitted'
        assert notification.payload['request'] == request.code
        assert 'Sona Masoori' in notification.payload['text']

    def test_nothing_sent_before_commit(self, recording_sink, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            allocation.submit(Decimal('200'), 'Rice', 'Central Depot')

        assert len(callbacks) == 1
        assert recording_sink.published == []

    def test_approve_notifies(self, recording_sink, rice_batch, rice_request,
                              django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            result = allocation.approve(rice_request.pk, rice_batch.pk)

        (notification,) = recording_sink.published
        assert notification.event == 'allocation.approved'
        assert notification.warehouse == 'nashik-cold'
        assert notification.payload['dispatch'] == result.dispatch.code

    def test_reject_notifies(self, recording_sink, rice_request, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            allocation.reject(rice_request.pk, 'no stock available')

        (notification,) = recording_sink.published
        assert notification.event == 'allocation.rejected'
        assert notification.payload['reason'] == 'no stock available'

    def test_failed_approve_sends_nothing(self, recording_sink, make_batch, make_request,
                                          django_capture_on_commit_callbacks):
        batch = make_batch(quantity='500')
        request = make_request(quantity='800')

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(InsufficientInventoryError):
                allocation.approve(request.pk, batch.pk)

        assert recording_sink.published == []

    def test_sink_failure_keeps_approval(self, exploding_sink, rice_batch, rice_request, caplog,
                                         django_capture_on_commit_callbacks):
        """A dead alert backend never undoes a committed allocation."""
        caplog.set_level(logging.WARNING, logger='allotment')

        with django_capture_on_commit_callbacks(execute=True):
            allocation.approve(rice_request.pk, rice_batch.pk)

        rice_batch.refresh_from_db()
        rice_request.refresh_from_db()
        assert rice_batch.remaining_quantity == Decimal('0')
        assert rice_request.status == RequestStatus.ALLOCATED
        assert any(r.getMessage() == 'allocation.notify.failed' for r in caplog.records)


def test_recording_sink_satisfies_protocol():
    assert isinstance(RecordingNotificationSink(), NotificationSink)
