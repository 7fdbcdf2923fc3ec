"""Tests for notification dispatch.

**Feature: price-alerts**
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from vboxtrade.alerts.dispatcher import (
    SYSTEM_TITLE,
    TOAST_TITLE,
    NotificationDispatcher,
    format_message,
)
from vboxtrade.models import Alert, AlertDirection
from vboxtrade.notifications.base import NotificationPermission, SystemNotifier, Toaster


def make_alert(direction: AlertDirection = AlertDirection.BELOW, target: float = 18.0) -> Alert:
    return Alert(
        id="abc123",
        instrument_id="2",
        instrument_label="Onion (Red Onion)",
        target_price=target,
        direction=direction,
        created_at=datetime(2024, 3, 1, 10, 30),
    )


@pytest.fixture
def toaster():
    return MagicMock(spec=Toaster)


@pytest.fixture
def system():
    notifier = MagicMock(spec=SystemNotifier)
    notifier.query_permission.return_value = NotificationPermission.GRANTED
    return notifier


class TestMessageFormat:
    """Alert messages name the instrument, the price and the crossing."""

    def test_below_message(self):
        message = format_message(make_alert(AlertDirection.BELOW, 18.0), 17.5)
        assert message == "Onion (Red Onion) is now ₹17.50 – crossed below ₹18.00"

    def test_above_message(self):
        message = format_message(make_alert(AlertDirection.ABOVE, 70.0), 71.234)
        assert message == "Onion (Red Onion) is now ₹71.23 – rose above ₹70.00"


class TestChannelDelivery:
    """
    **Feature: price-alerts, Property 9: Independent Channels**

    *For any* combination of channel failures and permission states, the
    toast is always attempted, the OS notification only with permission,
    and dispatch never raises.
    """

    def test_both_channels_when_granted(self, toaster, system):
        alert = make_alert()
        NotificationDispatcher(toaster, system).dispatch(alert, 17.5)

        message = format_message(alert, 17.5)
        toaster.show.assert_called_once_with(TOAST_TITLE, message)
        system.show.assert_called_once_with(SYSTEM_TITLE, message, "price-alert-abc123")

    @pytest.mark.parametrize(
        "permission",
        [NotificationPermission.DENIED, NotificationPermission.UNDETERMINED],
    )
    def test_os_channel_needs_permission(self, toaster, system, permission):
        system.query_permission.return_value = permission

        NotificationDispatcher(toaster, system).dispatch(make_alert(), 17.5)

        toaster.show.assert_called_once()
        system.show.assert_not_called()

    def test_dispatch_does_not_request_permission(self, toaster, system):
        system.query_permission.return_value = NotificationPermission.UNDETERMINED

        NotificationDispatcher(toaster, system).dispatch(make_alert(), 17.5)

        system.request_permission.assert_not_called()

    def test_without_os_channel(self, toaster):
        NotificationDispatcher(toaster, None).dispatch(make_alert(), 17.5)

        toaster.show.assert_called_once()

    def test_toast_failure_does_not_block_os(self, toaster, system):
        toaster.show.side_effect = RuntimeError("no display")

        NotificationDispatcher(toaster, system).dispatch(make_alert(), 17.5)

        system.show.assert_called_once()

    def test_os_failure_does_not_block_toast(self, toaster, system):
        system.show.side_effect = OSError("notify-send crashed")

        NotificationDispatcher(toaster, system).dispatch(make_alert(), 17.5)

        toaster.show.assert_called_once()

    def test_permission_query_failure_is_swallowed(self, toaster, system):
        system.query_permission.side_effect = RuntimeError("no bus")

        NotificationDispatcher(toaster, system).dispatch(make_alert(), 17.5)

        toaster.show.assert_called_once()
        system.show.assert_not_called()

    @given(
        toast_fails=st.booleans(),
        os_fails=st.booleans(),
        permission=st.sampled_from(list(NotificationPermission)),
    )
    @settings(max_examples=30)
    def test_dispatch_never_raises(
        self, toast_fails: bool, os_fails: bool, permission: NotificationPermission
    ):
        toaster = MagicMock(spec=Toaster)
        system = MagicMock(spec=SystemNotifier)
        system.query_permission.return_value = permission
        if toast_fails:
            toaster.show.side_effect = RuntimeError("toast")
        if os_fails:
            system.show.side_effect = RuntimeError("os")

        NotificationDispatcher(toaster, system).dispatch(make_alert(), 17.5)

        toaster.show.assert_called_once()
        assert system.show.called == (permission == NotificationPermission.GRANTED)


class TestPermissionRequest:
    """Permission is only requested while the host is undecided."""

    def test_requests_when_undetermined(self, toaster, system):
        system.query_permission.return_value = NotificationPermission.UNDETERMINED
        system.request_permission.return_value = NotificationPermission.GRANTED

        NotificationDispatcher(toaster, system).request_permission_if_undetermined()

        system.request_permission.assert_called_once()

    @pytest.mark.parametrize(
        "permission",
        [NotificationPermission.GRANTED, NotificationPermission.DENIED],
    )
    def test_skips_when_decided(self, toaster, system, permission):
        system.query_permission.return_value = permission

        NotificationDispatcher(toaster, system).request_permission_if_undetermined()

        system.request_permission.assert_not_called()

    def test_request_failure_is_swallowed(self, toaster, system):
        system.query_permission.return_value = NotificationPermission.UNDETERMINED
        system.request_permission.side_effect = RuntimeError("prompt failed")

        NotificationDispatcher(toaster, system).request_permission_if_undetermined()

    def test_no_os_channel(self, toaster):
        NotificationDispatcher(toaster, None).request_permission_if_undetermined()
