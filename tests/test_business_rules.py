import pytest

from homehelp.modules.bookings.business_rules import (
    Actor,
    InvalidStatusError,
    InvalidTransitionError,
    TERMINAL_STATUSES,
    TRANSITIONS,
    TransitionForbiddenError,
    allowed_next_statuses,
    check_transition,
    parse_status,
)
from homehelp.shared.models import BookingStatus

CUSTOMER = Actor(is_customer=True)
PROVIDER = Actor(is_provider=True)
ADMIN = Actor(is_admin=True)
STRANGER = Actor()


@pytest.mark.parametrize(
    "current, target, actor",
    [
        ("requested", "accepted", PROVIDER),
        ("requested", "rejected", PROVIDER),
        ("requested", "cancelled", CUSTOMER),
        ("accepted", "completed", PROVIDER),
        ("accepted", "cancelled", CUSTOMER),
        ("completed", "approved", CUSTOMER),
    ],
)
def test_allowed_transitions(current, target, actor):
    assert check_transition(current, target, actor) == BookingStatus(target)


@pytest.mark.parametrize(
    "current, target, actor",
    [
        ("requested", "accepted", CUSTOMER),
        ("requested", "cancelled", PROVIDER),
        ("accepted", "completed", CUSTOMER),
        ("completed", "approved", PROVIDER),
        ("requested", "accepted", STRANGER),
    ],
)
def test_wrong_party(current, target, actor):
    with pytest.raises(TransitionForbiddenError):
        check_transition(current, target, actor)


def test_admin_can_do_every_listed_transition():
    for (current, target) in TRANSITIONS:
        assert check_transition(current.value, target.value, ADMIN) == target


def test_admin_cannot_skip_steps():
    with pytest.raises(InvalidTransitionError):
        check_transition("requested", "approved", ADMIN)


@pytest.mark.parametrize("terminal", sorted(s.value for s in TERMINAL_STATUSES))
def test_terminal_statuses_have_no_way_out(terminal):
    assert allowed_next_statuses(BookingStatus(terminal)) == []
    with pytest.raises(InvalidTransitionError):
        check_transition(terminal, "requested", ADMIN)


def test_transition_message_names_both_statuses():
    with pytest.raises(InvalidTransitionError, match="Cannot change booking from completed to accepted"):
        check_transition("completed", "accepted", PROVIDER)


def test_parse_status():
    assert parse_status("approved") is BookingStatus.approved
    with pytest.raises(InvalidStatusError, match="Invalid status"):
        parse_status("APPROVED")


def test_allowed_next_statuses_from_requested():
    assert set(allowed_next_statuses(BookingStatus.requested)) == {
        BookingStatus.accepted,
        BookingStatus.rejected,
        BookingStatus.cancelled,
    }
