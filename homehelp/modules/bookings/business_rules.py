"""
Booking status lifecycle.

The transition table below is the single source of truth for who may move
a booking from one status to another. Routers ask ``check_transition`` and
translate its errors into HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from homehelp.shared.models.booking_models import BookingStatus


class InvalidStatusError(ValueError):
    """The requested status does not exist."""


class InvalidTransitionError(ValueError):
    """The status exists but cannot follow the current one."""


class TransitionForbiddenError(PermissionError):
    """The caller is not the party allowed to perform the transition."""


CUSTOMER = "customer"
PROVIDER = "provider"


@dataclass(frozen=True)
class Actor:
    """Who is acting on a booking, relative to that booking."""
    is_admin: bool = False
    is_customer: bool = False
    is_provider: bool = False


# (from, to) -> party allowed to perform it; admins may perform any of them
TRANSITIONS: Dict[Tuple[BookingStatus, BookingStatus], str] = {
    (BookingStatus.requested, BookingStatus.accepted): PROVIDER,
    (BookingStatus.requested, BookingStatus.rejected): PROVIDER,
    (BookingStatus.requested, BookingStatus.cancelled): CUSTOMER,
    (BookingStatus.accepted, BookingStatus.completed): PROVIDER,
    (BookingStatus.accepted, BookingStatus.cancelled): CUSTOMER,
    (BookingStatus.completed, BookingStatus.approved): CUSTOMER,
}

TERMINAL_STATUSES: FrozenSet[BookingStatus] = frozenset(
    {BookingStatus.approved, BookingStatus.rejected, BookingStatus.cancelled}
)


def parse_status(value: str) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError:
        raise InvalidStatusError("Invalid status") from None


def allowed_next_statuses(current: BookingStatus) -> list[BookingStatus]:
    return [to for (frm, to) in TRANSITIONS if frm == current]


def check_transition(current: str, target: str, actor: Actor) -> BookingStatus:
    """
    Validate moving a booking from ``current`` to ``target`` for ``actor``.

    Returns the parsed target status. Raises ``InvalidStatusError``,
    ``InvalidTransitionError`` or ``TransitionForbiddenError``.
    """
    target_status = parse_status(target)
    current_status = BookingStatus(current)

    party: Optional[str] = TRANSITIONS.get((current_status, target_status))
    if party is None:
        raise InvalidTransitionError(
            f"Cannot change booking from {current_status.value} to {target_status.value}"
        )

    if actor.is_admin:
        return target_status
    if party == CUSTOMER and actor.is_customer:
        return target_status
    if party == PROVIDER and actor.is_provider:
        return target_status

    raise TransitionForbiddenError("Forbidden")
