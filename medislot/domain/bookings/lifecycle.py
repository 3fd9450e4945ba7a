"""
Booking lifecycle.

OPEN (checked=false) -> CHECKED (checked=true). CHECKED is terminal.
A doctor dismissing an open booking is a view-only action and never
reaches this module.
"""

from enum import Enum

from ...shared.errors import InvalidTransitionError


class BookingState(str, Enum):
    OPEN = "open"
    CHECKED = "checked"


def state_of(checked: bool) -> BookingState:
    return BookingState.CHECKED if checked else BookingState.OPEN


def next_state(current: BookingState, checked: bool) -> BookingState:
    """
    Resolve a check-in request against the current state.

    Re-checking a checked booking and un-checking an open one are no-ops;
    reopening a checked booking is rejected.
    """
    requested = state_of(checked)
    if current == BookingState.CHECKED and requested == BookingState.OPEN:
        raise InvalidTransitionError("Checked bookings cannot be reopened")
    return requested
