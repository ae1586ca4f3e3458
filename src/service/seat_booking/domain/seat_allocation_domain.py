"""
Seat Allocation Domain

Pure seat picking logic. No store access and no logging: the result is
a proposal the booking transaction re-validates.

Policy:
1. Same row first: among rows that can fit the whole party, take the row
   with the most free seats (lowest row number on ties), seats in position order.
2. Nearest seats otherwise: the first free seats in (row, position) order.
"""

from collections.abc import Collection, Iterable
from itertools import groupby
from typing import List

from src.platform.config.business_config import BookingLimits
from src.service.seat_booking.domain.entity.seat_entity import Seat
from src.service.seat_booking.domain.seat_booking_errors import (
    InsufficientAvailabilityError,
    InvalidSeatCountError,
)


def _seat_order(seat: Seat) -> tuple[int, int]:
    return seat.row_number, seat.seat_position


def select_seats(
    seats: Iterable[Seat], count: int, already_selected: Collection[int] = ()
) -> List[int]:
    """
    Pick `count` seat ids from the available seats.

    Raises:
        InvalidSeatCountError: count outside 1..7, checked before anything else
        InsufficientAvailabilityError: fewer free seats than requested
    """
    if (
        isinstance(count, bool)
        or not isinstance(count, int)
        or not BookingLimits.MIN_SEATS_PER_BOOKING <= count <= BookingLimits.MAX_SEATS_PER_BOOKING
    ):
        raise InvalidSeatCountError()

    excluded = set(already_selected)
    candidates = sorted(
        (seat for seat in seats if seat.is_available and seat.id not in excluded),
        key=_seat_order,
    )
    if len(candidates) < count:
        raise InsufficientAvailabilityError(
            available_count=len(candidates), requested_count=count
        )

    best_row: List[Seat] = []
    for _, row_seats in groupby(candidates, key=lambda seat: seat.row_number):
        row = list(row_seats)
        # Strictly greater keeps the lowest row on ties
        if len(row) >= count and len(row) > len(best_row):
            best_row = row

    chosen = best_row[:count] if best_row else candidates[:count]
    return [seat.id for seat in chosen]
