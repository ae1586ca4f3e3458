"""Business logic configuration and constants."""

from typing import Final


class SeatLayout:
    """Fixed coach layout: 80 seats, 7 per row, last row holds the remainder."""

    TOTAL_SEATS: Final[int] = 80
    SEATS_PER_ROW: Final[int] = 7
    MIN_SEAT_ID: Final[int] = 1
    MAX_SEAT_ID: Final[int] = TOTAL_SEATS


class BookingLimits:
    """Booking-related business limits."""

    MAX_SEATS_PER_BOOKING: Final[int] = 7
    MIN_SEATS_PER_BOOKING: Final[int] = 1


class BookingReferenceFormat:
    """Constants for booking reference codes, e.g. TB1718000000000X7K2."""

    PREFIX: Final[str] = 'TB'
    SUFFIX_LENGTH: Final[int] = 4
    SUFFIX_ALPHABET: Final[str] = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'
