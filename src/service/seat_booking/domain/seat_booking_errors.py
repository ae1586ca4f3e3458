"""Seat booking failures. Each maps to a 4xx response through CustomBaseError."""

from typing import Any, Iterable

from src.platform.config.business_config import BookingLimits
from src.platform.exception.exceptions import DomainError, NotFoundError


class InvalidSeatCountError(DomainError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or (
                f'Must select between {BookingLimits.MIN_SEATS_PER_BOOKING} '
                f'and {BookingLimits.MAX_SEATS_PER_BOOKING} seats'
            )
        )


class InsufficientAvailabilityError(DomainError):
    def __init__(self, *, available_count: int, requested_count: int) -> None:
        self.available_count = available_count
        self.requested_count = requested_count
        super().__init__(
            f'Only {available_count} seats available, {requested_count} requested'
        )

    def to_payload(self) -> dict[str, Any]:
        return {'error': self.message, 'availableCount': self.available_count}


class InvalidSeatIdsError(DomainError):
    def __init__(self, message: str = 'Invalid seat IDs provided') -> None:
        super().__init__(message)


class SeatsUnavailableError(DomainError):
    """Lost a race or booked from a stale seat map"""

    def __init__(self, *, unavailable_seats: Iterable[int]) -> None:
        self.unavailable_seats = sorted(unavailable_seats)
        super().__init__('Some seats are not available')

    def to_payload(self) -> dict[str, Any]:
        return {'error': self.message, 'unavailableSeats': self.unavailable_seats}


class BookingNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__('Booking not found')


class AlreadyCancelledError(DomainError):
    def __init__(self) -> None:
        super().__init__('Booking is already cancelled')
