from datetime import datetime, timezone
from enum import StrEnum
import secrets
import time
from typing import List, Optional

import attrs

from src.platform.config.business_config import BookingLimits, BookingReferenceFormat
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.domain.entity.seat_entity import is_valid_seat_id
from src.service.seat_booking.domain.seat_booking_errors import (
    AlreadyCancelledError,
    InvalidSeatCountError,
    InvalidSeatIdsError,
)


class BookingStatus(StrEnum):
    ACTIVE = 'active'
    CANCELLED = 'cancelled'


def generate_booking_reference(*, now_ms: Optional[int] = None) -> str:
    """TB + epoch millis + 4 random base-36 chars, e.g. TB1718000000000X7K2"""
    timestamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    suffix = ''.join(
        secrets.choice(BookingReferenceFormat.SUFFIX_ALPHABET)
        for _ in range(BookingReferenceFormat.SUFFIX_LENGTH)
    )
    return f'{BookingReferenceFormat.PREFIX}{timestamp}{suffix}'


def validate_seat_ids(seat_ids: List[int]) -> None:
    if not (
        BookingLimits.MIN_SEATS_PER_BOOKING
        <= len(seat_ids)
        <= BookingLimits.MAX_SEATS_PER_BOOKING
    ):
        raise InvalidSeatCountError()
    if not all(is_valid_seat_id(seat_id) for seat_id in seat_ids):
        raise InvalidSeatIdsError()
    if len(set(seat_ids)) != len(seat_ids):
        raise InvalidSeatIdsError('Duplicate seat IDs provided')


@attrs.define
class Booking:
    user_id: int
    reference: str
    seat_ids: List[int] = attrs.field(factory=list)
    status: BookingStatus = BookingStatus.ACTIVE
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def seat_numbers(self) -> List[int]:
        # Seat number equals seat id, kept in booking order
        return list(self.seat_ids)

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    @classmethod
    @Logger.io
    def create(cls, *, user_id: int, seat_ids: List[int]) -> 'Booking':
        validate_seat_ids(seat_ids)

        now = datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            reference=generate_booking_reference(),
            seat_ids=list(seat_ids),
            status=BookingStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def cancel(self) -> 'Booking':
        if self.status != BookingStatus.ACTIVE:
            raise AlreadyCancelledError()

        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )
