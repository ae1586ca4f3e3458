import math

import attrs

from src.platform.config.business_config import SeatLayout


def row_of(seat_id: int) -> int:
    return math.ceil(seat_id / SeatLayout.SEATS_PER_ROW)


def position_of(seat_id: int) -> int:
    return (seat_id - 1) % SeatLayout.SEATS_PER_ROW + 1


def is_valid_seat_id(seat_id: int) -> bool:
    # bool is an int subclass, True must not pass as seat 1
    return (
        isinstance(seat_id, int)
        and not isinstance(seat_id, bool)
        and SeatLayout.MIN_SEAT_ID <= seat_id <= SeatLayout.MAX_SEAT_ID
    )


@attrs.define
class Seat:
    """
    One physical seat. Layout is fixed, only is_available changes.

    Seat number equals the id, row and position are derived from it.
    """

    id: int
    row_number: int
    seat_position: int
    is_available: bool = True

    @property
    def seat_number(self) -> int:
        return self.id

    @classmethod
    def from_id(cls, seat_id: int, *, is_available: bool = True) -> 'Seat':
        return cls(
            id=seat_id,
            row_number=row_of(seat_id),
            seat_position=position_of(seat_id),
            is_available=is_available,
        )

    @classmethod
    def full_layout(cls) -> list['Seat']:
        """All seats of the coach, available, ordered by id"""
        return [
            cls.from_id(seat_id)
            for seat_id in range(SeatLayout.MIN_SEAT_ID, SeatLayout.MAX_SEAT_ID + 1)
        ]
