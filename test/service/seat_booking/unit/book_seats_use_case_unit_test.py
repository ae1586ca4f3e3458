"""
Unit tests for BookSeatsUseCase

Test Focus:
1. Happy path: lock, re-check, insert, claim, commit
2. Stale view: seats already taken are reported, nothing is written
3. Lost race: claim flips fewer seats than requested, transaction rolls back
4. Fail fast: invalid ids never reach the store
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import attrs
import pytest
from sqlalchemy.exc import OperationalError

from src.platform.exception.exceptions import StoreUnavailableError
from src.service.seat_booking.app.command.book_seats_use_case import BookSeatsUseCase
from src.service.seat_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.seat_booking.domain.entity.seat_entity import Seat
from src.service.seat_booking.domain.seat_booking_errors import (
    InvalidSeatCountError,
    InvalidSeatIdsError,
    SeatsUnavailableError,
)
from test.service.seat_booking.unit.fake_unit_of_work import FakeUnitOfWork


def _persisted(booking: Booking) -> Booking:
    return attrs.evolve(booking, id=1, created_at=datetime.now(timezone.utc))


@pytest.mark.unit
class TestBookSeats:
    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        uow.booking_command_repo.create = AsyncMock(
            side_effect=lambda *, booking: _persisted(booking)
        )
        return uow

    @pytest.mark.asyncio
    async def test_successfully_book_available_seats(self, uow: FakeUnitOfWork) -> None:
        """
        Given: Seats 15 and 16 are available
        When: User 2 books them
        Then: Booking is active, seats are claimed, transaction committed
        """
        # Arrange
        uow.seat_command_repo.lock_seats = AsyncMock(
            return_value=[Seat.from_id(15), Seat.from_id(16)]
        )
        uow.seat_command_repo.claim_seats = AsyncMock(return_value=[15, 16])
        use_case = BookSeatsUseCase(uow=uow)

        # Act
        booking = await use_case.book(seat_ids=[16, 15], user_id=2)

        # Assert
        assert booking.id == 1
        assert booking.user_id == 2
        assert booking.status == BookingStatus.ACTIVE
        assert booking.seat_ids == [16, 15]
        assert booking.reference.startswith('TB')
        uow.seat_command_repo.lock_seats.assert_awaited_once_with(seat_ids=[16, 15])
        uow.seat_command_repo.claim_seats.assert_awaited_once_with(seat_ids=[16, 15])
        assert uow.committed

    @pytest.mark.asyncio
    async def test_fail_when_seats_already_taken(self, uow: FakeUnitOfWork) -> None:
        """
        Given: Seat 16 was booked after the client loaded the seat map
        When: Booking seats 15, 16
        Then: SeatsUnavailableError names seat 16, nothing written
        """
        uow.seat_command_repo.lock_seats = AsyncMock(
            return_value=[Seat.from_id(15), Seat.from_id(16, is_available=False)]
        )
        use_case = BookSeatsUseCase(uow=uow)

        with pytest.raises(SeatsUnavailableError) as exc_info:
            await use_case.book(seat_ids=[15, 16], user_id=2)

        assert exc_info.value.unavailable_seats == [16]
        assert exc_info.value.to_payload() == {
            'error': 'Some seats are not available',
            'unavailableSeats': [16],
        }
        uow.booking_command_repo.create.assert_not_awaited()
        uow.seat_command_repo.claim_seats.assert_not_awaited()
        assert not uow.committed
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_fail_when_claim_loses_race(self, uow: FakeUnitOfWork) -> None:
        """
        Given: Both seats looked free, another booking flipped seat 20 first
        When: Claim returns only seat 19
        Then: SeatsUnavailableError for seat 20, transaction rolled back
        """
        uow.seat_command_repo.lock_seats = AsyncMock(
            return_value=[Seat.from_id(19), Seat.from_id(20)]
        )
        uow.seat_command_repo.claim_seats = AsyncMock(return_value=[19])
        use_case = BookSeatsUseCase(uow=uow)

        with pytest.raises(SeatsUnavailableError) as exc_info:
            await use_case.book(seat_ids=[19, 20], user_id=2)

        assert exc_info.value.unavailable_seats == [20]
        assert not uow.committed
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_fail_when_seat_rows_missing(self, uow: FakeUnitOfWork) -> None:
        uow.seat_command_repo.lock_seats = AsyncMock(return_value=[Seat.from_id(1)])
        use_case = BookSeatsUseCase(uow=uow)

        with pytest.raises(InvalidSeatIdsError):
            await use_case.book(seat_ids=[1, 2], user_id=2)

        assert not uow.committed

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'seat_ids,error',
        [
            ([], InvalidSeatCountError),
            ([1, 2, 3, 4, 5, 6, 7, 8], InvalidSeatCountError),
            ([0, 1], InvalidSeatIdsError),
            ([81], InvalidSeatIdsError),
            ([3, 3], InvalidSeatIdsError),
        ],
    )
    async def test_fail_fast_on_invalid_input(
        self, uow: FakeUnitOfWork, seat_ids: list[int], error: type[Exception]
    ) -> None:
        use_case = BookSeatsUseCase(uow=uow)

        with pytest.raises(error):
            await use_case.book(seat_ids=seat_ids, user_id=2)

        uow.seat_command_repo.lock_seats.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_surfaces_as_retryable(self, uow: FakeUnitOfWork) -> None:
        uow.seat_command_repo.lock_seats = AsyncMock(
            side_effect=OperationalError('SELECT', {}, Exception('connection reset'))
        )
        use_case = BookSeatsUseCase(uow=uow)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await use_case.book(seat_ids=[1], user_id=2)

        assert exc_info.value.status_code == 503
        assert exc_info.value.to_payload()['retryable'] is True
        assert 'connection reset' not in exc_info.value.message
