"""
Unit tests for CancelBookingUseCase

Test Focus:
1. Cancel flips status and releases exactly the booked seats
2. Fail fast: not found (including someone else's booking), already cancelled
3. A concurrent cancel that wins the status flip leaves seats alone
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from src.service.seat_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.seat_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.seat_booking.domain.seat_booking_errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
)
from test.service.seat_booking.unit.fake_unit_of_work import FakeUnitOfWork


@pytest.mark.unit
class TestCancelBooking:
    @pytest.fixture
    def active_booking(self) -> Booking:
        return Booking(
            id=10,
            user_id=2,
            reference='TB1718000000000ABCD',
            seat_ids=[22, 23],
            status=BookingStatus.ACTIVE,
            created_at=datetime.now(timezone.utc),
        )

    @pytest.fixture
    def uow(self) -> FakeUnitOfWork:
        return FakeUnitOfWork()

    @pytest.mark.asyncio
    async def test_successfully_cancel_booking(
        self, uow: FakeUnitOfWork, active_booking: Booking
    ) -> None:
        # Arrange
        uow.booking_command_repo.get_owned = AsyncMock(return_value=active_booking)
        uow.booking_command_repo.mark_cancelled = AsyncMock(return_value=True)
        use_case = CancelBookingUseCase(uow=uow)

        # Act
        result = await use_case.cancel(booking_id=10, user_id=2)

        # Assert
        assert result.status == BookingStatus.CANCELLED
        uow.booking_command_repo.get_owned.assert_awaited_once_with(
            booking_id=10, user_id=2
        )
        uow.seat_command_repo.release_seats.assert_awaited_once_with(seat_ids=[22, 23])
        assert uow.committed

    @pytest.mark.asyncio
    async def test_cancel_locks_seats_before_flipping_status(
        self, uow: FakeUnitOfWork, active_booking: Booking
    ) -> None:
        calls: list[str] = []
        uow.booking_command_repo.get_owned = AsyncMock(return_value=active_booking)
        uow.seat_command_repo.lock_seats = AsyncMock(
            side_effect=lambda **kwargs: calls.append('lock_seats') or []
        )
        uow.booking_command_repo.mark_cancelled = AsyncMock(
            side_effect=lambda **kwargs: calls.append('mark_cancelled') or True
        )
        uow.seat_command_repo.release_seats = AsyncMock(
            side_effect=lambda **kwargs: calls.append('release_seats')
        )

        await CancelBookingUseCase(uow=uow).cancel(booking_id=10, user_id=2)

        assert calls == ['lock_seats', 'mark_cancelled', 'release_seats']
        uow.seat_command_repo.lock_seats.assert_awaited_once_with(seat_ids=[22, 23])

    @pytest.mark.asyncio
    async def test_fail_when_booking_not_found(self, uow: FakeUnitOfWork) -> None:
        """Someone else's booking is filtered by owner and reads as not found"""
        uow.booking_command_repo.get_owned = AsyncMock(return_value=None)
        use_case = CancelBookingUseCase(uow=uow)

        with pytest.raises(BookingNotFoundError, match='Booking not found'):
            await use_case.cancel(booking_id=999, user_id=3)

        uow.seat_command_repo.release_seats.assert_not_awaited()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_fail_when_already_cancelled(
        self, uow: FakeUnitOfWork, active_booking: Booking
    ) -> None:
        uow.booking_command_repo.get_owned = AsyncMock(
            return_value=active_booking.cancel()
        )
        use_case = CancelBookingUseCase(uow=uow)

        with pytest.raises(AlreadyCancelledError):
            await use_case.cancel(booking_id=10, user_id=2)

        uow.booking_command_repo.mark_cancelled.assert_not_awaited()
        uow.seat_command_repo.release_seats.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fail_when_concurrent_cancel_won(
        self, uow: FakeUnitOfWork, active_booking: Booking
    ) -> None:
        uow.booking_command_repo.get_owned = AsyncMock(return_value=active_booking)
        uow.booking_command_repo.mark_cancelled = AsyncMock(return_value=False)
        use_case = CancelBookingUseCase(uow=uow)

        with pytest.raises(AlreadyCancelledError):
            await use_case.cancel(booking_id=10, user_id=2)

        uow.seat_command_repo.release_seats.assert_not_awaited()
        assert not uow.committed
        assert uow.rolled_back
