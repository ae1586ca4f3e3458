from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.seat_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.seat_booking.driven_adapter.model.booking_model import BookingModel


class BookingCommandRepoImpl(IBookingCommandRepo):
    """Runs on the Unit of Work session, never commits"""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        booking_model = BookingModel(
            user_id=booking.user_id,
            reference=booking.reference,
            seat_ids=list(booking.seat_ids),
            status=booking.status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        self.session.add(booking_model)
        await self.session.flush()

        return to_booking_entity(booking_model)

    @Logger.io
    async def get_owned(self, *, booking_id: int, user_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(
                BookingModel.id == booking_id, BookingModel.user_id == user_id
            )
        )
        booking_model = result.scalar_one_or_none()
        return to_booking_entity(booking_model) if booking_model else None

    @Logger.io
    async def mark_cancelled(self, *, booking: Booking) -> bool:
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == booking.id,
                BookingModel.status == BookingStatus.ACTIVE.value,
            )
            .values(status=BookingStatus.CANCELLED.value, updated_at=booking.updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def cancel_all_active(self) -> int:
        result = await self.session.execute(
            update(BookingModel)
            .where(BookingModel.status == BookingStatus.ACTIVE.value)
            .values(status=BookingStatus.CANCELLED.value, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]


def to_booking_entity(booking_model: BookingModel) -> Booking:
    return Booking(
        id=booking_model.id,
        user_id=booking_model.user_id,
        reference=booking_model.reference,
        seat_ids=list(booking_model.seat_ids),
        status=BookingStatus(booking_model.status),
        created_at=booking_model.created_at,
        updated_at=booking_model.updated_at,
    )
