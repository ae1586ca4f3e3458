from typing import AsyncContextManager, Callable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.seat_booking.domain.entity.booking_entity import Booking
from src.service.seat_booking.driven_adapter.model.booking_model import BookingModel
from src.service.seat_booking.driven_adapter.repo.booking_command_repo_impl import (
    to_booking_entity,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            )
            return [to_booking_entity(booking_model) for booking_model in result.scalars().all()]
