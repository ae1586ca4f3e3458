from typing import AsyncContextManager, Callable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.seat_booking.domain.entity.seat_entity import Seat
from src.service.seat_booking.driven_adapter.model.seat_model import SeatModel


class SeatQueryRepoImpl(ISeatQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io(truncate_content=True)
    async def get_all(self) -> List[Seat]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(SeatModel).order_by(SeatModel.row_number, SeatModel.seat_position)
            )
            return [
                Seat(
                    id=seat_model.id,
                    row_number=seat_model.row_number,
                    seat_position=seat_model.seat_position,
                    is_available=seat_model.is_available,
                )
                for seat_model in result.scalars().all()
            ]
