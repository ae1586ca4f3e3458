from typing import List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.seat_booking.domain.entity.seat_entity import Seat
from src.service.seat_booking.driven_adapter.model.seat_model import SeatModel


class SeatCommandRepoImpl(ISeatCommandRepo):
    """Runs on the Unit of Work session, never commits"""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def lock_seats(self, *, seat_ids: List[int]) -> List[Seat]:
        # FOR UPDATE is a no-op on SQLite, claim_seats' conditional update covers it
        result = await self.session.execute(
            select(SeatModel)
            .where(SeatModel.id.in_(seat_ids))
            .order_by(SeatModel.id)
            .with_for_update()
        )
        return [self._model_to_entity(seat_model) for seat_model in result.scalars().all()]

    @Logger.io
    async def lock_all(self) -> int:
        result = await self.session.execute(
            select(SeatModel.id).order_by(SeatModel.id).with_for_update()
        )
        return len(result.scalars().all())

    @Logger.io
    async def claim_seats(self, *, seat_ids: List[int]) -> List[int]:
        result = await self.session.execute(
            update(SeatModel)
            .where(SeatModel.id.in_(seat_ids), SeatModel.is_available.is_(True))
            .values(is_available=False)
            .returning(SeatModel.id)
            .execution_options(synchronize_session=False)
        )
        return sorted(result.scalars().all())

    @Logger.io
    async def release_seats(self, *, seat_ids: List[int]) -> None:
        await self.session.execute(
            update(SeatModel)
            .where(SeatModel.id.in_(seat_ids))
            .values(is_available=True)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def release_all(self) -> int:
        result = await self.session.execute(
            update(SeatModel).values(is_available=True).execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined]

    @Logger.io
    async def insert_missing(self, *, seats: List[Seat]) -> int:
        result = await self.session.execute(select(SeatModel.id))
        existing_ids = set(result.scalars().all())

        missing = [seat for seat in seats if seat.id not in existing_ids]
        self.session.add_all(
            SeatModel(
                id=seat.id,
                seat_number=seat.seat_number,
                row_number=seat.row_number,
                seat_position=seat.seat_position,
                is_available=seat.is_available,
            )
            for seat in missing
        )
        await self.session.flush()
        return len(missing)

    @staticmethod
    def _model_to_entity(seat_model: SeatModel) -> Seat:
        return Seat(
            id=seat_model.id,
            row_number=seat_model.row_number,
            seat_position=seat_model.seat_position,
            is_available=seat_model.is_available,
        )
