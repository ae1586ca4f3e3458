from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.domain.entity.seat_entity import Seat


class InitializeSeatsUseCase:
    """Create the fixed seat layout once. Safe to run on every startup."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @Logger.io
    async def initialize(self) -> int:
        async with self.uow:
            created = await self.uow.seat_command_repo.insert_missing(seats=Seat.full_layout())
            await self.uow.commit()

        if created:
            Logger.base.info(f'💺 [SEED] Created {created} seats')
        return created
