from typing import Collection, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.seat_booking.domain.seat_allocation_domain import select_seats


class SelectSeatsUseCase:
    """
    Suggest seats for a party size from the current seat map.

    Advisory only: booking re-checks availability under lock.
    """

    def __init__(self, *, seat_query_repo: ISeatQueryRepo) -> None:
        self.seat_query_repo = seat_query_repo

    @classmethod
    @inject
    def depends(
        cls, seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo])
    ) -> Self:
        return cls(seat_query_repo=seat_query_repo)

    @Logger.io
    async def select(self, *, count: int, already_selected: Collection[int] = ()) -> List[int]:
        seats = await self.seat_query_repo.get_all()
        return select_seats(seats, count, already_selected)
