from itertools import groupby
from typing import Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.seat_booking.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.seat_booking.domain.entity.seat_entity import Seat


class GetSeatMapUseCase:
    def __init__(self, *, seat_query_repo: ISeatQueryRepo) -> None:
        self.seat_query_repo = seat_query_repo

    @classmethod
    @inject
    def depends(
        cls, seat_query_repo: ISeatQueryRepo = Depends(Provide[Container.seat_query_repo])
    ) -> Self:
        return cls(seat_query_repo=seat_query_repo)

    @Logger.io(truncate_content=True)
    async def get_seat_map(self) -> Dict[int, List[Seat]]:
        """Seats grouped by row number, rows and positions ascending"""
        seats = await self.seat_query_repo.get_all()
        metrics.update_seats_available(count=sum(seat.is_available for seat in seats))

        return {
            row_number: list(row_seats)
            for row_number, row_seats in groupby(seats, key=lambda seat: seat.row_number)
        }
