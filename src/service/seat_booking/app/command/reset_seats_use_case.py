from typing import Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics


class ResetSeatsUseCase:
    """
    Cancel every active booking and free every seat. No ownership check.

    Seats are locked before bookings are touched, the same order book and
    cancel use, so every booking committed while reset waits is cancelled too.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def reset(self) -> int:
        """Returns the number of bookings cancelled"""
        async with self.uow:
            await self.uow.seat_command_repo.lock_all()
            cancelled_count = await self.uow.booking_command_repo.cancel_all_active()
            await self.uow.seat_command_repo.release_all()
            await self.uow.commit()

        metrics.record_reset()
        Logger.base.warning(f'🧹 [RESET] {cancelled_count} active bookings cancelled, seats freed')
        return cancelled_count
