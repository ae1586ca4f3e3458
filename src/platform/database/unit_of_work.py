"""
Unit of Work Pattern - one database transaction shared by several repositories

Architecture:
- UoW owns the session lifecycle and commit/rollback
- Repositories created in __aenter__ share the UoW session
- Use cases coordinate repositories through the UoW
- Leaving the block without commit rolls everything back
- SQLAlchemy failures surface as StoreUnavailableError (retryable)
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import TYPE_CHECKING, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.db_setting import get_async_session
from src.platform.exception.exceptions import StoreUnavailableError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.seat_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.seat_booking.app.interface.i_seat_command_repo import ISeatCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Seat Booking Service

    Usage:
        async with uow:
            seats = await uow.seat_command_repo.lock_seats(seat_ids=[1, 2])
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.commit()
    """

    seat_command_repo: ISeatCommandRepo
    booking_command_repo: IBookingCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await self.rollback()
        except SQLAlchemyError as e:
            raise StoreUnavailableError() from e
        if isinstance(exc, SQLAlchemyError):
            Logger.base.error(f'🗄️ [UOW] Transaction aborted: {type(exc).__name__}: {exc}')
            raise StoreUnavailableError() from exc

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.seat_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.seat_booking.driven_adapter.repo.seat_command_repo_impl import (
            SeatCommandRepoImpl,
        )

        self.seat_command_repo = SeatCommandRepoImpl(session=self.session)
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)

        return await super().__aenter__()

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        # No-op after a successful commit
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work

    Usage:
        async def book(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                ...
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session)
