import time
from typing import List, Self

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import CustomBaseError, StoreUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.seat_booking.domain.entity.booking_entity import Booking, validate_seat_ids
from src.service.seat_booking.domain.seat_booking_errors import (
    InvalidSeatIdsError,
    SeatsUnavailableError,
)


class BookSeatsUseCase:
    """
    Book seats in one transaction

    Flow (inside the Unit of Work):
    1. Lock the requested seat rows (id order) and re-check availability
    2. Insert the booking as active
    3. Flip only still-available seats; any shortfall means a concurrent booking won
    4. Commit, or roll back everything on the first failure

    The seat map the client picked from is never trusted.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def book(self, *, seat_ids: List[int], user_id: int) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.book_seats',
            attributes={'user.id': user_id, 'seat.count': len(seat_ids)},
        ) as span:
            start = time.perf_counter()
            try:
                booking = await self._book_in_transaction(seat_ids=seat_ids, user_id=user_id)
            except CustomBaseError as e:
                metrics.record_booking(
                    result=_result_label(e),
                    duration=time.perf_counter() - start,
                    seat_count=len(seat_ids),
                )
                raise

            metrics.record_booking(
                result='success', duration=time.perf_counter() - start, seat_count=len(seat_ids)
            )
            span.set_attribute('booking.reference', booking.reference)
            Logger.base.info(
                f'🎫 [BOOK] user {user_id} booked seats {booking.seat_ids} as {booking.reference}'
            )
            return booking

    async def _book_in_transaction(self, *, seat_ids: List[int], user_id: int) -> Booking:
        validate_seat_ids(seat_ids)

        async with self.uow:
            seats = await self.uow.seat_command_repo.lock_seats(seat_ids=seat_ids)
            if len(seats) != len(seat_ids):
                # Seat rows missing, store was never seeded for these ids
                raise InvalidSeatIdsError()

            taken = [seat.seat_number for seat in seats if not seat.is_available]
            if taken:
                raise SeatsUnavailableError(unavailable_seats=taken)

            booking = await self.uow.booking_command_repo.create(
                booking=Booking.create(user_id=user_id, seat_ids=seat_ids)
            )

            claimed = await self.uow.seat_command_repo.claim_seats(seat_ids=seat_ids)
            if len(claimed) != len(seat_ids):
                Logger.base.warning(
                    f'⚔️ [BOOK] Lost race for seats {sorted(set(seat_ids) - set(claimed))}'
                )
                raise SeatsUnavailableError(unavailable_seats=set(seat_ids) - set(claimed))

            await self.uow.commit()

        return booking


def _result_label(error: CustomBaseError) -> str:
    if isinstance(error, SeatsUnavailableError):
        return 'unavailable'
    if isinstance(error, StoreUnavailableError):
        return 'store_error'
    return 'invalid'
