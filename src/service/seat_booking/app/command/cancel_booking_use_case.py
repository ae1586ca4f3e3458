from typing import Self

from fastapi import Depends
from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.seat_booking.domain.entity.booking_entity import Booking
from src.service.seat_booking.domain.seat_booking_errors import (
    AlreadyCancelledError,
    BookingNotFoundError,
)


class CancelBookingUseCase:
    """
    Cancel a booking and free its seats atomically.

    Someone else's booking reads as not found. Seats are locked before the
    booking row, matching book and reset. The status flip is conditional, so
    two concurrent cancels free the seats once.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def cancel(self, *, booking_id: int, user_id: int) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': booking_id, 'user.id': user_id},
        ):
            async with self.uow:
                booking = await self.uow.booking_command_repo.get_owned(
                    booking_id=booking_id, user_id=user_id
                )
                if not booking:
                    metrics.record_cancellation(result='not_found')
                    raise BookingNotFoundError()

                try:
                    cancelled = booking.cancel()
                    await self.uow.seat_command_repo.lock_seats(seat_ids=booking.seat_ids)
                    if not await self.uow.booking_command_repo.mark_cancelled(booking=cancelled):
                        raise AlreadyCancelledError()
                except AlreadyCancelledError:
                    metrics.record_cancellation(result='already_cancelled')
                    raise

                await self.uow.seat_command_repo.release_seats(seat_ids=cancelled.seat_ids)
                await self.uow.commit()

            metrics.record_cancellation(result='success')
            Logger.base.info(
                f'↩️ [CANCEL] booking {booking_id} cancelled, seats {cancelled.seat_ids} released'
            )
            return cancelled
