from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.command.book_seats_use_case import BookSeatsUseCase
from src.service.seat_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.seat_booking.app.command.reset_seats_use_case import ResetSeatsUseCase
from src.service.seat_booking.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.seat_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.seat_booking.app.query.select_seats_use_case import SelectSeatsUseCase
from src.service.seat_booking.domain.entity.user_entity import UserEntity
from src.service.seat_booking.driving_adapter.http_controller.user_controller import (
    get_current_user,
)
from src.service.seat_booking.driving_adapter.schema.seat_schema import (
    BookingDetail,
    BookingSummary,
    BookSeatsRequest,
    BookSeatsResponse,
    MessageResponse,
    MyBookingsResponse,
    SeatMapResponse,
    SeatResponse,
    SelectSeatsRequest,
    SelectSeatsResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=SeatMapResponse)
@Logger.io(truncate_content=True)
async def get_seat_map(
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    seat_map = await use_case.get_seat_map()
    return SeatMapResponse(
        seats={
            row_number: [
                SeatResponse(
                    id=seat.id,
                    seat_number=seat.seat_number,
                    row_number=seat.row_number,
                    seat_position=seat.seat_position,
                    is_available=seat.is_available,
                )
                for seat in seats
            ]
            for row_number, seats in seat_map.items()
        }
    )


@router.post('/select', response_model=SelectSeatsResponse)
@Logger.io
async def select_seats(
    request: SelectSeatsRequest,
    use_case: SelectSeatsUseCase = Depends(SelectSeatsUseCase.depends),
) -> SelectSeatsResponse:
    seat_ids = await use_case.select(count=request.count, already_selected=request.already_selected)
    return SelectSeatsResponse(seat_ids=seat_ids)


@router.post('/book', response_model=BookSeatsResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def book_seats(
    request: BookSeatsRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: BookSeatsUseCase = Depends(BookSeatsUseCase.depends),
) -> BookSeatsResponse:
    with tracer.start_as_current_span('controller.book_seats') as span:
        span.set_attribute('user.id', current_user.id or 0)

        booking = await use_case.book(seat_ids=request.seat_ids, user_id=current_user.id or 0)

        if booking.id is None or booking.created_at is None:
            raise ValueError('Booking should have id and created_at after commit.')

        return BookSeatsResponse(
            message='Seats booked successfully',
            booking=BookingSummary(
                id=booking.id,
                reference=booking.reference,
                seat_ids=booking.seat_ids,
                booking_date=booking.created_at,
            ),
        )


@router.get('/my-bookings', response_model=MyBookingsResponse)
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> MyBookingsResponse:
    bookings = await use_case.list_user_bookings(user_id=current_user.id or 0)
    return MyBookingsResponse(
        bookings=[
            BookingDetail(
                id=booking.id or 0,
                reference=booking.reference,
                booking_date=booking.created_at,  # type: ignore[arg-type]
                status=booking.status.value,
                seat_numbers=booking.seat_numbers,
            )
            for booking in bookings
        ]
    )


@router.delete('/cancel/{booking_id}', response_model=MessageResponse)
@Logger.io
async def cancel_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> MessageResponse:
    with tracer.start_as_current_span('controller.cancel_booking') as span:
        span.set_attribute('booking.id', booking_id)
        await use_case.cancel(booking_id=booking_id, user_id=current_user.id or 0)
        return MessageResponse(message='Booking cancelled successfully')


@router.post('/reset', response_model=MessageResponse)
@Logger.io
async def reset_seats(
    use_case: ResetSeatsUseCase = Depends(ResetSeatsUseCase.depends),
) -> MessageResponse:
    if not settings.SEAT_RESET_ENABLED:
        raise ForbiddenError('Seat reset is disabled')

    await use_case.reset()
    return MessageResponse(message='All seats have been reset')
