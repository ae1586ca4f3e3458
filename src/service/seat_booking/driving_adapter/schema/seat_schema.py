"""
Seat and Booking API Schemas - camelCase on the wire
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeatResponse(CamelModel):
    id: int
    seat_number: int
    row_number: int
    seat_position: int
    is_available: bool


class SeatMapResponse(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'seats': {
                    '1': [
                        {
                            'id': 1,
                            'seatNumber': 1,
                            'rowNumber': 1,
                            'seatPosition': 1,
                            'isAvailable': True,
                        }
                    ]
                }
            }
        }
    )

    seats: Dict[int, List[SeatResponse]]


class SelectSeatsRequest(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'count': 4, 'alreadySelected': [15]}}
    )

    count: int
    already_selected: List[int] = Field(default_factory=list)


class SelectSeatsResponse(CamelModel):
    seat_ids: List[int]


class BookSeatsRequest(CamelModel):
    model_config = ConfigDict(json_schema_extra={'example': {'seatIds': [15, 16, 17, 18]}})

    # Count and range are checked by the booking domain, not here
    seat_ids: List[int]


class BookingSummary(CamelModel):
    id: int
    reference: str
    seat_ids: List[int]
    booking_date: datetime


class BookSeatsResponse(CamelModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'message': 'Seats booked successfully',
                'booking': {
                    'id': 1,
                    'reference': 'TB1718000000000X7K2',
                    'seatIds': [15, 16, 17, 18],
                    'bookingDate': '2025-01-10T10:30:00Z',
                },
            }
        }
    )

    message: str
    booking: BookingSummary


class BookingDetail(CamelModel):
    id: int
    reference: str
    booking_date: datetime
    status: str
    seat_numbers: List[int]


class MyBookingsResponse(CamelModel):
    bookings: List[BookingDetail]


class MessageResponse(BaseModel):
    message: str
