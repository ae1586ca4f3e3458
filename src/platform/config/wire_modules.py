"""
Wire Modules Configuration

Modules that use Provide[Container.x] and need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seat_booking.app.command import register_user_use_case
from src.service.seat_booking.app.query import (
    get_seat_map_use_case,
    list_bookings_use_case,
    select_seats_use_case,
)
from src.service.seat_booking.driving_adapter.http_controller import (
    seat_controller,
    user_controller,
)


WIRE_MODULES: list[ModuleType] = [
    register_user_use_case,
    get_seat_map_use_case,
    select_seats_use_case,
    list_bookings_use_case,
    user_controller,
    seat_controller,
]
