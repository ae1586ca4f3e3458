"""Import every model so Base.metadata knows all tables"""

from src.service.seat_booking.driven_adapter.model.booking_model import BookingModel
from src.service.seat_booking.driven_adapter.model.seat_model import SeatModel
from src.service.seat_booking.driven_adapter.model.user_model import UserModel

__all__ = ['BookingModel', 'SeatModel', 'UserModel']
