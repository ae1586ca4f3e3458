from abc import ABC, abstractmethod
from typing import List

from src.service.seat_booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Booking reads outside a transaction"""

    @abstractmethod
    async def list_by_user(self, *, user_id: int) -> List[Booking]:
        """Newest first, cancelled bookings included"""
        pass
