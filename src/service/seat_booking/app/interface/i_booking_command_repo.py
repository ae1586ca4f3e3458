"""
Booking Command Repository Interface

Bound to the Unit of Work session, see ISeatCommandRepo.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.seat_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Insert booking and return it with its generated id"""
        pass

    @abstractmethod
    async def get_owned(self, *, booking_id: int, user_id: int) -> Optional[Booking]:
        """
        Get booking owned by user, no row lock

        Callers lock the booking's seats next and rely on mark_cancelled
        to detect a concurrent status change.

        Returns:
            Booking, or None when it does not exist or belongs to someone else
        """
        pass

    @abstractmethod
    async def mark_cancelled(self, *, booking: Booking) -> bool:
        """
        Persist cancellation only if the stored row is still active

        Returns:
            False when a concurrent request cancelled it first
        """
        pass

    @abstractmethod
    async def cancel_all_active(self) -> int:
        """Cancel every active booking, returns number cancelled"""
        pass
