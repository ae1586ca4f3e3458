"""
Seat Command Repository Interface

Bound to the Unit of Work session: every method runs inside the caller's
transaction and nothing is committed here.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.seat_booking.domain.entity.seat_entity import Seat


class ISeatCommandRepo(ABC):
    @abstractmethod
    async def lock_seats(self, *, seat_ids: List[int]) -> List[Seat]:
        """
        Read the requested seats with a row lock held until the transaction ends

        Rows are locked in id order so concurrent bookings cannot deadlock.

        Returns:
            Seats found, ordered by id. Missing ids are simply absent.
        """
        pass

    @abstractmethod
    async def lock_all(self) -> int:
        """
        Row lock every seat in id order, returns number of seats locked

        Waits for in-flight bookings holding any seat to finish first.
        """
        pass

    @abstractmethod
    async def claim_seats(self, *, seat_ids: List[int]) -> List[int]:
        """
        Flip available seats to unavailable

        Returns:
            Ids that were actually flipped. Seats already taken are left alone.
        """
        pass

    @abstractmethod
    async def release_seats(self, *, seat_ids: List[int]) -> None:
        pass

    @abstractmethod
    async def release_all(self) -> int:
        """Mark every seat available, returns number of seats touched"""
        pass

    @abstractmethod
    async def insert_missing(self, *, seats: List[Seat]) -> int:
        """Insert seats whose id does not exist yet, returns number inserted"""
        pass
