from abc import ABC, abstractmethod
from typing import List

from src.service.seat_booking.domain.entity.seat_entity import Seat


class ISeatQueryRepo(ABC):
    """Seat reads outside a transaction. Results are advisory snapshots."""

    @abstractmethod
    async def get_all(self) -> List[Seat]:
        """All seats ordered by (row_number, seat_position)"""
        pass
