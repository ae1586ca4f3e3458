from abc import ABC, abstractmethod
from typing import Optional

from src.service.seat_booking.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    @abstractmethod
    async def exists_by_username_or_email(self, *, username: str, email: str) -> bool:
        pass

    @abstractmethod
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        pass
