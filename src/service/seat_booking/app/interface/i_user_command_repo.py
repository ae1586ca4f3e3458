from abc import ABC, abstractmethod

from src.service.seat_booking.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """Insert user, raises ConflictError when username or email is taken"""
        pass
