from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.seat_booking.domain.entity.user_entity import UserEntity
from src.service.seat_booking.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                username=user_entity.username,
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                is_active=user_entity.is_active,
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                # Lost a race against the existence check in the use case
                await session.rollback()
                raise ConflictError('User already exists') from e
            await session.refresh(user_model)

            return to_user_entity(user_model)


def to_user_entity(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        username=user_model.username,
        email=user_model.email,
        is_active=user_model.is_active,
        created_at=user_model.created_at,
    )
