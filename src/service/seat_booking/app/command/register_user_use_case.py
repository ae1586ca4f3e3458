from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.seat_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.seat_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.seat_booking.domain.entity.user_entity import UserEntity


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def register(self, *, username: str, email: str, password: str) -> UserEntity:
        UserEntity.validate_username(username)
        UserEntity.validate_password_strength(password)
        email = email.lower()

        if await self.user_query_repo.exists_by_username_or_email(
            username=username, email=email
        ):
            raise ConflictError('User already exists')

        user_entity = UserEntity(username=username, email=email, is_active=True)
        user_entity.set_password(password, self.password_hasher)
        created = await self.user_command_repo.create(user_entity)

        Logger.base.info(f'👤 [REGISTER] user {created.id} ({username}) registered')
        return created
