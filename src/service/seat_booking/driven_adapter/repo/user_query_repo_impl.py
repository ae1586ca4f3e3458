from typing import AsyncContextManager, Callable, Optional

from pydantic import SecretStr
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.seat_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.seat_booking.domain.entity.user_entity import UserEntity
from src.service.seat_booking.driven_adapter.model.user_model import UserModel
from src.service.seat_booking.driven_adapter.repo.user_command_repo_impl import to_user_entity


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        password_hasher: IPasswordHasher,
    ) -> None:
        self.session_factory = session_factory
        self.password_hasher = password_hasher

    @Logger.io
    async def exists_by_username_or_email(self, *, username: str, email: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel.id)
                .where(or_(UserModel.username == username, UserModel.email == email))
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            if not self.password_hasher.verify_password(
                plain_password=SecretStr(plain_password),
                hashed_password=user_model.hashed_password,
            ):
                return None

            return to_user_entity(user_model)
