from datetime import datetime
import re
from typing import TYPE_CHECKING, Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import DomainError, ForbiddenError, LoginError


if TYPE_CHECKING:
    from src.service.seat_booking.app.interface.i_password_hasher import IPasswordHasher


USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]{3,50}$')
PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{6,}$')


@attrs.define
class UserEntity:
    username: str = ''
    email: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('Invalid credentials')

        return user_entity

    @staticmethod
    def validate_username(username: str) -> None:
        if not USERNAME_PATTERN.match(username):
            raise DomainError(
                'Username must be 3-50 characters of letters, numbers, and underscores'
            )

    @staticmethod
    def validate_password_strength(plain_password: str) -> None:
        if not PASSWORD_PATTERN.match(plain_password):
            raise DomainError(
                'Password must be at least 6 characters and contain at least one lowercase '
                'letter, one uppercase letter, and one number'
            )

    def set_password(self, plain_password: str, password_hasher: 'IPasswordHasher') -> None:
        """Set password using provided password hasher"""
        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )
