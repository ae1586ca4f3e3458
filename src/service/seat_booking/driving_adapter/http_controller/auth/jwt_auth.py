"""
User Authentication Service
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.seat_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.seat_booking.domain.entity.user_entity import UserEntity


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    @property
    def token_max_age_seconds(self) -> int:
        return int(self.token_expire.total_seconds())

    def create_jwt_token(self, user_entity: UserEntity) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_entity.id),
            'exp': now + self.token_expire,
            'iat': now,
            'user_id': user_entity.id,
            'username': user_entity.username,
            'email': user_entity.email,
            'is_active': user_entity.is_active,
        }

        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError('Token expired') from e
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    async def authenticate_user(
        self, user_query_repo: IUserQueryRepo, email: str, password: str
    ) -> UserEntity:
        user_entity = await user_query_repo.verify_password(
            email=email.lower(), plain_password=password
        )
        validated_user = UserEntity.validate_user_exists(user_entity)
        validated_user.validate_active()

        return validated_user

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        """Rebuild the user from the token payload, no DB query"""
        if not token:
            raise AuthenticationError('Access token required')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        username = payload.get('username')
        email = payload.get('email')
        is_active = payload.get('is_active')

        if not user_id or not username or not email or is_active is None:
            raise AuthenticationError('Invalid token')

        user_entity = UserEntity(id=user_id, username=username, email=email, is_active=is_active)
        user_entity.validate_active()

        return user_entity
