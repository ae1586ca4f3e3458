from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Cookie, Depends, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seat_booking.app.command.register_user_use_case import RegisterUserUseCase
from src.service.seat_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.seat_booking.domain.entity.user_entity import UserEntity
from src.service.seat_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.seat_booking.driving_adapter.schema.user_schema import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)


AUTH_COOKIE_NAME = 'fastapiusersauth'

router = APIRouter()
bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Cookie(None, alias=AUTH_COOKIE_NAME),
) -> UserEntity:
    """
    Current user from the JWT (stateless, no DB query)

    Authorization: Bearer header wins over the session cookie.
    """
    token = credentials.credentials if credentials else cookie_token
    return jwt_auth.get_current_user_info_from_jwt(token)


def _set_auth_cookie(response: Response, *, token: str, max_age: int) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        httponly=True,
        samesite='lax',
        secure=False,  # Set to True behind HTTPS
    )


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def register(
    request: RegisterRequest,
    response: Response,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> AuthResponse:
    user_entity = await use_case.register(
        username=request.username,
        email=request.email,
        password=request.password.get_secret_value(),
    )
    token = jwt_auth.create_jwt_token(user_entity)
    _set_auth_cookie(response, token=token, max_age=jwt_auth.token_max_age_seconds)

    return AuthResponse(
        message='User registered successfully',
        user=UserResponse.model_validate(user_entity),
        token=token,
    )


@router.post('/login', response_model=AuthResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    response: Response,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> AuthResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )
    token = jwt_auth.create_jwt_token(user_entity)
    _set_auth_cookie(response, token=token, max_age=jwt_auth.token_max_age_seconds)

    return AuthResponse(
        message='Login successful',
        user=UserResponse.model_validate(user_entity),
        token=token,
    )


@router.get('/profile', response_model=ProfileResponse)
@Logger.io
async def get_profile(current_user: UserEntity = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse(user=UserResponse.model_validate(current_user))
