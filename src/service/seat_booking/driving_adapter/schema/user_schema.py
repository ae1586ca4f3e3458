"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr


class RegisterRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'username': 'train_rider',
                'email': 'rider@example.com',
                'password': 'Passw0rd',
            }
        }
    )

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=6, max_length=72, description='6-72 characters (bcrypt limit)'
    )


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'rider@example.com', 'password': 'Passw0rd'}}
    )

    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class ProfileResponse(BaseModel):
    user: UserResponse
