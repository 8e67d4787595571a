from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from enums.role import Role
from .base_schema import CamelModel


class UserCreate(CamelModel):
    name: str = Field(min_length=2)
    email: EmailStr
    phone: Optional[str] = None
    password: str = Field(min_length=6)
    role: Role = Role.STUDENT

    @field_validator("role")
    @classmethod
    def role_is_self_service(cls, value: Role) -> Role:
        # Admin accounts are never self-registered
        if value == Role.ADMIN:
            raise ValueError("Role must be STUDENT or LANDLORD")
        return value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: Role
    verified: bool
    created_at: Optional[datetime] = None


class UserNameResponse(CamelModel):
    id: int
    name: str


class UserMinimumResponse(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class AuthResponse(CamelModel):
    user: UserResponse
    token: str


class AdminUserResponse(UserResponse):
    updated_at: Optional[datetime] = None
    property_count: int = 0
    booking_count: int = 0
    review_count: int = 0
