"""Pydantic request/response schemas."""

from app.schemas.health import HealthResponse
from app.schemas.users import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    PasswordChangeResponse,
    RegisterRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
    UserView,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PasswordChangeResponse",
    "RegisterRequest",
    "UpdatePasswordRequest",
    "UpdateUserRequest",
    "UserView",
]
