"""Request/response schemas for the user account endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Registration body. Presence and format are checked by the shape validators."""

    email: str | None = None
    username: str | None = None
    password: str | None = None
    color: str | None = None


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = None
    password: str | None = None


class UpdateUserRequest(BaseModel):
    """Partial profile update; omitted fields are left untouched."""

    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    username: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    color: str | None = None


class UpdatePasswordRequest(BaseModel):
    """New password plus confirmation."""

    password: str | None = None
    password2: str | None = None


class UserView(BaseModel):
    """Public view of a user record (no password)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    username: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
    roles: list[str] = Field(default_factory=list)
    image_url: str | None = Field(default=None, serialization_alias="imageUrl")
    color: str | None = None
    id: str = Field(serialization_alias="_id")


class LoginResponse(BaseModel):
    """Bearer token and profile returned after a successful login."""

    success: bool = True
    token: str = Field(..., description="Bearer-prefixed JWT")
    user: UserView


class PasswordChangeResponse(BaseModel):
    """Fresh bearer token returned after a password change."""

    success: bool = True
    token: str = Field(..., description="Bearer-prefixed JWT")


class ErrorResponse(BaseModel):
    """Shape of every failure response."""

    errors: list[str]
