"""User account endpoints: register, login, read/update own profile, change password."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.auth import get_current_user, get_token_issuer, get_user_directory
from app.core.config import get_settings
from app.core.security import TokenIssuer
from app.models.user import User
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
from app.services import accounts
from app.services.user_directory import UserDirectory

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)

# Plain def handlers: FastAPI runs them in its threadpool, so bcrypt and JWT
# work never blocks the event loop.


@router.get("", response_model=UserView)
def read_own_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
) -> UserView:
    """Return the authenticated caller's profile."""
    return accounts.get_profile(directory, current_user.id)


@router.post("", response_model=UserView)
def update_own_profile(
    body: UpdateUserRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    target_id: Annotated[str | None, Query(alias="id")] = None,
) -> UserView:
    """Partially update the caller's profile; ?id= must be the caller's own id."""
    return accounts.update_profile(directory, current_user, target_id, body)


@router.post("/password", response_model=PasswordChangeResponse)
def update_own_password(
    body: UpdatePasswordRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    target_id: Annotated[str | None, Query(alias="id")] = None,
) -> PasswordChangeResponse:
    """Change the caller's password and return a fresh token; earlier tokens stop working."""
    return accounts.change_password(
        directory, issuer, current_user, target_id, body, get_settings()
    )


@router.post("/register", response_model=str)
def register(
    body: RegisterRequest,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
) -> str:
    """Create an account. Does not log the user in; call /login afterwards."""
    return accounts.register_user(directory, body, get_settings())


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a token and the user's profile.
    Include the token in the Authorization header exactly as returned ("Bearer <jwt>").
    """
    return accounts.login_user(directory, issuer, body, get_settings())
