"""Account workflow: registration, login, profile read/update and password change.

Expected failures (validation, conflict, credentials, ownership) are raised as
AccountError subclasses carrying the accumulated messages; the API layer
renders them as ``{"errors": [...]}``.
"""

import logging
from typing import TYPE_CHECKING

from app.core.errors import (
    AuthorizationFailure,
    ConflictFailure,
    CredentialFailure,
    ErrorAccumulator,
    NotFoundFailure,
    ValidationFailure,
)
from app.core.security import TokenIssuer, bearer, hash_password, verify_password
from app.models.user import User
from app.schemas.users import (
    LoginRequest,
    LoginResponse,
    PasswordChangeResponse,
    RegisterRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
    UserView,
)
from app.services.user_directory import UserDirectory
from app.services.validation import (
    validate_login_input,
    validate_register_input,
    validate_update_password_input,
    validate_update_user_input,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

REGISTER_SUCCESS_MESSAGE = "Success! User created"


def public_view(user: User) -> UserView:
    """User record minus the password hash."""
    return UserView.model_validate(user)


def _check_unique(
    directory: UserDirectory,
    errors: ErrorAccumulator,
    email: str | None,
    username: str | None,
    own_id: str | None = None,
) -> None:
    """Run both lookups and record a message per collision; a match on own_id is not a collision."""
    if email:
        existing = directory.find_by_email(email)
        if existing is not None and existing.id != own_id:
            errors.add("Email already exists")
    if username:
        existing = directory.find_by_username(username)
        if existing is not None and existing.id != own_id:
            errors.add("Username already exists")


def _require_owner(caller: User, target_id: str | None, message: str) -> None:
    if not caller.id:
        raise AuthorizationFailure("Bad auth provided.")
    if caller.id != target_id:
        raise AuthorizationFailure(message)


def register_user(
    directory: UserDirectory, body: RegisterRequest, settings: "Settings"
) -> str:
    """Create a user after shape and uniqueness checks. No token is issued here."""
    errors = ErrorAccumulator()
    if not validate_register_input(body, errors):
        raise ValidationFailure(errors)

    email = body.email
    username = body.username.strip()
    _check_unique(directory, errors, email, username)
    if errors.has_errors():
        logger.info("Registration rejected", extra={"error_count": len(errors)})
        raise ConflictFailure(errors)

    user = directory.create(
        {
            "email": email,
            "username": username,
            "password": hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
            "color": body.color.strip(),
        }
    )
    logger.info("User registered", extra={"user_id": user.id})
    return REGISTER_SUCCESS_MESSAGE


def login_user(
    directory: UserDirectory,
    issuer: TokenIssuer,
    body: LoginRequest,
    settings: "Settings",
) -> LoginResponse:
    """Check credentials and return a bearer token bound to the current password hash."""
    errors = ErrorAccumulator()
    if not validate_login_input(body, errors):
        raise ValidationFailure(errors)

    user = directory.find_by_email(body.email)
    if user is None:
        errors.add("Email not found")
        raise CredentialFailure(errors)
    if not verify_password(body.password, user.password):
        logger.info("Login rejected: wrong password", extra={"user_id": user.id})
        errors.add("Password incorrect")
        raise CredentialFailure(errors)

    token = issuer.issue(user.id, user.password, settings.LOGIN_TOKEN_TTL_SEC)
    logger.info("User logged in", extra={"user_id": user.id})
    return LoginResponse(success=True, token=bearer(token), user=public_view(user))


def get_profile(directory: UserDirectory, user_id: str | None) -> UserView:
    if not user_id:
        raise AuthorizationFailure("Bad auth provided.")
    user = directory.find_by_id(user_id)
    if user is None:
        raise NotFoundFailure("User not found")
    return public_view(user)


def update_profile(
    directory: UserDirectory,
    caller: User,
    target_id: str | None,
    body: UpdateUserRequest,
) -> UserView:
    """Merge the supplied fields into the caller's own record."""
    _require_owner(caller, target_id, "You can only update your own user information.")

    errors = ErrorAccumulator()
    if not validate_update_user_input(body, errors):
        raise ValidationFailure(errors)

    email = body.email if body.email and body.email.strip() else None
    username = body.username.strip() if body.username else None
    _check_unique(directory, errors, email, username, own_id=caller.id)
    if errors.has_errors():
        raise ConflictFailure(errors)

    if email:
        caller.email = email
    if username:
        caller.username = username
    if body.image_url and body.image_url.strip():
        caller.image_url = body.image_url.strip()
    if body.color and body.color.strip():
        caller.color = body.color.strip()

    user = directory.save(caller)
    logger.info("User profile updated", extra={"user_id": user.id})
    return public_view(user)


def change_password(
    directory: UserDirectory,
    issuer: TokenIssuer,
    caller: User,
    target_id: str | None,
    body: UpdatePasswordRequest,
    settings: "Settings",
) -> PasswordChangeResponse:
    """Store a new hash and return a token carrying it; older tokens stop verifying."""
    _require_owner(caller, target_id, "You can only update your own password.")

    errors = ErrorAccumulator()
    if not validate_update_password_input(body, errors):
        raise ValidationFailure(errors)

    caller.password = hash_password(body.password, rounds=settings.BCRYPT_ROUNDS)
    user = directory.save(caller)
    token = issuer.issue(user.id, user.password, settings.PASSWORD_TOKEN_TTL_SEC)
    logger.info("User password changed", extra={"user_id": user.id})
    return PasswordChangeResponse(success=True, token=bearer(token))
