"""Shape validators: one per operation, appending messages to an ErrorAccumulator.

Each validator runs all of its field checks and returns True when nothing was added.
"""

import re

from app.core.errors import ErrorAccumulator
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.users import (
    LoginRequest,
    RegisterRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
EMAIL_MAX_LEN = 255
IMAGE_URL_MAX_LEN = 2048
COLOR_MAX_LEN = 32


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_email(email: str, errors: ErrorAccumulator) -> None:
    if len(email) > EMAIL_MAX_LEN or not EMAIL_RE.match(email):
        errors.add("Email is invalid")


def _check_username(username: str, errors: ErrorAccumulator) -> None:
    if not (USERNAME_MIN_LEN <= len(username.strip()) <= USERNAME_MAX_LEN):
        errors.add(
            f"Username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters"
        )


def _check_password(password: str, errors: ErrorAccumulator) -> None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        errors.add(
            f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters"
        )


def _check_color(color: str, errors: ErrorAccumulator) -> None:
    if len(color.strip()) > COLOR_MAX_LEN:
        errors.add(f"Color must be at most {COLOR_MAX_LEN} characters")


def validate_register_input(body: RegisterRequest, errors: ErrorAccumulator) -> bool:
    before = len(errors)
    if _is_blank(body.email):
        errors.add("Email field is required")
    else:
        _check_email(body.email, errors)
    if _is_blank(body.username):
        errors.add("Username field is required")
    else:
        _check_username(body.username, errors)
    if _is_blank(body.password):
        errors.add("Password field is required")
    else:
        _check_password(body.password, errors)
    if _is_blank(body.color):
        errors.add("Color field is required")
    else:
        _check_color(body.color, errors)
    return len(errors) == before


def validate_login_input(body: LoginRequest, errors: ErrorAccumulator) -> bool:
    before = len(errors)
    if _is_blank(body.email):
        errors.add("Email field is required")
    else:
        _check_email(body.email, errors)
    if _is_blank(body.password):
        errors.add("Password field is required")
    return len(errors) == before


def validate_update_user_input(body: UpdateUserRequest, errors: ErrorAccumulator) -> bool:
    """Supplied fields must be well-formed; blank fields count as omitted."""
    before = len(errors)
    supplied = 0
    if not _is_blank(body.email):
        supplied += 1
        _check_email(body.email, errors)
    if not _is_blank(body.username):
        supplied += 1
        _check_username(body.username, errors)
    if not _is_blank(body.image_url):
        supplied += 1
        url = body.image_url.strip()
        if len(url) > IMAGE_URL_MAX_LEN or not url.lower().startswith(("http://", "https://")):
            errors.add("Image URL must be an http or https URL")
    if not _is_blank(body.color):
        supplied += 1
        _check_color(body.color, errors)
    if supplied == 0:
        errors.add("At least one field is required")
    return len(errors) == before


def validate_update_password_input(
    body: UpdatePasswordRequest, errors: ErrorAccumulator
) -> bool:
    before = len(errors)
    if _is_blank(body.password):
        errors.add("Password field is required")
    else:
        _check_password(body.password, errors)
    if _is_blank(body.password2):
        errors.add("Confirm password field is required")
    elif body.password != body.password2:
        errors.add("Passwords must match")
    return len(errors) == before
