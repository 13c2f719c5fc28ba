"""Bearer-token authentication dependencies (get_current_user) and shared providers."""

import hmac
import logging
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import AuthenticationFailure
from app.core.security import TokenIssuer
from app.models.user import User
from app.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_token_issuer() -> TokenIssuer:
    """Dependency: token issuer built from the cached settings."""
    return TokenIssuer.from_settings(get_settings())


def get_user_directory(db: Annotated[Session, Depends(get_db)]) -> UserDirectory:
    """Dependency: user directory bound to the request's DB session."""
    return UserDirectory(db, read_retries=get_settings().DB_READ_RETRIES)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> User:
    """
    Dependency: require a valid Bearer JWT and return the caller's user record.

    The token's hash claim must match the stored password hash, so tokens
    issued before a password change are rejected. Raises 401 otherwise.
    """
    if credentials is None:
        raise AuthenticationFailure("Not authenticated")
    try:
        payload = issuer.decode(credentials.credentials)
    except jwt.PyJWTError:
        raise AuthenticationFailure("Invalid or expired token")
    user_id = payload.get("id")
    fingerprint = payload.get("hash")
    if not user_id or not isinstance(fingerprint, str):
        raise AuthenticationFailure("Invalid token payload")
    user = directory.find_by_id(str(user_id))
    if user is None:
        raise AuthenticationFailure("User not found")
    if not hmac.compare_digest(fingerprint.encode("utf-8"), user.password.encode("utf-8")):
        logger.info("Rejected token issued before password change", extra={"user_id": user.id})
        raise AuthenticationFailure("Invalid or expired token")
    return user
