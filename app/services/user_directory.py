"""User lookup and persistence on top of a SQLAlchemy session."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateRecordFailure, PersistenceFailure, ValidationFailure
from app.models.user import User, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Attributes callers may set through create(); everything else is server-assigned.
CREATABLE_FIELDS = frozenset({"email", "username", "password", "color", "image_url", "roles"})
REQUIRED_FIELDS = ("email", "username", "password")


class UserDirectory:
    """
    Find and save user records.

    Lookups retry a bounded number of times on transient store errors
    (OperationalError, which covers connect and statement timeouts). Writes
    are not retried: a failed commit may or may not have landed.
    """

    def __init__(self, session: Session, read_retries: int = 0) -> None:
        self._session = session
        self._read_retries = read_retries

    def _read(self, describe: str, query: Callable[[], T]) -> T:
        attempt = 0
        while True:
            try:
                return query()
            except OperationalError as e:
                self._session.rollback()
                if attempt >= self._read_retries:
                    logger.error(
                        "User lookup failed",
                        extra={"lookup": describe, "attempts": attempt + 1, "reason": str(e)[:500]},
                    )
                    raise PersistenceFailure(retryable=True) from e
                attempt += 1
                logger.warning("Retrying user lookup", extra={"lookup": describe, "attempt": attempt})
            except SQLAlchemyError as e:
                self._session.rollback()
                logger.error("User lookup failed", extra={"lookup": describe, "reason": str(e)[:500]})
                raise PersistenceFailure() from e

    def find_by_id(self, user_id: str) -> User | None:
        return self._read("id", lambda: self._session.get(User, user_id))

    def find_by_email(self, email: str) -> User | None:
        return self._read(
            "email",
            lambda: self._session.query(User).filter(User.email == email).first(),
        )

    def find_by_username(self, username: str) -> User | None:
        return self._read(
            "username",
            lambda: self._session.query(User).filter(User.username == username).first(),
        )

    def create(self, fields: dict[str, Any]) -> User:
        """Insert a new user; image_url and roles take their defaults when omitted."""
        unknown = set(fields) - CREATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {sorted(unknown)}")
        user = User(**fields)
        return self._commit(user)

    def save(self, user: User) -> User:
        """Persist changes to an existing user, refreshing updated_at."""
        user.updated_at = utc_now()
        return self._commit(user)

    def _commit(self, user: User) -> User:
        missing = [name for name in REQUIRED_FIELDS if not getattr(user, name, None)]
        if missing:
            self._session.rollback()
            raise ValidationFailure(f"Missing required user fields: {', '.join(missing)}")
        try:
            self._session.add(user)
            self._session.commit()
            # Reload server-side values; a failure here still means the write landed.
            self._session.refresh(user)
        except IntegrityError as e:
            self._session.rollback()
            logger.info("Unique index rejected user write")
            raise DuplicateRecordFailure() from e
        except OperationalError as e:
            self._session.rollback()
            logger.error("User write failed", extra={"reason": str(e)[:500]})
            raise PersistenceFailure(retryable=True) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error("User write failed", extra={"reason": str(e)[:500]})
            raise PersistenceFailure() from e
        return user
