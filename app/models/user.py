"""ORM model for user accounts."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, String

from app.models.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """
    User account for bearer-token authentication.

    password holds the bcrypt hash only. The unique indexes on email and
    username are the authoritative uniqueness guard; lookups made before a
    write only produce friendlier error messages.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    color = Column(String(32), nullable=True)
    image_url = Column(String(2048), nullable=True)
    roles = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
