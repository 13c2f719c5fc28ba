"""Database engine and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, settings


def _connect_args(cfg: Settings) -> dict[str, Any]:
    """Driver arguments that bound connect and statement time for each call."""
    if cfg.DATABASE_URL.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": cfg.DB_CONNECT_TIMEOUT_SEC}
    return {
        "connect_timeout": cfg.DB_CONNECT_TIMEOUT_SEC,
        "options": f"-c statement_timeout={cfg.DB_STATEMENT_TIMEOUT_MS}",
    }


def build_engine(cfg: Settings) -> Engine:
    """Create the engine for the configured store."""
    return create_engine(
        cfg.DATABASE_URL,
        pool_pre_ping=True,
        echo=cfg.DEBUG,
        connect_args=_connect_args(cfg),
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
