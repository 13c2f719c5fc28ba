"""
Create a user without going through HTTP. Run from project root:
  python -m app.scripts.create_user EMAIL USERNAME PASSWORD [--color COLOR]
Example:
  python -m app.scripts.create_user ada@example.com ada your-secure-password --color "#3366ff"
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal, engine
from app.core.errors import AccountError, is_unexpected
from app.models import Base
from app.schemas.users import RegisterRequest
from app.services.accounts import register_user
from app.services.user_directory import UserDirectory

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account (same rules as POST /users/register).")
    parser.add_argument("email", help="Email address")
    parser.add_argument("username", help="Username (3-30 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--color", default="#000000", help="Display color (default: #000000)")
    args = parser.parse_args(argv)

    settings = get_settings()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        directory = UserDirectory(db, read_retries=settings.DB_READ_RETRIES)
        body = RegisterRequest(
            email=args.email,
            username=args.username,
            password=args.password,
            color=args.color,
        )
        print(register_user(directory, body, settings))
        return 0
    except AccountError as e:
        if is_unexpected(e):
            logger.exception("User creation failed: %s", e.message)
        else:
            for message in e.errors.messages:
                print(message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
