"""Tests for the create_user CLI: same validation and uniqueness rules as registration."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import User
from app.scripts import create_user


class TestCreateUserCli(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self.Session = sessionmaker(bind=self.engine, autoflush=False)
        patcher_engine = patch.object(create_user, "engine", self.engine)
        patcher_session = patch.object(create_user, "SessionLocal", self.Session)
        patcher_engine.start()
        patcher_session.start()
        self.addCleanup(patcher_engine.stop)
        self.addCleanup(patcher_session.stop)

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_user(self) -> None:
        code, out, _ = self.run_cli("ada@example.com", "ada", "password1", "--color", "#123456")
        self.assertEqual(code, 0)
        self.assertIn("Success! User created", out)
        db = self.Session()
        try:
            user = db.query(User).filter(User.email == "ada@example.com").one()
            self.assertEqual(user.color, "#123456")
            self.assertNotEqual(user.password, "password1")
        finally:
            db.close()

    def test_duplicate_prints_errors(self) -> None:
        self.run_cli("ada@example.com", "ada", "password1")
        code, _, err = self.run_cli("ada@example.com", "ada", "password1")
        self.assertEqual(code, 1)
        self.assertIn("Email already exists", err)
        self.assertIn("Username already exists", err)

    def test_invalid_password(self) -> None:
        code, _, err = self.run_cli("ada@example.com", "ada", "short")
        self.assertEqual(code, 1)
        self.assertIn("Password must be between", err)


if __name__ == "__main__":
    unittest.main()
