"""Unit tests for app.core.config.Settings validation."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.core.config import Settings


class TestJwtSecret(unittest.TestCase):
    """JWT_SECRET has no default: loading settings without it fails."""

    def test_missing_secret_fails_to_load(self) -> None:
        with patch.dict(os.environ):
            os.environ.pop("JWT_SECRET", None)
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_blank_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, JWT_SECRET="   ")

    def test_explicit_secret(self) -> None:
        s = Settings(_env_file=None, JWT_SECRET="s3cret")
        self.assertEqual(s.JWT_SECRET.get_secret_value(), "s3cret")


class TestDatabaseUrl(unittest.TestCase):
    """PostgreSQL URLs are pinned to the psycopg2 driver; other schemes are rejected."""

    def _url(self, url: str) -> str:
        return Settings(_env_file=None, JWT_SECRET="s", DATABASE_URL=url).DATABASE_URL

    def test_default_uses_psycopg2(self) -> None:
        with patch.dict(os.environ):
            os.environ.pop("DATABASE_URL", None)
            s = Settings(_env_file=None, JWT_SECRET="s")
        self.assertTrue(s.DATABASE_URL.startswith("postgresql+psycopg2://"))

    def test_postgres_scheme_rewritten(self) -> None:
        self.assertEqual(
            self._url("postgres://u:p@db:5432/accounts"),
            "postgresql+psycopg2://u:p@db:5432/accounts",
        )

    def test_bare_postgresql_scheme_rewritten(self) -> None:
        self.assertEqual(
            self._url(" postgresql://u:p@db/accounts "),
            "postgresql+psycopg2://u:p@db/accounts",
        )

    def test_explicit_driver_and_sqlite_kept(self) -> None:
        self.assertEqual(self._url("postgresql+psycopg2://db/a"), "postgresql+psycopg2://db/a")
        self.assertEqual(self._url("sqlite://"), "sqlite://")

    def test_other_schemes_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self._url("mysql://db/accounts")
        with self.assertRaises(ValidationError):
            self._url("postgres+psycopg2://db/accounts")


if __name__ == "__main__":
    unittest.main()
