"""Unit tests for app.core.errors: ErrorAccumulator and the failure taxonomy."""

import unittest

from app.core.errors import (
    AuthenticationFailure,
    AuthorizationFailure,
    ConflictFailure,
    DuplicateRecordFailure,
    ErrorAccumulator,
    HashingFailure,
    NotFoundFailure,
    PersistenceFailure,
    SigningFailure,
    ValidationFailure,
    is_unexpected,
)


class TestErrorAccumulator(unittest.TestCase):
    """Messages keep insertion order and always render as {"errors": [...]}."""

    def test_empty(self) -> None:
        errors = ErrorAccumulator()
        self.assertFalse(errors.has_errors())
        self.assertEqual(errors.to_response(), {"errors": []})

    def test_preserves_order(self) -> None:
        errors = ErrorAccumulator()
        errors.add("Email already exists")
        errors.add("Username already exists")
        self.assertTrue(errors.has_errors())
        self.assertEqual(len(errors), 2)
        self.assertEqual(
            errors.to_response(),
            {"errors": ["Email already exists", "Username already exists"]},
        )

    def test_response_is_a_copy(self) -> None:
        errors = ErrorAccumulator(["one"])
        payload = errors.to_response()
        payload["errors"].append("two")
        self.assertEqual(errors.messages, ["one"])


class TestAccountErrors(unittest.TestCase):
    """Exceptions carry an accumulator and a status code."""

    def test_string_message_becomes_single_error(self) -> None:
        exc = NotFoundFailure("User not found")
        self.assertEqual(exc.status_code, 404)
        self.assertEqual(exc.errors.messages, ["User not found"])
        self.assertEqual(exc.message, "User not found")

    def test_accumulator_is_kept(self) -> None:
        errors = ErrorAccumulator(["a", "b"])
        exc = ConflictFailure(errors)
        self.assertIs(exc.errors, errors)
        self.assertEqual(exc.status_code, 400)

    def test_default_message(self) -> None:
        self.assertEqual(AuthorizationFailure().errors.messages, ["Bad auth provided."])
        self.assertEqual(ValidationFailure().errors.messages, ["Invalid input"])

    def test_status_codes(self) -> None:
        self.assertEqual(AuthorizationFailure().status_code, 404)
        self.assertEqual(AuthenticationFailure().status_code, 401)
        self.assertEqual(DuplicateRecordFailure().status_code, 400)
        self.assertEqual(PersistenceFailure().status_code, 500)

    def test_retryable_flag(self) -> None:
        self.assertTrue(PersistenceFailure(retryable=True).retryable)
        self.assertFalse(PersistenceFailure().retryable)

    def test_unexpected_classification(self) -> None:
        self.assertTrue(is_unexpected(PersistenceFailure()))
        self.assertTrue(is_unexpected(HashingFailure()))
        self.assertTrue(is_unexpected(SigningFailure()))
        self.assertFalse(is_unexpected(DuplicateRecordFailure()))
        self.assertFalse(is_unexpected(ConflictFailure()))
        self.assertFalse(is_unexpected(AuthenticationFailure()))


if __name__ == "__main__":
    unittest.main()
