"""Error accumulator and the account error taxonomy.

Every failure leaves the API in the same shape, ``{"errors": [...]}``, so the
exceptions below all carry an ``ErrorAccumulator`` and an HTTP status code.
"""

from typing import Any


class ErrorAccumulator:
    """Ordered list of human-readable error messages for one request."""

    def __init__(self, messages: list[str] | None = None) -> None:
        self.messages: list[str] = list(messages or [])

    def add(self, message: str) -> None:
        self.messages.append(message)

    def has_errors(self) -> bool:
        return len(self.messages) > 0

    def to_response(self) -> dict[str, Any]:
        """Render as the public error payload; same shape for zero, one or many messages."""
        return {"errors": list(self.messages)}

    def __len__(self) -> int:
        return len(self.messages)

    def __repr__(self) -> str:
        return f"ErrorAccumulator({self.messages!r})"


class AccountError(Exception):
    """Base for every failure raised by the account workflow."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, errors: ErrorAccumulator | str | None = None) -> None:
        if isinstance(errors, ErrorAccumulator):
            self.errors = errors
        else:
            self.errors = ErrorAccumulator([errors or self.default_message])
        self.message = "; ".join(self.errors.messages)
        super().__init__(self.message)


class ValidationFailure(AccountError):
    """Malformed or missing input fields."""

    default_message = "Invalid input"


class ConflictFailure(AccountError):
    """Email and/or username already taken by another user."""

    default_message = "Resource already exists"


class CredentialFailure(AccountError):
    """Unknown email or wrong password at login."""

    default_message = "Invalid credentials"


class NotFoundFailure(AccountError):
    status_code = 404
    default_message = "User not found"


class AuthorizationFailure(AccountError):
    """Authenticated caller acting on someone else's resource."""

    status_code = 404
    default_message = "Bad auth provided."


class AuthenticationFailure(AuthorizationFailure):
    """Missing, invalid, expired or stale bearer token."""

    status_code = 401
    default_message = "Not authenticated"


class PersistenceFailure(AccountError):
    """Store unreachable or write rejected. Details are logged, never returned."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(
        self,
        errors: ErrorAccumulator | str | None = None,
        retryable: bool = False,
    ) -> None:
        self.retryable = retryable
        super().__init__(errors)


class DuplicateRecordFailure(PersistenceFailure):
    """Unique index rejected a write that passed the application-level lookups."""

    status_code = 400
    default_message = "Email or username already exists"


class HashingFailure(AccountError):
    status_code = 500
    default_message = "Internal server error"


class SigningFailure(AccountError):
    status_code = 500
    default_message = "Internal server error"


# Failures whose message is internal detail; clients see a generic error instead.
UNEXPECTED_FAILURES: tuple[type[AccountError], ...] = (
    HashingFailure,
    SigningFailure,
)


def is_unexpected(exc: AccountError) -> bool:
    """True for failures rendered as a generic 500 (not user-correctable)."""
    if isinstance(exc, DuplicateRecordFailure):
        return False
    return isinstance(exc, PersistenceFailure) or isinstance(exc, UNEXPECTED_FAILURES)
