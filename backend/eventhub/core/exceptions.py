"""
Domain errors raised by the security helpers and the stores.

Route handlers translate these into HTTP responses with fixed messages;
the exception text itself never reaches the client.
"""

from typing import Optional, Sequence


class EventhubError(Exception):
    """Base class for all domain errors."""


class ValidationError(EventhubError):
    """Input failed schema or required-field checks."""

    def __init__(self, message: str, fields: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class InvalidTokenError(EventhubError):
    """Bearer token is malformed, tampered with, expired or uses the wrong algorithm."""

    def __init__(self) -> None:
        super().__init__("invalid token")


class InvalidCredentialsError(EventhubError):
    def __init__(self) -> None:
        super().__init__("invalid credentials")


class NotFoundError(EventhubError):
    pass


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: int):
        super().__init__(f"event {event_id} not found")
        self.event_id = event_id


class StoreError(EventhubError):
    """Any persistence failure, including constraint violations."""


class DuplicateEmailError(StoreError):
    def __init__(self, email: str):
        super().__init__("email already registered")
        self.email = email


class ForeignKeyViolationError(StoreError):
    pass


class DuplicateRegistrationError(StoreError):
    def __init__(self, event_id: int, user_id: int):
        super().__init__(f"user {user_id} already registered for event {event_id}")
        self.event_id = event_id
        self.user_id = user_id
