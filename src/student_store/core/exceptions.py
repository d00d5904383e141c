"""Error taxonomy shared by services and HTTP handlers.

Every error the API reports to a client is a ``StudentStoreError``. The HTTP
layer renders them as ``{"message": ..., "error": ...}`` with the matching
status code.
"""

from typing import Any


class StudentStoreError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    error_code: str = "internal_error"
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, detail: Any = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message, "error": self.error_code}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class InputValidationError(StudentStoreError):
    """Malformed or missing request fields."""

    status_code = 400
    error_code = "validation_error"
    default_message = "Invalid request"


class RecordNotFoundError(StudentStoreError):
    """The addressed record does not exist."""

    status_code = 404
    error_code = "not_found"
    default_message = "Record not found"


class AuthenticationFailedError(StudentStoreError):
    """Login credentials did not match any student."""

    status_code = 401
    error_code = "auth_failed"
    default_message = "Wrong email or password"


class StoreError(StudentStoreError):
    """The store rejected or failed to execute a statement."""

    status_code = 500
    error_code = "store_error"
    default_message = "Store error"


class StoreUnavailableError(StoreError):
    """The store could not be reached."""

    status_code = 502
    error_code = "store_unavailable"
    default_message = "Store unavailable"
