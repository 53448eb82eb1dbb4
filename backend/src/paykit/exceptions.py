"""Exception hierarchy for invoice pricing errors."""
from typing import Any


class ErrorType:
    """Machine-readable error types."""

    GENERAL_UNKNOWN = "general_unknown"
    INVALID_INPUT = "invalid_input"
    INVALID_STATE_TRANSITION = "invalid_state_transition"


class PayError(Exception):
    """
    Base error for the library.

    Carries a machine-readable type, an HTTP-like status code and a metadata
    dict so adapters can translate it into their own error responses.
    """

    default_type = ErrorType.GENERAL_UNKNOWN
    default_code = 500

    def __init__(
        self,
        message: str | None = None,
        type: str | None = None,
        code: int | None = None,
        metadata: dict[str, Any] | None = None,
    ):
        self.message = message or "Unknown error"
        self.type = type or self.default_type
        self.code = code if code is not None else self.default_code
        self.metadata = metadata or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for logging or API responses."""
        return {
            "type": self.type,
            "message": self.message,
            "code": self.code,
            "metadata": self.metadata,
        }


class InvalidInput(PayError, ValueError):
    """Malformed construction or setter argument. Never retried."""

    default_type = ErrorType.INVALID_INPUT
    default_code = 400


class InvalidStateTransition(PayError):
    """Requested status change is not allowed by the invoice transition table."""

    default_type = ErrorType.INVALID_STATE_TRANSITION
    default_code = 409
