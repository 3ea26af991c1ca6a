"""
Error taxonomy for the AI client.

Every failure that reaches a caller carries a stable name/message/type triple
so CLIs and reporters can print a one-line explanation.
"""

from typing import Literal


ErrorType = Literal[
    "unsafe-content-detected",
    "token-limit-exceeded",
    "unknown",
    "max-turns-reached",
    "max-retries-reached",
    "auth-error",
    "parse-error",
    "transient",
]

RETRYABLE_TYPES: frozenset[str] = frozenset({"parse-error", "transient"})


class AIError(Exception):
    """Raised when a conversation with the model fails."""

    def __init__(self, type: ErrorType, message: str):
        super().__init__(message)
        self.type = type
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def retryable(self) -> bool:
        return self.type in RETRYABLE_TYPES

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.name}(type={self.type!r}, message={self.message!r})"


class ParseError(AIError):
    """Raised when the model's final answer cannot be parsed or validated."""

    def __init__(self, message: str):
        super().__init__("parse-error", message)


def status_code_of(error: BaseException) -> int | None:
    """Return the HTTP status attached to a provider error, if any."""
    for attr in ("status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    return None


def as_ai_error(error: BaseException) -> AIError:
    """
    Normalize any exception into an AIError.

    Args:
        error: Exception raised while running an action

    Returns:
        The error itself if it already is an AIError, otherwise a new one
        with the original message and a classified type
    """
    if isinstance(error, AIError):
        return error

    message = str(error) or type(error).__name__
    if status_code_of(error) == 401:
        converted = AIError("auth-error", message)
    else:
        converted = AIError("transient", message)
    converted.__cause__ = error
    return converted
