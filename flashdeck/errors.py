from __future__ import annotations


class FlashcardError(Exception):
    """Base error for store and assist operations; `kind` tags the failure for callers."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(FlashcardError):
    """Transport failure: no response was received."""

    kind = "network"


class ServerError(FlashcardError):
    """Non-2xx response carrying a body."""

    kind = "server"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(FlashcardError):
    """Client-detectable bad input (blank word/definition, id mismatch)."""

    kind = "validation"


class DecodeError(FlashcardError):
    """A stored or returned record is not valid card JSON."""

    kind = "decode"


__all__ = ["FlashcardError", "NetworkError", "ServerError", "ValidationError", "DecodeError"]
