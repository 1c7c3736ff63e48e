from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from flashdeck.errors import DecodeError, FlashcardError

T = TypeVar("T")

DAY_MS = 86_400_000


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"Flashcard field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"Flashcard field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_number(data: dict, key: str) -> float | int | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; a boolean timestamp is a corrupt record.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Flashcard field '{key}' must be a number, got {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise DecodeError(f"Flashcard field '{key}' must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class FlashcardDraft:
    """Client submission for a new card; identity and schedule are assigned by the store."""

    word: str
    definition: str
    example_sentence: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "FlashcardDraft":
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object for a draft, got {type(data).__name__}")
        return cls(
            word=_require_str(data, "word"),
            definition=_require_str(data, "definition"),
            example_sentence=_optional_str(data, "exampleSentence"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"word": self.word, "definition": self.definition}
        if self.example_sentence is not None:
            payload["exampleSentence"] = self.example_sentence
        return payload


@dataclass(frozen=True)
class Flashcard:
    id: str
    word: str
    definition: str
    created_at: int
    example_sentence: str | None = None
    last_reviewed_at: int | None = None
    due_date: float | None = None
    interval: float | None = None

    @property
    def sort_key(self) -> float:
        # Cards without a due date are the most overdue.
        return self.due_date or 0

    @classmethod
    def from_dict(cls, data: Any) -> "Flashcard":
        """Build a card from its camelCase JSON object; raise DecodeError on malformed input."""
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object for a flashcard, got {type(data).__name__}")
        created_at = _optional_number(data, "createdAt")
        return cls(
            id=_require_str(data, "id"),
            word=_require_str(data, "word"),
            definition=_require_str(data, "definition"),
            created_at=int(created_at) if created_at is not None else 0,
            example_sentence=_optional_str(data, "exampleSentence"),
            last_reviewed_at=_optional_number(data, "lastReviewedAt"),
            due_date=_optional_number(data, "dueDate"),
            interval=_optional_number(data, "interval"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "word": self.word,
            "definition": self.definition,
            "createdAt": self.created_at,
        }
        optional = {
            "exampleSentence": self.example_sentence,
            "lastReviewedAt": self.last_reviewed_at,
            "dueDate": self.due_date,
            "interval": self.interval,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


@dataclass(frozen=True)
class Result(Generic[T]):
    """Tagged outcome of a store or assist call: a payload on success, a message on failure."""

    success: bool
    data: T | None = None
    error: str | None = None
    kind: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: FlashcardError) -> "Result[T]":
        return cls(success=False, error=exc.message, kind=exc.kind)


__all__ = ["DAY_MS", "Flashcard", "FlashcardDraft", "Result", "now_ms"]
