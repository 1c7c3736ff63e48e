from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Union

from flashdeck.logging_config import get_logger
from flashdeck.utils.scheduler import next_state
from flashdeck.utils.types import Flashcard, FlashcardDraft, Result, now_ms
from flashdeck.workflow.deck import Deck

logger = get_logger("flashdeck.sync")


class CardStore(Protocol):
    def list_cards(self) -> Result[list[Flashcard]]: ...

    def create(self, draft: FlashcardDraft) -> Result[Flashcard]: ...

    def update(self, card: Flashcard) -> Result[Flashcard]: ...

    def delete(self, card_id: str) -> Result[None]: ...


@dataclass(frozen=True)
class Load:
    pass


@dataclass(frozen=True)
class Add:
    draft: FlashcardDraft


@dataclass(frozen=True)
class Review:
    card_id: str
    success: bool


@dataclass(frozen=True)
class Delete:
    card_id: str


@dataclass(frozen=True)
class Advance:
    step: int = 1


Command = Union[Load, Add, Review, Delete, Advance]


class SyncCoordinator:
    """Sequences store calls and Deck mutations.

    The Deck only ever receives what the store acknowledged: a failed call
    leaves it exactly as it was, and the failure message is kept in
    `last_error` until dismissed or until a later operation succeeds.
    """

    def __init__(self, store: CardStore, deck: Deck | None = None, *, clock: Callable[[], int] = now_ms) -> None:
        self.store = store
        self.deck = deck if deck is not None else Deck()
        self.clock = clock
        self.last_error: str | None = None

    def dispatch(self, command: Command) -> Result | None:
        if isinstance(command, Load):
            return self.load()
        if isinstance(command, Add):
            return self.add(command.draft)
        if isinstance(command, Review):
            return self.review(command.card_id, command.success)
        if isinstance(command, Delete):
            return self.remove(command.card_id)
        if isinstance(command, Advance):
            self.deck.advance(command.step)
            return None
        raise TypeError(f"Unsupported command {command!r}")

    def load(self) -> Result[list[Flashcard]]:
        result = self.store.list_cards()
        if result.success:
            self.deck.replace_all(result.data or [])
            logger.info("Deck loaded | cards=%s", len(self.deck))
        return self._settle(result, "Failed to load flashcards.")

    def add(self, draft: FlashcardDraft) -> Result[Flashcard]:
        result = self.store.create(draft)
        if result.success and result.data is not None:
            self.deck.upsert(result.data)
        return self._settle(result, "Failed to add flashcard.")

    def review(self, card_id: str, success: bool) -> Result[Flashcard] | None:
        card = self.deck.get(card_id)
        if card is None:
            logger.info("Review skipped; card not in deck | id=%s", card_id)
            return None
        reviewed = next_state(card, success, self.clock())
        result = self.store.update(reviewed)
        if result.success and result.data is not None:
            self.deck.upsert(result.data)
            if len(self.deck) > 1:
                self.deck.advance(1)
        return self._settle(result, "Failed to update flashcard review status.")

    def remove(self, card_id: str) -> Result[None]:
        result = self.store.delete(card_id)
        if result.success:
            self.deck.remove(card_id)
        return self._settle(result, "Failed to delete flashcard.")

    def next(self) -> Flashcard | None:
        self.deck.advance(1)
        return self.deck.current()

    def previous(self) -> Flashcard | None:
        self.deck.advance(-1)
        return self.deck.current()

    def current(self) -> Flashcard | None:
        return self.deck.current()

    def dismiss_error(self) -> None:
        self.last_error = None

    def _settle(self, result: Result, fallback: str) -> Result:
        if result.success:
            self.last_error = None
        else:
            self.last_error = result.error or fallback
        return result


__all__ = ["Add", "Advance", "CardStore", "Command", "Delete", "Load", "Review", "SyncCoordinator"]
