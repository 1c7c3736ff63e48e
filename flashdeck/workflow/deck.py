from __future__ import annotations

from typing import Iterable, Iterator

from flashdeck.utils.types import Flashcard


class Deck:
    """In-memory working set of cards ordered by due date, with a review cursor.

    Pure state container: no I/O. Ordering is a stable sort on `due_date`
    (missing sorts as 0), so cards with equal due dates keep their relative
    order from the listing or from earlier upserts.
    """

    def __init__(self, cards: Iterable[Flashcard] | None = None) -> None:
        self._cards: list[Flashcard] = []
        self._cursor: int | None = None
        if cards is not None:
            self.replace_all(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Flashcard]:
        return iter(list(self._cards))

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def cards(self) -> list[Flashcard]:
        return list(self._cards)

    def get(self, card_id: str) -> Flashcard | None:
        idx = self._index_of(card_id)
        return self._cards[idx] if idx is not None else None

    def replace_all(self, cards: Iterable[Flashcard]) -> None:
        self._cards = self._sorted(cards)
        self._clamp_cursor()

    def upsert(self, card: Flashcard) -> None:
        idx = self._index_of(card.id)
        if idx is None:
            self._cards.append(card)
        else:
            self._cards[idx] = card
        self._cards = self._sorted(self._cards)
        self._clamp_cursor()

    def remove(self, card_id: str) -> Flashcard | None:
        idx = self._index_of(card_id)
        if idx is None:
            return None
        removed = self._cards.pop(idx)
        if self._cursor is not None and idx <= self._cursor:
            self._clamp_cursor()
        elif not self._cards:
            self._cursor = None
        return removed

    def advance(self, step: int = 1) -> None:
        if len(self._cards) <= 1:
            return
        self._cursor = ((self._cursor or 0) + step) % len(self._cards)

    def current(self) -> Flashcard | None:
        if not self._cards or self._cursor is None:
            return None
        return self._cards[self._cursor]

    def _index_of(self, card_id: str) -> int | None:
        for idx, card in enumerate(self._cards):
            if card.id == card_id:
                return idx
        return None

    def _clamp_cursor(self) -> None:
        if not self._cards:
            self._cursor = None
        elif self._cursor is None:
            self._cursor = 0
        else:
            self._cursor = min(max(self._cursor, 0), len(self._cards) - 1)

    @staticmethod
    def _sorted(cards: Iterable[Flashcard]) -> list[Flashcard]:
        return sorted(cards, key=lambda card: card.sort_key)


__all__ = ["Deck"]
