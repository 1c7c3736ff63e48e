from __future__ import annotations

from typing import Any, List

import requests

from flashdeck.client.http import decode_json, raise_for_status, send_request
from flashdeck.errors import DecodeError, FlashcardError, ValidationError
from flashdeck.logging_config import get_logger
from flashdeck.utils.net import flashcards_url, normalize_base_url
from flashdeck.utils.settings import default_settings
from flashdeck.utils.types import Flashcard, FlashcardDraft, Result

logger = get_logger("flashdeck.store")


class FlashcardStore:
    """Typed CRUD over the `/api/flashcards` surface of the storage proxy.

    Every operation returns a `Result`; store errors never propagate as
    exceptions. Updates are full replacements with last-write-wins semantics.
    """

    def __init__(self, base_url: str | None = None, *, session: requests.Session | None = None, timeout: float | None = None) -> None:
        settings = default_settings()
        self.base_url = normalize_base_url(base_url or settings.api_base_url)
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()

    def list_cards(self) -> Result[List[Flashcard]]:
        action = "fetch flashcards"
        try:
            response = send_request(self.session, "GET", flashcards_url(self.base_url), timeout=self.timeout)
            raise_for_status(response, action)
            payload = decode_json(response, action)
            if not isinstance(payload, list):
                raise DecodeError(f"Failed to {action}: expected a JSON array, got {type(payload).__name__}")
            return Result.ok(self._decode_cards(payload))
        except FlashcardError as exc:
            logger.warning("Error fetching flashcards: %s", exc.message)
            return Result.fail(exc)

    def create(self, draft: FlashcardDraft) -> Result[Flashcard]:
        action = "add flashcard"
        try:
            if not draft.word.strip() or not draft.definition.strip():
                raise ValidationError("Word and definition are required.")
            response = send_request(
                self.session,
                "POST",
                flashcards_url(self.base_url),
                timeout=self.timeout,
                json=draft.to_dict(),
            )
            raise_for_status(response, action)
            card = Flashcard.from_dict(decode_json(response, action))
            logger.info("Flashcard created | id=%s word=%s", card.id, card.word)
            return Result.ok(card)
        except FlashcardError as exc:
            logger.warning("Error adding flashcard: %s", exc.message)
            return Result.fail(exc)

    def update(self, card: Flashcard) -> Result[Flashcard]:
        action = "update flashcard"
        try:
            if not card.id or not card.id.strip():
                raise ValidationError("Flashcard ID is missing.")
            if not card.word.strip() or not card.definition.strip():
                raise ValidationError("Word and definition are required.")
            response = send_request(
                self.session,
                "PUT",
                flashcards_url(self.base_url, card.id),
                timeout=self.timeout,
                json=card.to_dict(),
            )
            raise_for_status(response, action)
            return Result.ok(Flashcard.from_dict(decode_json(response, action)))
        except FlashcardError as exc:
            logger.warning("Error updating flashcard | id=%s: %s", card.id, exc.message)
            return Result.fail(exc)

    def delete(self, card_id: str) -> Result[None]:
        action = "delete flashcard"
        try:
            if not card_id or not card_id.strip():
                raise ValidationError("Flashcard ID is missing.")
            response = send_request(self.session, "DELETE", flashcards_url(self.base_url, card_id), timeout=self.timeout)
            if response.status_code == 404:
                logger.info("Flashcard already absent | id=%s", card_id)
                return Result.ok(None)
            raise_for_status(response, action)
            return Result.ok(None)
        except FlashcardError as exc:
            logger.warning("Error deleting flashcard | id=%s: %s", card_id, exc.message)
            return Result.fail(exc)

    @staticmethod
    def _decode_cards(items: list[Any]) -> list[Flashcard]:
        cards: list[Flashcard] = []
        for idx, item in enumerate(items):
            try:
                cards.append(Flashcard.from_dict(item))
            except DecodeError as exc:
                logger.warning("Skipping undecodable flashcard | index=%s: %s", idx, exc.message)
        return cards


__all__ = ["FlashcardStore"]
