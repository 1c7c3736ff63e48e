from __future__ import annotations

import json
import uuid

from redis.asyncio import Redis

from flashdeck.errors import DecodeError
from flashdeck.logging_config import get_logger
from flashdeck.utils.types import Flashcard, FlashcardDraft

logger = get_logger(__name__)

_client: Redis | None = None


def get_redis_client(redis_url: str) -> Redis:
    """Return a shared asyncio Redis client for the flashcard namespace."""
    global _client
    if _client is None:
        _client = Redis.from_url(redis_url, decode_responses=True)
    return _client


class KeyValueFlashcards:
    """Flashcard records kept as JSON strings under `<prefix>:<id>` keys.

    There is no check-and-set: `put` overwrites whatever is stored, so
    concurrent writers to one card resolve as last write wins.
    """

    def __init__(self, redis_client: Redis, prefix: str = "flashcards") -> None:
        self._redis = redis_client
        self.prefix = prefix

    def key(self, card_id: str) -> str:
        return f"{self.prefix}:{card_id}"

    async def list_cards(self) -> list[Flashcard]:
        cards: list[Flashcard] = []
        async for key in self._redis.scan_iter(match=f"{self.prefix}:*"):
            raw = await self._redis.get(key)
            if raw is None:
                # Deleted between scan and get.
                continue
            try:
                cards.append(self._decode(raw))
            except DecodeError as exc:
                logger.warning("Skipping corrupt flashcard record | key=%s: %s", key, exc.message)
        return cards

    async def get(self, card_id: str) -> Flashcard | None:
        raw = await self._redis.get(self.key(card_id))
        if raw is None:
            return None
        return self._decode(raw)

    async def create(self, draft: FlashcardDraft, now: int) -> Flashcard:
        card = Flashcard(
            id=str(uuid.uuid4()),
            word=draft.word,
            definition=draft.definition,
            example_sentence=draft.example_sentence,
            created_at=now,
            due_date=now,
            interval=0,
        )
        await self.put(card)
        return card

    async def put(self, card: Flashcard) -> Flashcard:
        await self._redis.set(self.key(card.id), json.dumps(card.to_dict(), separators=(",", ":")))
        return card

    async def delete(self, card_id: str) -> None:
        await self._redis.delete(self.key(card_id))

    @staticmethod
    def _decode(raw: str) -> Flashcard:
        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"stored value is not JSON: {exc}") from exc
        return Flashcard.from_dict(data)


__all__ = ["KeyValueFlashcards", "get_redis_client"]
