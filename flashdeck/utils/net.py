from __future__ import annotations

from urllib.parse import quote

FLASHCARDS_PATH = "/api/flashcards"
ASSIST_DEFINITION_PATH = "/api/assist/definition"
ASSIST_SUGGESTIONS_PATH = "/api/assist/suggestions"


def normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/")


def flashcards_url(base_url: str, card_id: str | None = None) -> str:
    url = f"{normalize_base_url(base_url)}{FLASHCARDS_PATH}"
    if card_id is None:
        return url
    return f"{url}/{quote(card_id, safe='')}"


def assist_url(base_url: str, path: str) -> str:
    return f"{normalize_base_url(base_url)}{path}"
