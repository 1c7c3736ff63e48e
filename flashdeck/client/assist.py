from __future__ import annotations

from typing import List

import requests

from flashdeck.client.http import decode_json, raise_for_status, send_request
from flashdeck.errors import DecodeError, FlashcardError, ValidationError
from flashdeck.logging_config import get_logger
from flashdeck.utils.net import ASSIST_DEFINITION_PATH, ASSIST_SUGGESTIONS_PATH, assist_url, normalize_base_url
from flashdeck.utils.settings import default_settings
from flashdeck.utils.types import FlashcardDraft, Result

logger = get_logger("flashdeck.assist.client")


class WordAssistClient:
    """Client for the proxy's generated-definition and word-suggestion endpoints."""

    def __init__(self, base_url: str | None = None, *, session: requests.Session | None = None, timeout: float | None = None) -> None:
        settings = default_settings()
        self.base_url = normalize_base_url(base_url or settings.api_base_url)
        # Generation is slower than a key-value round trip.
        self.timeout = timeout if timeout is not None else max(settings.request_timeout, 60.0)
        self.session = session or requests.Session()

    def define(self, word: str) -> Result[FlashcardDraft]:
        action = "generate definition"
        try:
            if not (word or "").strip():
                raise ValidationError("word is required")
            response = send_request(
                self.session,
                "POST",
                assist_url(self.base_url, ASSIST_DEFINITION_PATH),
                timeout=self.timeout,
                json={"word": word.strip()},
            )
            raise_for_status(response, action)
            return Result.ok(FlashcardDraft.from_dict(decode_json(response, action)))
        except FlashcardError as exc:
            logger.warning("Error generating definition | word=%s: %s", word, exc.message)
            return Result.fail(exc)

    def suggest(self, count: int = 3, theme: str | None = None) -> Result[List[FlashcardDraft]]:
        action = "fetch word suggestions"
        try:
            body: dict = {"count": count}
            if theme and theme.strip():
                body["theme"] = theme.strip()
            response = send_request(
                self.session,
                "POST",
                assist_url(self.base_url, ASSIST_SUGGESTIONS_PATH),
                timeout=self.timeout,
                json=body,
            )
            raise_for_status(response, action)
            payload = decode_json(response, action)
            items = payload.get("suggestions") if isinstance(payload, dict) else None
            if not isinstance(items, list):
                raise DecodeError(f"Failed to {action}: response has no suggestions list")
            drafts: list[FlashcardDraft] = []
            for item in items:
                try:
                    drafts.append(FlashcardDraft.from_dict(item))
                except DecodeError as exc:
                    logger.warning("Skipping malformed suggestion: %s", exc.message)
            return Result.ok(drafts)
        except FlashcardError as exc:
            logger.warning("Error fetching suggestions | theme=%s: %s", theme, exc.message)
            return Result.fail(exc)


__all__ = ["WordAssistClient"]
