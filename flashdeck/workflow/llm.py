from __future__ import annotations

import json
import os
from typing import Any, Optional

from openai import OpenAI

from flashdeck.logging_config import get_logger

logger = get_logger(__name__)


class WordAssistant:
    """Wraps an OpenAI client to produce definitions and word suggestions as strict JSON.

    If no API key is provided, it falls back to a dummy key and remains inactive.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-4o-mini", dummy_key: str = "sk-dummy", client: Any = None) -> None:
        self.api_key = api_key or os.getenv("OPENAI_API_KEY", dummy_key)
        self.model = model
        self.dummy_key = dummy_key
        self._client: Any = client
        if self._client is None and self.api_key and self.api_key != self.dummy_key:
            self._client = OpenAI(api_key=self.api_key)

    @property
    def is_active(self) -> bool:
        return self._client is not None

    def define(self, word: str) -> dict[str, Any]:
        prompt = (
            f'Provide a concise definition and a simple example sentence for the word "{word}". '
            "Respond with strict JSON using the following schema:\n"
            '{"word": "...", "definition": "...", "exampleSentence": "..."}'
        )
        data = self._complete(prompt)
        if not isinstance(data, dict):
            raise RuntimeError("Definition response is not a JSON object.")
        entry = _normalize_entry(data, fallback_word=word)
        if entry is None:
            raise RuntimeError("Definition response is missing word or definition.")
        return entry

    def suggest(self, count: int = 3, theme: str | None = None) -> list[dict[str, Any]]:
        theme_prompt = f' related to the theme "{theme}"' if theme else ""
        prompt = (
            f"Suggest {count} common English words, each with a concise definition and a simple example sentence{theme_prompt}. "
            "Respond with strict JSON using the following schema:\n"
            '{"suggestions": [{"word": "...", "definition": "...", "exampleSentence": "..."}]}'
        )
        data = self._complete(prompt)
        items = data.get("suggestions") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise RuntimeError("Suggestions response has no list of words.")
        suggestions = [entry for entry in (_normalize_entry(item) for item in items) if entry is not None]
        return suggestions[:count]

    def _complete(self, prompt: str) -> Any:
        if not self.is_active:
            raise RuntimeError("LLM client is not configured with a valid API key.")
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                temperature=0.4,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": "You help language learners build vocabulary flashcards."},
                    {"role": "user", "content": prompt},
                ],
            )
        except Exception as exc:
            raise RuntimeError(f"OpenAI request failed: {exc}") from exc
        content = response.choices[0].message.content or ""
        return _extract_json(content)


def _normalize_entry(item: Any, fallback_word: str | None = None) -> dict[str, Any] | None:
    if not isinstance(item, dict):
        return None
    word = str(item.get("word") or fallback_word or "").strip()
    definition = str(item.get("definition") or "").strip()
    if not word or not definition:
        return None
    example = item.get("exampleSentence") or item.get("example_sentence")
    entry: dict[str, Any] = {"word": word, "definition": definition}
    if example:
        entry["exampleSentence"] = str(example).strip()
    return entry


def _extract_json(content: str) -> Any:
    cleaned = content.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        cleaned = "\n".join(lines[1:-1]).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        try:
            start = cleaned.index("{")
            end = cleaned.rindex("}")
            return json.loads(cleaned[start : end + 1])
        except Exception:
            try:
                start = cleaned.index("[")
                end = cleaned.rindex("]")
                return json.loads(cleaned[start : end + 1])
            except Exception:
                logger.warning("Failed to parse JSON content: %s", content)
                return {}


__all__ = ["WordAssistant"]
