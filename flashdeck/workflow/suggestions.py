from __future__ import annotations

from flashdeck.client.assist import WordAssistClient
from flashdeck.logging_config import get_logger
from flashdeck.utils.types import Flashcard, FlashcardDraft, Result
from flashdeck.workflow.sync import SyncCoordinator

logger = get_logger("flashdeck.suggestions")


class SuggestionTray:
    """Suggested words awaiting the user's decision; accepted words become cards."""

    def __init__(self, assist: WordAssistClient, coordinator: SyncCoordinator) -> None:
        self.assist = assist
        self.coordinator = coordinator
        self.suggestions: list[FlashcardDraft] = []

    def refresh(self, count: int = 5, theme: str | None = None) -> Result[list[FlashcardDraft]]:
        self.suggestions = []
        result = self.assist.suggest(count, theme)
        if result.success:
            self.suggestions = list(result.data or [])
            self.coordinator.last_error = None
        else:
            self.coordinator.last_error = result.error or "Failed to fetch word suggestions."
        return result

    def accept(self, word: str) -> Result[Flashcard] | None:
        draft = self._find(word)
        if draft is None:
            return None
        result = self.coordinator.add(draft)
        if result.success:
            self.dismiss(word)
        return result

    def dismiss(self, word: str) -> None:
        self.suggestions = [s for s in self.suggestions if s.word != word]

    def _find(self, word: str) -> FlashcardDraft | None:
        for draft in self.suggestions:
            if draft.word == word:
                return draft
        logger.info("Suggestion not found | word=%s", word)
        return None


__all__ = ["SuggestionTray"]
