from flashdeck.utils.types import Flashcard, FlashcardDraft, Result
from flashdeck.utils.scheduler import next_state
from flashdeck.client.store import FlashcardStore
from flashdeck.workflow.deck import Deck
from flashdeck.workflow.sync import SyncCoordinator

__all__ = [
    "Flashcard",
    "FlashcardDraft",
    "Result",
    "next_state",
    "FlashcardStore",
    "Deck",
    "SyncCoordinator",
]
