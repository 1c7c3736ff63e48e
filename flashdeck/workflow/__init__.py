from .deck import Deck
from .sync import Add, Advance, Delete, Load, Review, SyncCoordinator
from .suggestions import SuggestionTray

__all__ = ["Deck", "SyncCoordinator", "SuggestionTray", "Load", "Add", "Review", "Delete", "Advance"]
