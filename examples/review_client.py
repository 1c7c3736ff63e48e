from __future__ import annotations

import argparse
import datetime as dt
import sys
from pathlib import Path

# Ensure repository root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flashdeck.client.assist import WordAssistClient
from flashdeck.client.store import FlashcardStore
from flashdeck.utils.env import load_env
from flashdeck.utils.settings import default_settings
from flashdeck.utils.types import Flashcard, FlashcardDraft
from flashdeck.workflow.sync import Add, Advance, Delete, Load, Review, SyncCoordinator
from flashdeck.workflow.suggestions import SuggestionTray

HELP = """Commands:
  show                      show the current card (word only)
  flip                      reveal definition and example
  y | n                     mark the current card remembered / forgotten
  next | prev               move through the deck
  list                      list all cards in review order
  add WORD | DEFINITION [| EXAMPLE]
  define WORD               generate a definition and add the card
  suggest [THEME]           fetch suggested words
  accept WORD | dismiss WORD
  delete                    delete the current card
  reload                    reload the deck from the store
  clear                     dismiss the last error
  quit"""


def parse_args() -> argparse.Namespace:
    settings = default_settings()
    parser = argparse.ArgumentParser(description="Review vocabulary flashcards against the storage proxy.")
    parser.add_argument("--base-url", default=settings.api_base_url, help="Proxy base URL; defaults to FLASHDECK_API_BASE_URL")
    parser.add_argument("--timeout", type=float, default=settings.request_timeout, help="Per-request timeout in seconds")
    return parser.parse_args()


def format_due(card: Flashcard) -> str:
    if not card.due_date:
        return "due now"
    due = dt.datetime.fromtimestamp(card.due_date / 1000, tz=dt.timezone.utc)
    return f"due {due:%Y-%m-%d %H:%M} UTC"


def print_card(card: Flashcard | None, *, revealed: bool = False) -> None:
    if card is None:
        print("No flashcards yet. Use 'add' or 'suggest' to create some.")
        return
    print(f"\n  {card.word}   ({format_due(card)}, interval {card.interval or 0} d)")
    if revealed:
        print(f"  -> {card.definition}")
        if card.example_sentence:
            print(f'  e.g. "{card.example_sentence}"')


def parse_draft(text: str) -> FlashcardDraft | None:
    parts = [part.strip() for part in text.split("|")]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    example = parts[2] if len(parts) > 2 and parts[2] else None
    return FlashcardDraft(word=parts[0], definition=parts[1], example_sentence=example)


def main() -> int:
    load_env()
    args = parse_args()

    store = FlashcardStore(args.base_url, timeout=args.timeout)
    coordinator = SyncCoordinator(store)
    tray = SuggestionTray(WordAssistClient(args.base_url), coordinator)

    coordinator.dispatch(Load())
    print(f"Loaded {len(coordinator.deck)} cards from {store.base_url}")
    print(HELP)
    print_card(coordinator.current())

    while True:
        if coordinator.last_error:
            print(f"\n[error] {coordinator.last_error}")
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if not line:
            continue
        command, _, rest = line.partition(" ")
        command = command.lower()
        rest = rest.strip()
        current = coordinator.current()

        if command in {"quit", "exit", "q"}:
            return 0
        elif command == "help":
            print(HELP)
        elif command == "show":
            print_card(current)
        elif command == "flip":
            print_card(current, revealed=True)
        elif command in {"y", "n"}:
            if current is None:
                print("Nothing to review.")
                continue
            coordinator.dispatch(Review(current.id, success=command == "y"))
            print_card(coordinator.current())
        elif command in {"next", "prev"}:
            coordinator.dispatch(Advance(1 if command == "next" else -1))
            print_card(coordinator.current())
        elif command == "list":
            for idx, card in enumerate(coordinator.deck):
                marker = "*" if idx == coordinator.deck.cursor else " "
                print(f" {marker} {card.word:<24} {format_due(card)}")
        elif command == "add":
            draft = parse_draft(rest)
            if draft is None:
                print("Usage: add WORD | DEFINITION [| EXAMPLE]")
                continue
            result = coordinator.dispatch(Add(draft))
            if result is not None and result.success:
                print(f"Added '{draft.word}'.")
        elif command == "define":
            if not rest:
                print("Usage: define WORD")
                continue
            generated = tray.assist.define(rest)
            if not generated.success or generated.data is None:
                coordinator.last_error = generated.error
                continue
            draft = generated.data
            print(f"  {draft.word}: {draft.definition}")
            if draft.example_sentence:
                print(f'  e.g. "{draft.example_sentence}"')
            coordinator.dispatch(Add(draft))
        elif command == "suggest":
            result = tray.refresh(5, rest or None)
            for draft in tray.suggestions:
                print(f"  {draft.word}: {draft.definition}")
            if result.success and not tray.suggestions:
                print("No suggestions returned.")
        elif command == "accept":
            if tray.accept(rest) is None:
                print(f"No suggestion named '{rest}'.")
        elif command == "dismiss":
            tray.dismiss(rest)
        elif command == "delete":
            if current is None:
                print("Nothing to delete.")
                continue
            coordinator.dispatch(Delete(current.id))
            print_card(coordinator.current())
        elif command == "reload":
            coordinator.dispatch(Load())
            print(f"Loaded {len(coordinator.deck)} cards.")
        elif command == "clear":
            coordinator.dismiss_error()
        else:
            print(f"Unknown command '{command}'. Type 'help'.")


if __name__ == "__main__":
    sys.exit(main())
