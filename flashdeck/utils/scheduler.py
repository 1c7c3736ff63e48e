"""
Interval-doubling review scheduler.

A remembered card doubles its interval (first success gives one day), a
forgotten card halves it toward zero, and zero means the card is due again
immediately. This is not SM-2; it only maintains the per-card
`interval`/`dueDate`/`lastReviewedAt` triple on each review event.
"""

from __future__ import annotations

from dataclasses import replace

from flashdeck.utils.types import DAY_MS, Flashcard


def next_interval(interval: float | None, success: bool) -> float:
    current = interval or 0
    if success:
        return max(1, 1 if current == 0 else current * 2)
    return max(0, current / 2)


def next_state(card: Flashcard, success: bool, now: int) -> Flashcard:
    """
    Return the card as it stands after a review at `now` (epoch ms).

    Only `interval`, `due_date` and `last_reviewed_at` change; the input card
    is left untouched.
    """
    interval = next_interval(card.interval, success)
    return replace(
        card,
        interval=interval,
        due_date=now + interval * DAY_MS,
        last_reviewed_at=now,
    )


__all__ = ["next_interval", "next_state"]
