"""Item selection: which items are candidates for the next draw, and in what order."""

import random

from .models import RoundMode


def shuffle_items(items: list[str], rng=None) -> list[str]:
    """Return a uniformly shuffled copy of items."""
    rng = rng or random
    result = list(items)
    rng.shuffle(result)
    return result


def mistake_items(tally: dict[str, int]) -> list[str]:
    """Items with outstanding mistakes, in the order they were first missed."""
    return [item for item, count in tally.items() if count > 0]


def base_set(pool: list[str], tally: dict[str, int], remaining, mode: RoundMode) -> list[str]:
    """Candidates for the next refill of the draw queue.

    Missed items take strict priority over the rest of the pool. Without
    outstanding mistakes, an until-all-correct round only draws items that
    have not been answered correctly yet.
    """
    missed = mistake_items(tally)
    if missed:
        return missed
    if mode.is_until_all_correct:
        return [item for item in remaining]
    return list(pool)


class DrawQueue:
    """Lookahead buffer that is refilled from a freshly computed base set when it runs dry."""

    def __init__(self, shuffle: bool = True, rng=None):
        self.shuffle = shuffle
        self.rng = rng or random
        self.items = []

    def __len__(self) -> int:
        return len(self.items)

    def pop(self, base: list[str]) -> str | None:
        """Pop the next item, refilling from base first if the queue is empty."""
        if not self.items:
            if not base:
                return None
            self.items = shuffle_items(base, self.rng) if self.shuffle else list(base)
        return self.items.pop(0)

    def clear(self) -> None:
        self.items = []
