"""Round engine: sequences quiz items, scores attempts and re-drills missed items."""

import logging
import math
import random

from .alignment import align, is_correct_answer
from .config import CELEBRATION_TEXT
from .errors import EmptyPoolError, InvalidRoundConfigError, NoActiveItemError, RoundNotCompleteError
from .interfaces import NarrationSink
from .models import (
    RoundMode, RoundState, MistakeEntry, SubmitResult,
    IDLE, IN_ROUND, ROUND_COMPLETE
)
from .sampling import DrawQueue, base_set

logger = logging.getLogger(__name__)


class RoundEngine:
    """Owns the active round and moves it through idle → in_round → round_complete.

    Not safe for concurrent use; callers serialize calls per instance.
    """

    def __init__(self, rng=None, narrator: NarrationSink | None = None):
        self.rng = rng or random
        self.narrator = narrator
        self.state = None
        self.round_number = 1
        self.total_asked = 0
        self.total_correct = 0
        self._carried_tally = {}

    @property
    def phase(self) -> str:
        if self.state is None:
            return IDLE
        if self.state.complete:
            return ROUND_COMPLETE
        return IN_ROUND

    @property
    def current_item(self) -> str | None:
        return self.state.current_item if self.state else None

    @property
    def mistake_tally(self) -> dict[str, int]:
        """Outstanding mistakes, to be carried into the next round."""
        if self.state is not None:
            return dict(self.state.tally)
        return dict(self._carried_tally)

    @property
    def accuracy(self) -> int:
        """Percentage of all submissions (across rounds) that were correct."""
        if self.total_asked == 0:
            return 0
        return math.floor(100 * self.total_correct / self.total_asked + 0.5)

    def status(self) -> dict:
        """Snapshot for rendering the quiz screen and round summaries."""
        state = self.state
        return {
            'phase': self.phase,
            'round_number': self.round_number,
            'mode': state.mode.to_dict() if state else None,
            'current_item': self.current_item,
            'question_number': state.question_number if state else 0,
            'asked_count': state.asked_count if state else 0,
            'correct_count': state.correct_count if state else 0,
            'remaining_count': state.remaining_count if state else 0,
            'mistakes': [m.to_dict() for m in state.mistakes] if state else [],
            'mistake_tally': self.mistake_tally,
            'total_asked': self.total_asked,
            'total_correct': self.total_correct,
            'accuracy': self.accuracy
        }

    def start_round(self, pool: list[str], mode: RoundMode, prior_tally: dict[str, int] | None = None,
                    shuffle: bool = True) -> RoundState:
        """Start a round over pool.

        Pass an empty prior_tally for a fresh start; pass the previous
        round's tally to keep re-drilling items that are still missed.
        """
        pool = list(pool)
        if not pool:
            raise EmptyPoolError("Cannot start a round without items")
        if not mode.is_until_all_correct and (mode.count is None or mode.count < 1):
            raise InvalidRoundConfigError(f"Question count must be at least 1, got {mode.count}")

        members = set(pool)
        tally = {
            item: count for item, count in (prior_tally or {}).items()
            if count > 0 and item in members
        }
        state = RoundState(
            pool, mode, tally,
            shuffle=shuffle,
            round_number=self.round_number,
            draw_queue=DrawQueue(shuffle, self.rng)
        )
        first = self._draw(state)
        self.state = state
        if first is None:
            self._complete(state)
            return state

        state.current_item = first
        logger.info(f"Round {state.round_number} started: {len(pool)} items, mode={mode!r}, "
                    f"{len(tally)} carried mistakes")
        self._narrate(first)
        return state

    def submit(self, attempt: str) -> SubmitResult:
        """Score attempt against the current item and advance the round."""
        state = self.state
        if state is None or state.current_item is None:
            raise NoActiveItemError("There is no item to answer")

        item = state.current_item
        alignment = align(attempt, item)
        correct = is_correct_answer(attempt, item)

        state.asked_count += 1
        self.total_asked += 1
        if correct:
            state.correct_count += 1
            self.total_correct += 1
            state.tally.pop(item, None)
            state.remaining.pop(item, None)
        else:
            state.tally[item] = state.tally.get(item, 0) + 1
            state.mistakes.append(MistakeEntry(item, attempt.strip(), alignment))

        if self._is_finished(state):
            self._complete(state)
        else:
            next_item = self._draw(state)
            if next_item is None:
                self._complete(state)
            else:
                state.current_item = next_item
                self._narrate(next_item)

        return SubmitResult(
            item=item,
            attempt=attempt.strip(),
            alignment=alignment,
            correct=correct,
            asked_count=state.asked_count,
            correct_count=state.correct_count,
            round_complete=state.complete
        )

    def start_next_round(self) -> RoundState:
        """Start another round over the same pool, carrying the mistake tally."""
        state = self.state
        if state is None or not state.complete:
            raise RoundNotCompleteError("The current round has not finished yet")
        self.round_number += 1
        return self.start_round(state.pool, state.mode, state.tally, state.shuffle)

    def replay(self) -> str:
        """Narrate the current item again."""
        if self.current_item is None:
            raise NoActiveItemError("There is no item to replay")
        self._narrate(self.current_item)
        return self.current_item

    def reset(self) -> None:
        """Drop the active round and go back to idle. The mistake tally is kept."""
        if self.state is not None:
            self._carried_tally = dict(self.state.tally)
        self.state = None

    def _draw(self, state: RoundState) -> str | None:
        base = base_set(state.pool, state.tally, state.remaining, state.mode)
        return state.draw_queue.pop(base)

    def _is_finished(self, state: RoundState) -> bool:
        if state.mode.is_until_all_correct:
            return not state.remaining
        return state.asked_count >= state.mode.count

    def _complete(self, state: RoundState) -> None:
        state.complete = True
        state.current_item = None
        state.draw_queue.clear()
        logger.info(f"Round {state.round_number} complete: {state.correct_count}/{state.asked_count} correct, "
                    f"{len(state.tally)} items still missed")
        self._narrate(CELEBRATION_TEXT)

    def _narrate(self, text: str) -> None:
        if self.narrator is None:
            return
        try:
            self.narrator.speak(text)
        except Exception as e:
            logger.warning(f"Narration failed for {text!r}: {e}")
