"""Domain models for dictee application."""

from .config import INSERT_COST, DELETE_COST, SUBSTITUTION_COST

CORRECT = 'correct'
SUBSTITUTED = 'substituted'
MISSING = 'missing'
EXTRA = 'extra'

JUDGMENT_KINDS = (CORRECT, SUBSTITUTED, MISSING, EXTRA)

JUDGMENT_COSTS = {
    CORRECT: 0,
    SUBSTITUTED: SUBSTITUTION_COST,
    MISSING: DELETE_COST,
    EXTRA: INSERT_COST,
}

FIXED_COUNT = 'fixed_count'
UNTIL_ALL_CORRECT = 'until_all_correct'

# Engine phases
IDLE = 'idle'
IN_ROUND = 'in_round'
ROUND_COMPLETE = 'round_complete'


class CharacterJudgment:
    """One aligned position: what was expected, what was typed, and the verdict."""

    __slots__ = ('expected_char', 'actual_char', 'kind')

    def __init__(self, kind: str, expected_char: str | None = None, actual_char: str | None = None):
        if kind not in JUDGMENT_KINDS:
            raise ValueError(f"Unknown judgment kind: {kind!r}")
        if kind == MISSING and (expected_char is None or actual_char is not None):
            raise ValueError("A missing judgment has an expected character only")
        if kind == EXTRA and (actual_char is None or expected_char is not None):
            raise ValueError("An extra judgment has an actual character only")
        if kind in (CORRECT, SUBSTITUTED) and (expected_char is None or actual_char is None):
            raise ValueError(f"A {kind} judgment needs both characters")
        self.kind = kind
        self.expected_char = expected_char
        self.actual_char = actual_char

    @classmethod
    def correct(cls, expected_char: str, actual_char: str) -> 'CharacterJudgment':
        return cls(CORRECT, expected_char, actual_char)

    @classmethod
    def substituted(cls, expected_char: str, actual_char: str) -> 'CharacterJudgment':
        return cls(SUBSTITUTED, expected_char, actual_char)

    @classmethod
    def missing(cls, expected_char: str) -> 'CharacterJudgment':
        return cls(MISSING, expected_char=expected_char)

    @classmethod
    def extra(cls, actual_char: str) -> 'CharacterJudgment':
        return cls(EXTRA, actual_char=actual_char)

    @property
    def cost(self) -> int:
        return JUDGMENT_COSTS[self.kind]

    def to_dict(self) -> dict:
        return {
            'kind': self.kind,
            'expected': self.expected_char,
            'actual': self.actual_char
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CharacterJudgment':
        return cls(data['kind'], data.get('expected'), data.get('actual'))

    def __eq__(self, other) -> bool:
        if not isinstance(other, CharacterJudgment):
            return NotImplemented
        return (self.kind, self.expected_char, self.actual_char) == \
            (other.kind, other.expected_char, other.actual_char)

    def __hash__(self) -> int:
        return hash((self.kind, self.expected_char, self.actual_char))

    def __repr__(self) -> str:
        return f"CharacterJudgment({self.kind!r}, expected={self.expected_char!r}, actual={self.actual_char!r})"


class RoundMode:
    """How a round ends: after a fixed number of questions, or once every item was right once."""

    def __init__(self, kind: str, count: int | None = None):
        if kind not in (FIXED_COUNT, UNTIL_ALL_CORRECT):
            raise ValueError(f"Unknown round mode: {kind!r}")
        self.kind = kind
        self.count = count if kind == FIXED_COUNT else None

    @classmethod
    def fixed_count(cls, count: int) -> 'RoundMode':
        return cls(FIXED_COUNT, count)

    @classmethod
    def until_all_correct(cls) -> 'RoundMode':
        return cls(UNTIL_ALL_CORRECT)

    @property
    def is_until_all_correct(self) -> bool:
        return self.kind == UNTIL_ALL_CORRECT

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'count': self.count}

    @classmethod
    def from_dict(cls, data: dict) -> 'RoundMode':
        return cls(data['kind'], data.get('count'))

    def __eq__(self, other) -> bool:
        if not isinstance(other, RoundMode):
            return NotImplemented
        return (self.kind, self.count) == (other.kind, other.count)

    def __repr__(self) -> str:
        if self.kind == FIXED_COUNT:
            return f"RoundMode.fixed_count({self.count})"
        return "RoundMode.until_all_correct()"


class MistakeEntry:
    """An incorrect submission kept in the round's mistake log."""

    def __init__(self, item: str, attempt: str, alignment: list[CharacterJudgment]):
        self.item = item
        self.attempt = attempt
        self.alignment = alignment

    def to_dict(self) -> dict:
        return {
            'item': self.item,
            'attempt': self.attempt,
            'alignment': [j.to_dict() for j in self.alignment]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MistakeEntry':
        return cls(
            data['item'],
            data['attempt'],
            [CharacterJudgment.from_dict(j) for j in data.get('alignment', [])]
        )


class SubmitResult:
    """Outcome of one submission as handed back to the caller."""

    def __init__(self, item: str, attempt: str, alignment: list[CharacterJudgment], correct: bool,
                 asked_count: int, correct_count: int, round_complete: bool):
        self.item = item
        self.attempt = attempt
        self.alignment = alignment
        self.correct = correct
        self.asked_count = asked_count
        self.correct_count = correct_count
        self.round_complete = round_complete

    def to_dict(self) -> dict:
        return {
            'item': self.item,
            'attempt': self.attempt,
            'alignment': [j.to_dict() for j in self.alignment],
            'correct': self.correct,
            'asked_count': self.asked_count,
            'correct_count': self.correct_count,
            'round_complete': self.round_complete
        }


class RoundState:
    """Mutable state of the active round. Only the round engine writes to it."""

    def __init__(self, pool: list[str], mode: RoundMode, tally: dict[str, int],
                 shuffle: bool = True, round_number: int = 1, draw_queue=None):
        self.pool = list(pool)
        self.mode = mode
        self.shuffle = shuffle
        self.tally = tally
        self.round_number = round_number
        self.draw_queue = draw_queue
        # Pool order is kept so non-random lists stay in their natural order
        self.remaining = dict.fromkeys(self.pool) if mode.is_until_all_correct else {}
        self.current_item = None
        self.asked_count = 0
        self.correct_count = 0
        self.mistakes = []
        self.complete = False

    @property
    def remaining_count(self) -> int:
        return len(self.remaining)

    @property
    def question_number(self) -> int:
        """1-based number of the question being asked (or last asked once complete)."""
        if self.complete:
            return self.asked_count
        return self.asked_count + (1 if self.current_item is not None else 0)

    def to_dict(self) -> dict:
        return {
            'pool': list(self.pool),
            'mode': self.mode.to_dict(),
            'shuffle': self.shuffle,
            'tally': dict(self.tally),
            'round_number': self.round_number,
            'draw_queue': list(self.draw_queue.items) if self.draw_queue is not None else [],
            'remaining': list(self.remaining),
            'current_item': self.current_item,
            'asked_count': self.asked_count,
            'correct_count': self.correct_count,
            'question_number': self.question_number,
            'mistakes': [m.to_dict() for m in self.mistakes],
            'complete': self.complete
        }


class WordList:
    """A word/phrase list as supplied by the list catalog."""

    def __init__(self, entries: list[str], random: bool = True, gif_url: str | None = None):
        self.entries = list(entries)
        self.random = random
        self.gif_url = gif_url

    def to_dict(self) -> dict:
        data = {'entries': list(self.entries), 'random': self.random}
        if self.gif_url:
            data['gifUrl'] = self.gif_url
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'WordList':
        return cls(
            data.get('entries', []),
            data.get('random', True),
            data.get('gifUrl') or data.get('gif_url')
        )
