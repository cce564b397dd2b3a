"""Letter-by-letter alignment of a typed attempt against the dictated target.

The alignment is a weighted edit distance. A substitution costs as much as a
missing plus an extra character, so a dropped or doubled letter shows up as a
single ``missing``/``extra`` judgment instead of a run of wrong letters.

Ties between equally cheap predecessors are broken in a fixed order:

1. diagonal, when the characters match
2. up (target character is ``missing``)
3. left (attempt character is ``extra``)
4. diagonal as a substitution

With these costs rule 2 always ties with or beats rule 4, so the raw
backtrack never produces a substitution. ``align`` pairs each adjacent
extra/missing couple back into one ``substituted`` judgment; the total cost
does not change.
"""

import re
import unicodedata

from .config import INSERT_COST, DELETE_COST, SUBSTITUTION_COST
from .models import CharacterJudgment, MISSING, EXTRA

DIAG = 'diag'
UP = 'up'
LEFT = 'left'

_WHITESPACE_RUN = re.compile(r'\s+')


def _fold(text: str) -> str:
    return unicodedata.normalize('NFC', text).casefold()


def is_same_char(a: str, b: str) -> bool:
    """Case-insensitive character comparison."""
    return _fold(a) == _fold(b)


def normalize(value: str) -> str:
    """Lowercase, trim and collapse whitespace runs to a single space."""
    return _WHITESPACE_RUN.sub(' ', _fold(value).strip())


def is_correct_answer(attempt: str, target: str) -> bool:
    return normalize(attempt) == normalize(target)


def _split(attempt: str, target: str) -> tuple[list[str], list[str]]:
    answer_chars = list(unicodedata.normalize('NFC', attempt.strip()))
    target_chars = list(unicodedata.normalize('NFC', target))
    return answer_chars, target_chars


def _build_table(answer_chars: list[str], target_chars: list[str]) -> tuple[list, list]:
    """Fill the cost and predecessor tables. Rows follow the target, columns the attempt."""
    rows = len(target_chars)
    cols = len(answer_chars)
    cost = [[0] * (cols + 1) for _ in range(rows + 1)]
    parent = [[None] * (cols + 1) for _ in range(rows + 1)]

    for i in range(1, rows + 1):
        cost[i][0] = cost[i - 1][0] + DELETE_COST
        parent[i][0] = UP
    for j in range(1, cols + 1):
        cost[0][j] = cost[0][j - 1] + INSERT_COST
        parent[0][j] = LEFT

    for i in range(1, rows + 1):
        expected = target_chars[i - 1]
        for j in range(1, cols + 1):
            same = is_same_char(expected, answer_chars[j - 1])
            diag_cost = cost[i - 1][j - 1] + (0 if same else SUBSTITUTION_COST)
            up_cost = cost[i - 1][j] + DELETE_COST
            left_cost = cost[i][j - 1] + INSERT_COST
            best = min(diag_cost, up_cost, left_cost)
            cost[i][j] = best
            if same and diag_cost == best:
                parent[i][j] = DIAG
            elif up_cost == best:
                parent[i][j] = UP
            elif left_cost == best:
                parent[i][j] = LEFT
            else:
                parent[i][j] = DIAG
    return cost, parent


def _backtrack(answer_chars: list[str], target_chars: list[str], parent: list) -> list[CharacterJudgment]:
    feedback = []
    i = len(target_chars)
    j = len(answer_chars)
    while i > 0 or j > 0:
        step = parent[i][j]
        if step == UP:
            feedback.append(CharacterJudgment.missing(target_chars[i - 1]))
            i -= 1
        elif step == LEFT:
            feedback.append(CharacterJudgment.extra(answer_chars[j - 1]))
            j -= 1
        else:
            expected = target_chars[i - 1]
            actual = answer_chars[j - 1]
            if is_same_char(expected, actual):
                feedback.append(CharacterJudgment.correct(expected, actual))
            else:
                feedback.append(CharacterJudgment.substituted(expected, actual))
            i -= 1
            j -= 1
    feedback.reverse()
    return feedback


def pair_substitutions(judgments: list[CharacterJudgment]) -> list[CharacterJudgment]:
    """Merge each adjacent extra/missing couple (either order) into one substitution."""
    paired = []
    k = 0
    while k < len(judgments):
        current = judgments[k]
        following = judgments[k + 1] if k + 1 < len(judgments) else None
        if following is not None and {current.kind, following.kind} == {MISSING, EXTRA}:
            missing, extra = (current, following) if current.kind == MISSING else (following, current)
            paired.append(CharacterJudgment.substituted(missing.expected_char, extra.actual_char))
            k += 2
            continue
        paired.append(current)
        k += 1
    return paired


def align(attempt: str, target: str, pair: bool = True) -> list[CharacterJudgment]:
    """Align ``attempt`` against ``target`` and judge every position.

    Args:
        attempt: What the user typed. Leading/trailing whitespace is ignored.
        target: The dictated word or phrase.
        pair: Merge adjacent extra/missing couples into substitutions. Pass
            False to get the raw backtrack.

    Returns:
        Judgments in the target's reading order.
    """
    answer_chars, target_chars = _split(attempt, target)
    _, parent = _build_table(answer_chars, target_chars)
    judgments = _backtrack(answer_chars, target_chars, parent)
    if pair:
        judgments = pair_substitutions(judgments)
    return judgments


def edit_cost(attempt: str, target: str) -> int:
    """Minimum total cost, read from the final cell of the cost table."""
    answer_chars, target_chars = _split(attempt, target)
    cost, _ = _build_table(answer_chars, target_chars)
    return cost[-1][-1]


def alignment_cost(judgments: list[CharacterJudgment]) -> int:
    return sum(j.cost for j in judgments)


def render_feedback(judgments: list[CharacterJudgment]) -> str:
    """Compact one-line rendering: ``[x>t]`` substituted, ``(t)`` missing, ``{x}`` extra."""
    parts = []
    for j in judgments:
        if j.kind == MISSING:
            parts.append(f"({j.expected_char})")
        elif j.kind == EXTRA:
            parts.append(f"{{{j.actual_char}}}")
        elif j.expected_char is not None and not is_same_char(j.expected_char, j.actual_char):
            parts.append(f"[{j.actual_char}>{j.expected_char}]")
        else:
            parts.append(j.actual_char)
    return ''.join(parts)
