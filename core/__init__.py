from .models import CharacterJudgment, RoundMode, RoundState, MistakeEntry, SubmitResult, WordList
from .alignment import align, edit_cost, alignment_cost, normalize, is_correct_answer
from .engine import RoundEngine
from .errors import (
    DicteeError, EmptyPoolError, NoActiveItemError, RoundNotCompleteError,
    InvalidRoundConfigError, ListValidationError, ListNotFoundError
)
from .interfaces import ListStorage, NarrationSink
from .utils import parse_entries
from .wordlists import WordListCatalog, WORD_LISTS

__all__ = [
    'CharacterJudgment', 'RoundMode', 'RoundState', 'MistakeEntry', 'SubmitResult', 'WordList',
    'align', 'edit_cost', 'alignment_cost', 'normalize', 'is_correct_answer',
    'RoundEngine',
    'DicteeError', 'EmptyPoolError', 'NoActiveItemError', 'RoundNotCompleteError',
    'InvalidRoundConfigError', 'ListValidationError', 'ListNotFoundError',
    'ListStorage', 'NarrationSink',
    'parse_entries',
    'WordListCatalog', 'WORD_LISTS'
]
