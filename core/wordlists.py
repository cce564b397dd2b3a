"""Built-in word lists and the rules for user-made lists."""

import logging

from .config import MIN_QUESTION_COUNT, MAX_QUESTION_COUNT
from .errors import InvalidRoundConfigError, ListValidationError, ListNotFoundError
from .interfaces import ListStorage
from .models import WordList
from .utils import parse_entries

logger = logging.getLogger(__name__)

# Dutch dictation lists shipped with the application
WORD_LISTS = {
    'Groep 4: ei en ij': {
        'entries': [
            'ijs', 'trein', 'klein', 'wijn', 'geit', 'prijs', 'plein', 'rijst',
            'eitje', 'blij', 'zeil', 'tijd'
        ],
        'random': True
    },
    'Groep 4: au en ou': {
        'entries': [
            'koud', 'saus', 'blauw', 'goud', 'pauw', 'hout', 'kous', 'auto',
            'vrouw', 'touw'
        ],
        'random': True
    },
    'Groep 5: lange klanken': {
        'entries': [
            'bomen', 'manen', 'zeven', 'lopen', 'muren', 'raken', 'sturen',
            'boter', 'kamer', 'tafel'
        ],
        'random': True
    },
    'Dagen van de week': {
        'entries': [
            'maandag', 'dinsdag', 'woensdag', 'donderdag', 'vrijdag',
            'zaterdag', 'zondag'
        ],
        'random': False
    },
    'Korte zinnen': {
        'entries': [
            'de kat zit op de mat',
            'ik eet een appel',
            'het regent buiten',
            'wij gaan naar school',
            'de zon schijnt fel'
        ],
        'random': True
    }
}

DEFAULT_LIST_NAME = next(iter(WORD_LISTS))


def ensure_unique_list_key(desired: str, existing, original_key: str | None = None) -> str:
    """Return desired, or desired with a " (n)" suffix if that name is taken.

    The list being edited (original_key) does not count as taken.
    """
    candidate = desired
    suffix = 1
    while candidate in existing and candidate != original_key:
        candidate = f"{desired} ({suffix})"
        suffix += 1
    return candidate


def clamp_question_count(value) -> int:
    """Parse and clamp a question count to the allowed range."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise InvalidRoundConfigError(f"Not a number: {value!r}")
    return min(MAX_QUESTION_COUNT, max(MIN_QUESTION_COUNT, parsed))


def default_question_count(word_list: WordList) -> int:
    return max(len(word_list.entries), MIN_QUESTION_COUNT)


class WordListCatalog:
    """Built-in lists merged with the user's own lists from storage."""

    def __init__(self, storage: ListStorage):
        self.storage = storage

    def _all_lists(self) -> dict:
        return {**WORD_LISTS, **self.storage.load_user_lists()}

    def names(self) -> list[str]:
        return list(self._all_lists())

    def is_builtin(self, name: str) -> bool:
        return name in WORD_LISTS

    def get(self, name: str) -> WordList:
        data = self._all_lists().get(name)
        if data is None:
            raise ListNotFoundError(f"Word list not found: {name}")
        return WordList.from_dict(data)

    def save(self, title: str, body: str, random: bool = True, gif_url: str | None = None,
             original_key: str | None = None) -> str:
        """Create a list, or replace/rename the user list stored under original_key.

        Returns:
            The key the list was stored under.
        """
        title = title.strip()
        if not title:
            raise ListValidationError("A list needs a title")
        entries = parse_entries(body)
        if not entries:
            raise ListValidationError("A list needs at least one word or phrase")
        if original_key is not None and self.is_builtin(original_key):
            raise ListValidationError(f"Built-in list cannot be edited: {original_key}")

        user_lists = self.storage.load_user_lists()
        if original_key is not None and original_key not in user_lists:
            raise ListNotFoundError(f"Word list not found: {original_key}")

        key = ensure_unique_list_key(title, {**WORD_LISTS, **user_lists}, original_key)
        if original_key and original_key != key:
            del user_lists[original_key]
        gif_url = (gif_url or '').strip()
        user_lists[key] = WordList(entries, random, gif_url or None).to_dict()
        self.storage.save_user_lists(user_lists)
        logger.info(f"Saved word list {key!r} ({len(entries)} entries)")
        return key

    def delete(self, name: str) -> None:
        if self.is_builtin(name):
            raise ListValidationError(f"Built-in list cannot be deleted: {name}")
        user_lists = self.storage.load_user_lists()
        if name not in user_lists:
            raise ListNotFoundError(f"Word list not found: {name}")
        del user_lists[name]
        self.storage.save_user_lists(user_lists)
        logger.info(f"Deleted word list {name!r}")
