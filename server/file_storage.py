"""File-based storage implementation."""

import json
import logging
import os

from core.interfaces import ListStorage

logger = logging.getLogger(__name__)


class FileStorage(ListStorage):
    """Stores user word lists in a JSON file."""

    def __init__(self, state_dir: str = None):
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or project_root

    def _get_lists_file(self) -> str:
        return os.path.join(self.state_dir, 'dictee_lists.json')

    def load_user_lists(self) -> dict:
        lists_file = self._get_lists_file()
        if os.path.exists(lists_file):
            try:
                with open(lists_file, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Could not read {lists_file}: {e}")
                return {}
        return {}

    def save_user_lists(self, lists: dict) -> None:
        os.makedirs(self.state_dir, exist_ok=True)
        with open(self._get_lists_file(), 'w', encoding='utf-8') as f:
            json.dump(lists, f, indent=2, ensure_ascii=False)
