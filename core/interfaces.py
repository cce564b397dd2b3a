"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class NarrationSink(ABC):
    """Abstract base class for whatever vocalizes (or shows) the dictated text."""

    @abstractmethod
    def speak(self, text: str) -> None:
        """Narrate text. Fire-and-forget: the result is never inspected."""
        pass


class ListStorage(ABC):
    """Abstract base class for user word-list storage."""

    @abstractmethod
    def load_user_lists(self) -> dict:
        """Load user lists. Returns {name: {entries, random, gifUrl}}."""
        pass

    @abstractmethod
    def save_user_lists(self, lists: dict) -> None:
        """Replace all stored user lists."""
        pass
