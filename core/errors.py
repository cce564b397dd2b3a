"""Errors raised by the dictee core."""


class DicteeError(Exception):
    """Base class for all dictee errors."""


class EmptyPoolError(DicteeError):
    """A round was started without any items to draw from."""


class NoActiveItemError(DicteeError):
    """An attempt was submitted (or replay requested) with no current item."""


class RoundNotCompleteError(DicteeError):
    """The next round was requested before the current one finished."""


class InvalidRoundConfigError(DicteeError, ValueError):
    """The round mode is not usable (e.g. a question count below one)."""


class ListValidationError(DicteeError, ValueError):
    """A word list could not be saved or deleted."""


class ListNotFoundError(DicteeError, KeyError):
    """No word list exists under the requested name."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ''
