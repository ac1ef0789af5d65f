"""Errors raised by round commands.

Every error carries a Fluent message id so the caller can tell the player
why the command was refused. None of them ends the session: the command is
dropped and the round carries on untouched.
"""

from typing import Any


class ClueCaseError(Exception):
    """Base class for rejected commands."""

    message_id = "error-generic"

    def __init__(self, detail: str = "", message_id: str | None = None, **kwargs: Any):
        super().__init__(detail or self.__class__.__name__)
        if message_id is not None:
            self.message_id = message_id
        self.kwargs = kwargs

    def render(self, locale: str = "en") -> str:
        """Render the player-facing message for this error."""
        from .messages.localization import Localization

        return Localization.get(locale, self.message_id, **self.kwargs)


class InvalidStateError(ClueCaseError):
    """Command issued in the wrong phase, or on a case that is already open."""

    message_id = "error-wrong-phase"


class InvalidSelectionError(ClueCaseError):
    """Pick-three selection with duplicates, opened cases, or too few cases."""

    message_id = "error-bad-selection"


class ConfigurationError(ClueCaseError):
    """Malformed setup data."""

    message_id = "error-configuration"


class AlreadyUsedError(ClueCaseError):
    """A one-shot power was invoked a second time."""

    message_id = "error-already-used"
