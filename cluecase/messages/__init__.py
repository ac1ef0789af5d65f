"""Player-facing text."""

from .localization import Localization, get_message

__all__ = ["Localization", "get_message"]
