"""Shared round utilities."""

from .events import EventListener, ModifierKind
from .options import GameOptions, IntOption, MenuOption, option_field
from .round_timer import RoundTimer
from .scheduler import CallbackScheduler, ScheduledCallback
from .test_listener import Event, RecordingListener

__all__ = [
    "CallbackScheduler",
    "Event",
    "EventListener",
    "GameOptions",
    "IntOption",
    "MenuOption",
    "ModifierKind",
    "RecordingListener",
    "RoundTimer",
    "ScheduledCallback",
    "option_field",
]
