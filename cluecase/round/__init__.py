"""The ClueCase round: cases, deal offers, clues and powers."""

from .clues import DEFAULT_CLUE_POOL, ClueEngine, ClueKind
from .deal import compute_deal_value, deal_multiplier
from .game import ClueCaseGame, RoundResult
from .modifiers import ModifierEngine
from .options import DEFAULT_CASE_VALUES, RoundOptions
from .registry import CLUE_MARKER, CaseEntry, CaseRegistry, CaseStatus
from .state import ButtonUsage, EndReason, PowerButton, RoundPhase, RoundState

__all__ = [
    "ButtonUsage",
    "CLUE_MARKER",
    "CaseEntry",
    "CaseRegistry",
    "CaseStatus",
    "ClueCaseGame",
    "ClueEngine",
    "ClueKind",
    "DEFAULT_CASE_VALUES",
    "DEFAULT_CLUE_POOL",
    "EndReason",
    "ModifierEngine",
    "PowerButton",
    "RoundOptions",
    "RoundPhase",
    "RoundResult",
    "RoundState",
    "compute_deal_value",
    "deal_multiplier",
]
