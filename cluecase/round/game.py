"""
ClueCase round engine.

The player opens numbered cases against a countdown. Most cases hold a
dollar amount and a few hold a clue about where the big values are. The
banker's offer tracks the average unopened value, and the round ends when
the player takes the deal, the time runs out, or a single numeric case is
left.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from mashumaro.mixins.json import DataClassJSONMixin

from ..errors import AlreadyUsedError, InvalidSelectionError, InvalidStateError
from ..game_utils.events import EventListener, ModifierKind
from ..game_utils.scheduler import CallbackScheduler
from ..messages.localization import Localization
from .clues import ClueEngine
from .deal import compute_deal_value
from .modifiers import PICK_THREE_SIZE, ModifierEngine
from .options import RoundOptions
from .registry import CLUE_MARKER, CaseEntry, CaseRegistry
from .state import EndReason, PowerButton, RoundPhase, RoundState

logger = logging.getLogger(__name__)

# Final value the player needs to beat the banker
WIN_THRESHOLD = 100000

# Phases in which the round is being played
PLAY_PHASES = (RoundPhase.CHOOSING, RoundPhase.RESOLVING, RoundPhase.PICKING)


@dataclass
class RoundResult(DataClassJSONMixin):
    """Outcome of a finished round."""

    final_value: int
    time_bonus: int
    ran_out_of_time: bool
    end_reason: EndReason
    outcome: str  # "win" or "lose"
    remaining: list[CaseEntry] = field(default_factory=list)
    clues_found: list[str] = field(default_factory=list)

    def format_end_screen(self, locale: str = "en") -> list[str]:
        """Lines for the end-of-round screen."""

        def money(amount: int) -> str:
            return Localization.format_money(locale, amount)

        lines = [Localization.get(locale, f"round-end-{self.end_reason.value}")]
        if self.ran_out_of_time:
            lines.append(Localization.get(locale, "round-out-of-time"))
        else:
            lines.append(
                Localization.get(locale, "round-time-bonus", bonus=money(self.time_bonus))
            )
        lines.append(
            Localization.get(locale, "round-final-value", value=money(self.final_value))
        )
        lines.append(Localization.get(locale, f"round-outcome-{self.outcome}"))

        if self.remaining:
            lines.append(Localization.get(locale, "round-remaining-header"))
            for entry in self.remaining:
                if entry.is_clue:
                    line = Localization.get(
                        locale, "round-remaining-clue", case=entry.case_number
                    )
                else:
                    line = Localization.get(
                        locale,
                        "round-remaining-case",
                        case=entry.case_number,
                        value=money(entry.value),
                    )
                lines.append(line)

        lines.append(
            Localization.get(locale, "round-clues-header", count=len(self.clues_found))
        )
        lines.extend(self.clues_found)
        return lines


@dataclass
class ClueCaseGame(DataClassJSONMixin):
    """
    State machine for ClueCase rounds.

    All state lives in the serialized fields; the listener, the scheduler
    and the random source are runtime-only and rebuilt after loading.
    Commands validate before they mutate, so a rejected command raises and
    leaves the round exactly as it was.
    """

    options: RoundOptions = field(default_factory=RoundOptions)
    registry: CaseRegistry = field(default_factory=CaseRegistry)
    state: RoundState = field(default_factory=RoundState)
    round_number: int = 0

    def __post_init__(self):
        """Initialize non-serialized state."""
        self._listener: EventListener = EventListener()
        self._rng: random.Random = random.Random()
        self._scheduler = CallbackScheduler()
        self.rebuild_runtime_state()

    def rebuild_runtime_state(self) -> None:
        """Recreate the scheduler and any pending callback after loading."""
        self._scheduler = CallbackScheduler(clock=self.state.elapsed)
        if self.state.clue_log_due is not None and not self.state.ended:
            self._scheduler.schedule(
                self.state.clue_log_due - self.state.elapsed,
                self._show_clue_log,
                name="show_clue_log",
            )

    # ==========================================================================
    # Wiring
    # ==========================================================================

    def attach_listener(self, listener: EventListener) -> None:
        self._listener = listener

    def seed(self, seed: int | None) -> None:
        """Reseed the random source used for dealing and clues."""
        self._rng = random.Random(seed)

    @property
    def locale(self) -> str:
        return self.options.locale

    def _clue_engine(self) -> ClueEngine:
        return ClueEngine(self.registry, self.state, self._rng, self.locale)

    def _modifier_engine(self) -> ModifierEngine:
        return ModifierEngine(self.registry, self.locale)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _require_phase(self, command: str, *phases: RoundPhase) -> None:
        if self.state.phase not in phases:
            logger.debug("Rejected %s in phase %s", command, self.state.phase.value)
            raise InvalidStateError(
                f"{command} is not allowed in phase {self.state.phase.value}"
            )

    def _require_unused(self, button: PowerButton) -> None:
        if self.state.button_usage.is_used(button):
            logger.debug("Rejected %s: already used", button.value)
            raise AlreadyUsedError(f"{button.value} already used", power=button.value)

    def _set_phase(self, phase: RoundPhase) -> None:
        if phase == self.state.phase:
            return
        logger.debug("Phase %s -> %s", self.state.phase.value, phase.value)
        self.state.phase = phase
        self._listener.on_phase_changed(phase.value)

    def current_time_bonus(self) -> int:
        return self.state.timer.time_bonus(self.options.time_bonus_per_second)

    def _refresh_deal(self, force_emit: bool = False) -> int:
        value = compute_deal_value(
            self.registry,
            self.registry.opened_count(),
            self.current_time_bonus(),
            self.state.round_active,
        )
        if force_emit or value != self.state.deal_value:
            self.state.deal_value = value
            self._listener.on_deal_value_changed(value)
        return value

    def _show_clue_log(self) -> None:
        self.state.clue_log_due = None
        self._listener.on_show_clue_log(list(self.state.clues_found))

    # ==========================================================================
    # Round lifecycle
    # ==========================================================================

    def new_round(self) -> None:
        """Deal a fresh board and wait for the start command.

        Allowed at any time. Everything from the previous round, pending
        callbacks included, is thrown away. A board that cannot be dealt
        leaves the current round untouched.
        """
        registry = CaseRegistry()
        registry.initialize(self.options.case_values, self.options.clue_count, self._rng)

        self._scheduler.cancel_all()
        state = RoundState(clue_pool=list(self.options.clue_pool))
        state.timer.start(self.options.duration_seconds)

        self.registry = registry
        self.state = state
        self.round_number += 1
        self._scheduler = CallbackScheduler()

        logger.info("Round %d dealt", self.round_number)
        self._set_phase(RoundPhase.AWAITING_START)
        self._refresh_deal(force_emit=True)

    def start_round(self) -> str:
        """Start the countdown and deal the opening clue.

        Returns:
            The opening clue.
        """
        self._require_phase("start_round", RoundPhase.AWAITING_START)

        self.state.round_active = True
        self._set_phase(RoundPhase.CHOOSING)
        logger.info("Round %d started", self.round_number)

        text = self._clue_engine().select_clue(consume=True)
        self._listener.on_clue_revealed(text)

        delay = self.options.clue_log_delay_seconds
        self.state.clue_log_due = self.state.elapsed + delay
        self._scheduler.schedule(delay, self._show_clue_log, name="show_clue_log")

        self._refresh_deal()
        return text

    def tick(self, dt: float) -> None:
        """Advance time by dt seconds. Never raises."""
        dt = max(0.0, dt)
        self.state.elapsed += dt
        self._scheduler.advance(dt)

        if self.state.phase != RoundPhase.CHOOSING:
            return

        expired = self.state.timer.tick(dt)
        self._listener.on_timer_tick(self.state.timer.remaining)
        if expired:
            self._end(EndReason.TIMEOUT)
            return
        self._refresh_deal()

    def _end(self, reason: EndReason) -> None:
        if self.state.ended:
            return

        if reason == EndReason.TIMEOUT:
            time_bonus = 0
        else:
            time_bonus = self.current_time_bonus()
        final_value = compute_deal_value(
            self.registry, self.registry.opened_count(), time_bonus, True
        )

        self._scheduler.cancel_all()
        self.state.clue_log_due = None
        self.state.round_active = False
        self.state.final_value = final_value
        self.state.final_time_bonus = time_bonus
        self.state.end_reason = reason
        self.state.deal_value = final_value
        self.state.pick_selection = []

        logger.info(
            "Round %d ended (%s): %d with time bonus %d",
            self.round_number,
            reason.value,
            final_value,
            time_bonus,
        )
        self._set_phase(RoundPhase.ENDED)
        self._listener.on_round_ended(final_value, time_bonus)

    def result(self) -> RoundResult | None:
        """The result of the round, once it has ended."""
        if not self.state.ended:
            return None
        return RoundResult(
            final_value=self.state.final_value,
            time_bonus=self.state.final_time_bonus,
            ran_out_of_time=self.state.end_reason == EndReason.TIMEOUT,
            end_reason=self.state.end_reason,
            outcome="win" if self.state.final_value >= WIN_THRESHOLD else "lose",
            remaining=[c for c in self.registry.snapshot() if c.is_ready],
            clues_found=list(self.state.clues_found),
        )

    # ==========================================================================
    # Player commands
    # ==========================================================================

    def open_case(self, case_number: int) -> int | str:
        """Open a case.

        A clue case deals a clue and play carries on. A numeric case shows its
        value and waits for acknowledge_reveal(), unless it leaves a single
        numeric case on the board, which ends the round.

        Returns:
            The value found, or the clue marker.
        """
        self._require_phase("open_case", RoundPhase.CHOOSING)
        value = self.registry.open(case_number)
        logger.debug("Opened case %d: %s", case_number, value)
        self._listener.on_case_opened(case_number, value)

        if value == CLUE_MARKER:
            text = self._clue_engine().select_clue(consume=True)
            self._listener.on_clue_revealed(text)
        else:
            self._set_phase(RoundPhase.RESOLVING)

        self._refresh_deal()
        if len(self.registry.ready_numeric()) <= 1:
            self._end(EndReason.LAST_CASE)
        return value

    def acknowledge_reveal(self) -> None:
        self._require_phase("acknowledge_reveal", RoundPhase.RESOLVING)
        self._set_phase(RoundPhase.CHOOSING)

    def activate_free_clue(self) -> str:
        """Deal a bonus clue once enough cases are open."""
        self._require_phase("activate_free_clue", RoundPhase.CHOOSING)
        self._require_unused(PowerButton.FREE_CLUE)
        required = self.options.free_clue_min_opened
        if self.registry.opened_count() < required:
            raise InvalidStateError(
                f"Free clue needs {required} opened cases",
                message_id="error-free-clue-locked",
                count=required,
            )

        self.state.button_usage.mark_used(PowerButton.FREE_CLUE)
        text = self._clue_engine().select_clue(consume=True)
        self._listener.on_modifier_applied(ModifierKind.FREE_CLUE)
        self._listener.on_clue_revealed(text)
        return text

    def activate_pick_three(self) -> str:
        """Begin a pick-three selection.

        Returns:
            The selection prompt.
        """
        self._require_phase("activate_pick_three", RoundPhase.CHOOSING)
        self._require_unused(PowerButton.PICK_THREE)
        if len(self.registry.remaining_ready()) < PICK_THREE_SIZE:
            raise InvalidSelectionError(
                "Not enough unopened cases", message_id="error-not-enough-cases"
            )

        self.state.button_usage.mark_used(PowerButton.PICK_THREE)
        self.state.pick_selection = []
        self._set_phase(RoundPhase.PICKING)
        return Localization.get(self.locale, "pick-three-prompt")

    def select_for_pick_three(self, case_number: int) -> str | None:
        """Add a case to the pick-three selection.

        Returns:
            The report once the third case is picked, otherwise None.
        """
        self._require_phase("select_for_pick_three", RoundPhase.PICKING)
        entry = self.registry.case_at(case_number)
        if entry is None:
            raise InvalidSelectionError(
                f"No case {case_number}", message_id="error-no-such-case", case=case_number
            )
        if not entry.is_ready:
            raise InvalidSelectionError(
                f"Case {case_number} is open", message_id="error-case-opened", case=case_number
            )
        if case_number in self.state.pick_selection:
            raise InvalidSelectionError(
                f"Case {case_number} already picked",
                message_id="error-case-already-picked",
                case=case_number,
            )

        self.state.pick_selection.append(case_number)
        if len(self.state.pick_selection) < PICK_THREE_SIZE:
            return None

        report = self._modifier_engine().pick_three(self.state.pick_selection)
        self.state.clues_found.append(report)
        self.state.pick_selection = []
        self._set_phase(RoundPhase.CHOOSING)
        self._listener.on_modifier_applied(ModifierKind.PICK_THREE)
        self._listener.on_clue_revealed(report)
        return report

    def activate_double(self) -> CaseEntry | None:
        """Double the top unopened value and cut the small ones to $1.

        Returns:
            The doubled case, or None if no numeric case is unopened.
        """
        self._require_phase("activate_double", RoundPhase.CHOOSING)
        self._require_unused(PowerButton.DOUBLE)

        self.state.button_usage.mark_used(PowerButton.DOUBLE)
        doubled = self._modifier_engine().apply_double()
        self._listener.on_modifier_applied(ModifierKind.DOUBLE)
        self._refresh_deal()
        return doubled

    def accept_deal(self) -> int:
        """Take the banker's offer and end the round."""
        self._require_phase("accept_deal", RoundPhase.CHOOSING)
        self._end(EndReason.DEAL)
        return self.state.final_value

    def view_clues(self) -> list[str]:
        """The clue log. Free to review once the round is over."""
        if self.state.ended:
            return list(self.state.clues_found)

        self._require_phase("view_clues", *PLAY_PHASES)
        if not self.state.button_usage.is_used(PowerButton.CLUE_BUTTON):
            self.state.button_usage.mark_used(PowerButton.CLUE_BUTTON)
        self._listener.on_show_clue_log(list(self.state.clues_found))
        return list(self.state.clues_found)
