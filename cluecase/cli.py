"""
Command-line interface for simulating and inspecting ClueCase rounds.

All operations are parameter-based with no interactive input required.

Usage examples:
    # Play one round with a random bot
    python -m cluecase simulate --seed 7

    # Shorter round with more clue cases
    python -m cluecase simulate -o duration_seconds=60 -o clue_count=3

    # Load options from a JSON file
    python -m cluecase simulate --config round.json

    # Output as JSON for machine parsing
    python -m cluecase simulate --seed 7 --json

    # Test serialization (save/restore after every command)
    python -m cluecase simulate --test-serialization

    # Show round options
    python -m cluecase show-options
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any

from mashumaro.exceptions import MissingField

from cluecase.errors import ClueCaseError, ConfigurationError
from cluecase.game_utils.events import ModifierKind
from cluecase.game_utils.options import get_all_option_metas
from cluecase.game_utils.round_timer import format_clock, in_final_countdown
from cluecase.game_utils.test_listener import RecordingListener
from cluecase.messages.localization import Localization
from cluecase.round.game import ClueCaseGame
from cluecase.round.options import RoundOptions
from cluecase.round.registry import reveal_tier
from cluecase.round.state import PowerButton, RoundPhase


class SpectatorListener(RecordingListener):
    """
    Listener that records every event and narrates the round.
    Used for CLI simulation to watch a round play out.
    """

    def __init__(self, locale: str = "en", json_mode: bool = False, quiet: bool = False):
        super().__init__()
        self.locale = locale
        self.json_mode = json_mode
        self.quiet = quiet
        self.messages: list[str] = []
        self._offer_pending = False
        self._last_clock = ""

    def _log(self, text: str) -> None:
        self.messages.append(text)
        if not self.quiet and not self.json_mode:
            print(f"  {text}")

    def _money(self, amount: int) -> str:
        return "$" + Localization.format_money(self.locale, amount)

    def on_case_opened(self, case_number: int, value: int | str) -> None:
        super().on_case_opened(case_number, value)
        if isinstance(value, int):
            shown = f"{self._money(value)} ({reveal_tier(value)})"
            self._offer_pending = True
        else:
            shown = Localization.get(self.locale, "case-clue")
        self._log(f"Case {case_number}: {shown}")

    def on_deal_value_changed(self, value: int) -> None:
        super().on_deal_value_changed(value)
        # Only the offer that follows a reveal; the clock moves it every second
        if self._offer_pending:
            self._offer_pending = False
            self._log(
                Localization.get(
                    self.locale, "deal-offer", value=Localization.format_money(self.locale, value)
                )
            )

    def on_timer_tick(self, remaining_seconds: float) -> None:
        super().on_timer_tick(remaining_seconds)
        if not in_final_countdown(remaining_seconds):
            return
        clock = format_clock(remaining_seconds)
        if clock != self._last_clock:
            self._last_clock = clock
            self._log(f"[timer] {clock}")

    def on_clue_revealed(self, text: str) -> None:
        super().on_clue_revealed(text)
        for line in text.split("\n"):
            if line:
                self._log(f"[clue] {line}")

    def on_modifier_applied(self, kind: ModifierKind) -> None:
        super().on_modifier_applied(kind)
        self._log(Localization.get(self.locale, f"power-{kind.value}"))

    def on_round_ended(self, final_value: int, time_bonus: int) -> None:
        super().on_round_ended(final_value, time_bonus)
        self._log(
            Localization.get(
                self.locale,
                "round-final-value",
                value=Localization.format_money(self.locale, final_value),
            )
        )


class RoundSimulator:
    """Plays one round with a random bot policy and a spectator."""

    def __init__(
        self,
        options: RoundOptions,
        seed: int | None = None,
        json_mode: bool = False,
        quiet: bool = False,
        max_steps: int = 10000,
        test_serialization: bool = False,
    ):
        self.options = options
        self.seed = seed
        self.json_mode = json_mode
        self.quiet = quiet
        self.max_steps = max_steps
        self.test_serialization = test_serialization

        # Separate streams so the bot's choices don't disturb the deal
        self.bot_rng = random.Random(seed)
        self.game = ClueCaseGame(options=options)
        self.game.seed(seed)
        self.spectator = SpectatorListener(
            locale=options.locale, json_mode=json_mode, quiet=quiet
        )
        self.game.attach_listener(self.spectator)

        # Cases opened before the bot takes the deal
        self.deal_after = self.bot_rng.randint(8, 20)
        self.rejected: list[str] = []

    def _save_and_restore(self, step: int) -> None:
        """Save the game to JSON and restore it, testing serialization."""
        saved_rng = self.game._rng

        try:
            game_json = self.game.to_json()
        except Exception as e:
            raise RuntimeError(f"Serialization failed at step {step}: {e}")

        try:
            self.game = ClueCaseGame.from_json(game_json)
        except Exception as e:
            raise RuntimeError(f"Deserialization failed at step {step}: {e}")

        # Restore non-serialized runtime state
        self.game._rng = saved_rng
        self.game.attach_listener(self.spectator)

    def _bot_command(self) -> None:
        """Issue one command the way a hurried player might."""
        game = self.game
        phase = game.state.phase
        usage = game.state.button_usage

        if phase == RoundPhase.RESOLVING:
            game.acknowledge_reveal()
            return

        if phase == RoundPhase.PICKING:
            choices = [
                c.case_number
                for c in game.registry.remaining_ready()
                if c.case_number not in game.state.pick_selection
            ]
            game.select_for_pick_three(self.bot_rng.choice(choices))
            return

        opened = game.registry.opened_count()
        if opened >= self.deal_after:
            game.accept_deal()
            return

        roll = self.bot_rng.random()
        if (
            roll < 0.15
            and not usage.is_used(PowerButton.FREE_CLUE)
            and opened >= game.options.free_clue_min_opened
        ):
            game.activate_free_clue()
        elif roll < 0.25 and not usage.is_used(PowerButton.PICK_THREE):
            game.activate_pick_three()
        elif roll < 0.3 and not usage.is_used(PowerButton.DOUBLE) and opened >= 10:
            game.activate_double()
        elif roll < 0.35 and not usage.is_used(PowerButton.CLUE_BUTTON):
            game.view_clues()
        else:
            case = self.bot_rng.choice(game.registry.remaining_ready())
            game.open_case(case.case_number)

    def run(self) -> dict[str, Any]:
        """Run the simulation to completion. Returns results dict."""
        if not self.json_mode and not self.quiet:
            mode_str = " [testing serialization]" if self.test_serialization else ""
            print(f"\n=== ClueCase{mode_str} ===\n")

        self.game.new_round()
        self.game.start_round()

        step = 0
        serialization_error = None
        while not self.game.state.ended and step < self.max_steps:
            # Thinking time between commands
            self.game.tick(self.bot_rng.uniform(0.5, 3.0))
            if not self.game.state.ended:
                try:
                    self._bot_command()
                except ClueCaseError as e:
                    self.rejected.append(e.render(self.game.locale))
            step += 1

            if self.test_serialization:
                try:
                    self._save_and_restore(step)
                except RuntimeError as e:
                    serialization_error = str(e)
                    if not self.json_mode:
                        print(f"\nError: {serialization_error}")
                    break

        timed_out = step >= self.max_steps
        if timed_out and not self.json_mode:
            print(f"\nWarning: Round did not finish after {self.max_steps} steps")

        result = self.game.result()
        results: dict[str, Any] = {
            "seed": self.seed,
            "steps": step,
            "timed_out": timed_out,
            "messages": self.spectator.messages,
            "rejected": self.rejected,
        }
        if result is not None:
            results.update(
                {
                    "end_reason": result.end_reason.value,
                    "final_value": result.final_value,
                    "time_bonus": result.time_bonus,
                    "outcome": result.outcome,
                    "clues_found": result.clues_found,
                    "end_screen": result.format_end_screen(self.game.locale),
                }
            )

        if self.test_serialization:
            results["serialization_tested"] = True
            if serialization_error:
                results["serialization_error"] = serialization_error
            else:
                results["serialization_passed"] = True

        return results


def parse_overrides(raw: list[str] | None) -> dict[str, str]:
    """Turn ["key=value", ...] into a dict, skipping entries without '='."""
    overrides = {}
    for opt in raw or []:
        if "=" in opt:
            key, value = opt.split("=", 1)
            overrides[key.strip()] = value.strip()
    return overrides


def load_options(config: str | None, overrides: dict[str, str], json_mode: bool) -> RoundOptions:
    """Build round options from an optional JSON file plus -o overrides."""
    if config:
        try:
            text = Path(config).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config {config}: {e}", option="config")
        try:
            options = RoundOptions.from_json(text)
        except (ValueError, TypeError, MissingField) as e:
            raise ConfigurationError(f"Bad config {config}: {e}", option="config")
    else:
        options = RoundOptions()

    unknown = options.apply_overrides(overrides)
    if not json_mode:
        for key in unknown:
            print(f"Warning: Unknown option '{key}'")
    # Overrides may combine into an invalid round, e.g. clue_count vs case_values
    options.validate()
    return options


def cmd_show_options(args):
    """Show the configurable round options."""
    options = RoundOptions()
    options_list = []
    metas = get_all_option_metas(RoundOptions)

    for field_name in options.__dataclass_fields__:
        current_value = getattr(options, field_name)
        option_data = {
            "name": field_name,
            "type": type(current_value).__name__,
            "default": current_value,
        }
        meta = metas.get(field_name)
        if meta:
            option_data.update(meta.describe())
            option_data["label"] = meta.get_label(options.locale)
        options_list.append(option_data)

    if args.json:
        print(json.dumps({"options": options_list}, indent=2))
    else:
        print("Round options:\n")
        for opt in options_list:
            print(f"  {opt['name']} ({opt['type']})")
            if "label" in opt:
                print(f"    {opt['label']}")
            print(f"    Default: {opt['default']}")
            if "min" in opt:
                print(f"    Range: {opt['min']} - {opt['max']}")
            if "choices" in opt:
                print(f"    Choices: {', '.join(opt['choices'])}")
            print()


def cmd_simulate(args):
    """Simulate a round with a bot."""
    try:
        options = load_options(args.config, parse_overrides(args.option), args.json)
    except ClueCaseError as e:
        print(f"Error: {e}")
        sys.exit(1)

    simulator = RoundSimulator(
        options=options,
        seed=args.seed,
        json_mode=args.json,
        quiet=args.quiet,
        max_steps=args.max_steps,
        test_serialization=args.test_serialization,
    )
    results = simulator.run()

    if args.json:
        print(json.dumps(results, indent=2))
    elif not args.quiet:
        print(f"\n=== Finished after {results['steps']} commands ===\n")
        for line in results.get("end_screen", []):
            print(f"  {line}")

    if results.get("serialization_error"):
        sys.exit(1)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="ClueCase round simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log engine transitions"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show-options command
    options_parser = subparsers.add_parser("show-options", help="Show round options")
    options_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # simulate command
    sim_parser = subparsers.add_parser("simulate", help="Play a round with a bot")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    sim_parser.add_argument(
        "--option",
        "-o",
        action="append",
        help="Set round option (e.g., -o duration_seconds=60)",
    )
    sim_parser.add_argument("--config", help="JSON file with round options")
    sim_parser.add_argument("--json", action="store_true", help="Output as JSON")
    sim_parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress round output"
    )
    sim_parser.add_argument(
        "--max-steps",
        type=int,
        default=10000,
        help="Maximum commands before giving up (default: 10000)",
    )
    sim_parser.add_argument(
        "--test-serialization",
        action="store_true",
        help="Save and restore the round after every command",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if args.command == "show-options":
        cmd_show_options(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
