"""Deal offer calculation."""

import math

from .registry import CaseRegistry

# (lowest opened count, multiplier), checked from the top down
MULTIPLIER_STEPS: list[tuple[int, float]] = [
    (23, 1.0),
    (15, 0.75),  # also covers 20-22
    (8, 0.66),
    (0, 0.5),
]


def deal_multiplier(opened_count: int) -> float:
    """Fraction of the average remaining value the banker offers."""
    for threshold, multiplier in MULTIPLIER_STEPS:
        if opened_count >= threshold:
            return multiplier
    return MULTIPLIER_STEPS[-1][1]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_deal_value(
    registry: CaseRegistry,
    opened_count: int,
    time_bonus: int,
    round_active: bool,
) -> int:
    """
    Current deal offer.

    Averages the numeric values still in ready cases, scales the average by
    the multiplier for how many cases are open, rounds to whole dollars, and
    adds the time bonus while the round is running. With no numeric case
    left unopened the offer is 0.
    """
    values = [c.value for c in registry.ready_numeric()]
    if not values:
        return 0

    average = sum(values) / len(values)
    deal = round_half_up(average * deal_multiplier(opened_count))

    if round_active:
        deal += max(0, time_bonus)
    return max(0, deal)
