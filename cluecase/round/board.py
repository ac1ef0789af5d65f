"""Board geometry: 24 cases laid out 4 columns wide and 6 rows deep.

Case numbers run left to right, top to bottom:

     1  2  3  4
     5  6  7  8
     ...
    21 22 23 24
"""

COLUMNS = 4
ROWS = 6
BOARD_SIZE = COLUMNS * ROWS

# Value bands used by clues and modifiers
LOW_MIN = 1
LOW_MAX = 500
MEDIUM_MIN = 2000
MEDIUM_MAX = 25000
HIGH_MIN = 50000


def row_of(case_number: int) -> int:
    """1-based row of a case."""
    return (case_number - 1) // COLUMNS + 1


def column_of(case_number: int) -> int:
    """1-based column of a case."""
    return (case_number - 1) % COLUMNS + 1


def row_members(row: int) -> tuple[int, ...]:
    start = (row - 1) * COLUMNS + 1
    return tuple(range(start, start + COLUMNS))


def column_members(column: int) -> tuple[int, ...]:
    return tuple(range(column, BOARD_SIZE + 1, COLUMNS))


ALL_CASES: tuple[int, ...] = tuple(range(1, BOARD_SIZE + 1))

ROW_TABLE: dict[int, tuple[int, ...]] = {r: row_members(r) for r in range(1, ROWS + 1)}

COLUMN_TABLE: dict[int, tuple[int, ...]] = {
    c: column_members(c) for c in range(1, COLUMNS + 1)
}

# 2x3 blocks; keys are Fluent ids for the area names
QUADRANT_TABLE: dict[str, tuple[int, ...]] = {
    "area-upper-left": (1, 2, 5, 6, 9, 10),
    "area-upper-right": (3, 4, 7, 8, 11, 12),
    "area-lower-left": (13, 14, 17, 18, 21, 22),
    "area-lower-right": (15, 16, 19, 20, 23, 24),
}

TOP_HALF: tuple[int, ...] = tuple(n for n in ALL_CASES if row_of(n) <= ROWS // 2)
BOTTOM_HALF: tuple[int, ...] = tuple(n for n in ALL_CASES if row_of(n) > ROWS // 2)
LEFT_HALF: tuple[int, ...] = tuple(
    n for n in ALL_CASES if column_of(n) <= COLUMNS // 2
)
RIGHT_HALF: tuple[int, ...] = tuple(
    n for n in ALL_CASES if column_of(n) > COLUMNS // 2
)


def neighbours(case_number: int) -> list[int]:
    """Cases directly left, right, above and below; edges have fewer."""
    result = []
    if column_of(case_number) > 1:
        result.append(case_number - 1)
    if column_of(case_number) < COLUMNS:
        result.append(case_number + 1)
    if row_of(case_number) > 1:
        result.append(case_number - COLUMNS)
    if row_of(case_number) < ROWS:
        result.append(case_number + COLUMNS)
    return result


def is_low(value: int | str) -> bool:
    return isinstance(value, int) and LOW_MIN <= value <= LOW_MAX


def is_medium(value: int | str) -> bool:
    return isinstance(value, int) and MEDIUM_MIN <= value <= MEDIUM_MAX


def is_high(value: int | str) -> bool:
    return isinstance(value, int) and value >= HIGH_MIN
