from dataclasses import dataclass

from .enums import DRAFTING_COLORS, TileColor, color_index

BOARD_SIZE = 5

# Cumulative penalty by floor line size; anything past seven tiles costs nothing extra.
FLOOR_PENALTIES = (0, -1, -2, -4, -6, -8, -11, -14)

ROW_BONUS = 2
COLUMN_BONUS = 7
COLOR_BONUS = 10

Wall = list[list[bool]]


def empty_wall() -> Wall:
    return [[False] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def wall_column(row: int, color: TileColor) -> int:
    return (row + color_index(color)) % BOARD_SIZE


def _tiled_beyond(wall: Wall, row: int, col: int, dr: int, dc: int) -> int:
    """Number of consecutive tiled cells stepping away from ``(row, col)``."""
    steps = 0
    r, c = row + dr, col + dc
    while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and wall[r][c]:
        steps += 1
        r, c = r + dr, c + dc
    return steps


def run_length(wall: Wall, row: int, col: int, dr: int, dc: int) -> int:
    """Length of the contiguous run through ``(row, col)`` along ``(dr, dc)``."""
    return 1 + _tiled_beyond(wall, row, col, dr, dc) + _tiled_beyond(wall, row, col, -dr, -dc)


def score_placement(wall: Wall, row: int, col: int) -> int:
    """Points for the tile just set at ``(row, col)``; the cell must already be marked.

    A tile touching nothing scores 1. Otherwise it scores its row run when it
    has a row neighbor, plus its column run when it has a column neighbor.
    """
    points = 0
    for dr, dc in ((0, 1), (1, 0)):
        length = run_length(wall, row, col, dr, dc)
        if length > 1:
            points += length
    return points or 1


def floor_penalty(count: int) -> int:
    return FLOOR_PENALTIES[min(count, len(FLOOR_PENALTIES) - 1)]


@dataclass(frozen=True)
class BonusBreakdown:
    rows: int = 0
    columns: int = 0
    colors: int = 0

    @property
    def total(self) -> int:
        return ROW_BONUS * self.rows + COLUMN_BONUS * self.columns + COLOR_BONUS * self.colors


def end_game_bonus(wall: Wall) -> BonusBreakdown:
    return BonusBreakdown(
        rows=sum(1 for row in wall if all(row)),
        columns=sum(1 for col in range(BOARD_SIZE) if all(wall[r][col] for r in range(BOARD_SIZE))),
        colors=sum(
            1
            for color in DRAFTING_COLORS
            if all(wall[r][wall_column(r, color)] for r in range(BOARD_SIZE))
        ),
    )
