import logging
from dataclasses import dataclass, field
from typing import Callable

from .enums import TileColor
from .scoring import (
    BOARD_SIZE,
    BonusBreakdown,
    Wall,
    empty_wall,
    end_game_bonus,
    floor_penalty,
    score_placement,
    wall_column,
)
from .tiles import TileCollection

LOGGER = logging.getLogger(__name__)

BUILD_ROW_CAPACITIES = (1, 2, 3, 4, 5)
FLOOR = len(BUILD_ROW_CAPACITIES)  # any target at or past this index is the floor line


class BuildRow:
    """Staging row ``index`` of a board, holding up to ``index + 1`` tiles of one color.

    The row only sees its wall row through ``is_tiled(col)``.
    """

    def __init__(self, index: int, is_tiled: Callable[[int], bool]) -> None:
        self.index = index
        self.capacity = BUILD_ROW_CAPACITIES[index]
        self.color: TileColor | None = None
        self.count = 0
        self._is_tiled = is_tiled

    def column(self, color: TileColor | None = None) -> int:
        color = color or self.color
        if color is None:
            raise RuntimeError("empty build row has no wall column")
        return wall_column(self.index, color)

    def is_full(self) -> bool:
        return self.count == self.capacity

    def can_accept(self, color: TileColor) -> bool:
        if color == TileColor.WHITE:
            return False
        if self._is_tiled(self.column(color)):
            return False
        return (self.color is None or self.color == color) and not self.is_full()

    def add_tiles(self, tiles: TileCollection) -> TileCollection:
        """Take as many of ``tiles`` as fit and return the rest as overflow.

        Tiles this row cannot take at all (locked to another color, already on
        the wall, full) come back untouched.
        """
        if tiles.is_empty():
            return tiles
        color = tiles.color_if_monochrome()
        if color is None:
            raise ValueError("build row tiles must all be one color")
        if not self.can_accept(color):
            return tiles
        offered = tiles.take_all()
        accepted = min(self.capacity - self.count, offered.size())
        self.color = color
        self.count += accepted
        # Accepted tiles live on as the row count.
        return TileCollection.of(color, offered.size() - accepted)

    def discard(self) -> TileCollection:
        """Empty a full row: one tile goes to the wall, the rest are returned."""
        discarded = TileCollection.of(self.color, self.count - 1)
        self.color = None
        self.count = 0
        return discarded

    def tiles(self) -> TileCollection:
        if self.color is None:
            return TileCollection()
        return TileCollection.of(self.color, self.count)


@dataclass
class RoundSummary:
    gained: int = 0
    floor_penalty: int = 0
    floor_tiles: int = 0


@dataclass
class PlayerBoard:
    """One player's wall, build rows, floor line and score."""

    name: str
    index: int = 0
    score: int = 0
    wall: Wall = field(default_factory=empty_wall)
    floor_line: TileCollection = field(default_factory=TileCollection)
    selected: TileCollection | None = None
    last_round: RoundSummary = field(default_factory=RoundSummary)
    bonus: BonusBreakdown | None = None

    def __post_init__(self) -> None:
        self.build_rows = [BuildRow(i, self.wall[i].__getitem__) for i in range(len(BUILD_ROW_CAPACITIES))]

    def wall_grid(self) -> Wall:
        return [list(row) for row in self.wall]

    def build_row_tiles(self, row: int) -> TileCollection:
        return self._row(row).tiles()

    def floor_line_tiles(self) -> TileCollection:
        return self.floor_line.copy()

    def selected_tiles(self) -> TileCollection:
        return self.selected.copy() if self.selected is not None else TileCollection()

    def has_selected_tiles(self) -> bool:
        return self.selected is not None

    def can_place_in_row(self, row: int, color: TileColor | None = None) -> bool:
        build_row = self._row(row)
        if color is None:
            if self.selected is None:
                return False
            color = self.selected.color_if_monochrome(ignore_white=True)
            if color is None:
                return False
        return build_row.can_accept(color)

    def has_complete_row(self) -> bool:
        return any(all(row) for row in self.wall)

    def set_selected_tiles(self, tiles: TileCollection) -> None:
        if self.selected is not None:
            raise RuntimeError("selected tiles must be placed before drafting again")
        self.selected = tiles.take_all()

    def place_selected_tiles(self, row_or_floor: int) -> None:
        if self.selected is None:
            raise RuntimeError("tiles must be selected before they can be placed")
        if row_or_floor < 0:
            raise ValueError("invalid build row index")
        selected = self.selected
        if row_or_floor >= FLOOR:
            self.floor_line.merge(selected)
        else:
            self.floor_line.merge(selected.remove_all_of_color(TileColor.WHITE))
            self.floor_line.merge(self.build_rows[row_or_floor].add_tiles(selected))
        self.selected = None
        LOGGER.debug(
            "%s placed tiles on %s; floor line now %d",
            self.name,
            "floor" if row_or_floor >= FLOOR else f"row {row_or_floor}",
            self.floor_line.size(),
        )

    def finish_round(self) -> TileCollection:
        """Tile full rows onto the wall, score them, apply the floor penalty.

        Returns every discarded tile, floor line included.
        """
        discard = TileCollection()
        gained = 0
        for row in self.build_rows:
            if not row.is_full():
                continue
            col = row.column()
            self.wall[row.index][col] = True
            gained += score_placement(self.wall, row.index, col)
            discard.merge(row.discard())
        floor_tiles = self.floor_line.size()
        penalty = floor_penalty(floor_tiles)
        self.score = max(self.score + gained + penalty, 0)
        discard.merge(self.floor_line)
        self.last_round = RoundSummary(gained=gained, floor_penalty=penalty, floor_tiles=floor_tiles)
        LOGGER.debug("%s finished round: +%d, floor %d, score %d", self.name, gained, penalty, self.score)
        return discard

    def finish_game(self) -> int:
        self.bonus = end_game_bonus(self.wall)
        self.score += self.bonus.total
        return self.score

    def _row(self, row: int) -> BuildRow:
        if not 0 <= row < BOARD_SIZE:
            raise ValueError("invalid build row index")
        return self.build_rows[row]
