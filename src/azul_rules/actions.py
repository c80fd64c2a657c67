from dataclasses import dataclass

from .enums import TileColor
from .player import FLOOR as FLOOR_LINE


@dataclass(frozen=True)
class Action:
    """One whole turn: draft ``color`` from a source, then place it."""

    source_index: int  # factory index, or -1 for center
    color: TileColor
    build_row: int  # 0-4 for build rows, FLOOR for the floor line

    FLOOR = FLOOR_LINE
    CENTER = -1

    @property
    def from_center(self) -> bool:
        return self.source_index == Action.CENTER
