from enum import Enum


class TileColor(str, Enum):
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"
    BLACK = "black"
    TEAL = "teal"
    WHITE = "white"  # first player marker, never drafted or tiled


DRAFTING_COLORS = (
    TileColor.BLUE,
    TileColor.YELLOW,
    TileColor.RED,
    TileColor.BLACK,
    TileColor.TEAL,
)
COLOR_INDEX = {color: idx for idx, color in enumerate(DRAFTING_COLORS)}


def color_index(color: TileColor) -> int:
    """Fixed ordinal of a drafting color; WHITE has none."""
    if color not in COLOR_INDEX:
        raise ValueError(f"{color.value} is not a drafting color")
    return COLOR_INDEX[color]


class GamePhase(str, Enum):
    SETUP = "setup"
    ROUND_IN_PROGRESS = "round_in_progress"
    ROUND_RESOLVING = "round_resolving"
    GAME_OVER = "game_over"
