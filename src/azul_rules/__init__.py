from .actions import Action
from .analysis import GameStats, PlayerStats, compute_stats
from .enums import DRAFTING_COLORS, GamePhase, TileColor, color_index
from .player import BUILD_ROW_CAPACITIES, FLOOR, BuildRow, PlayerBoard
from .scoring import FLOOR_PENALTIES, BonusBreakdown, end_game_bonus, score_placement, wall_column
from .state import DEFAULT_NAMES, Game, Supply, new_game, pick_winner
from .tiles import IndexPicker, RandomIndexPicker, TileCollection

__all__ = [
    "Action",
    "BUILD_ROW_CAPACITIES",
    "BonusBreakdown",
    "BuildRow",
    "DEFAULT_NAMES",
    "DRAFTING_COLORS",
    "FLOOR",
    "FLOOR_PENALTIES",
    "Game",
    "GamePhase",
    "GameStats",
    "IndexPicker",
    "PlayerBoard",
    "PlayerStats",
    "RandomIndexPicker",
    "Supply",
    "TileCollection",
    "TileColor",
    "color_index",
    "compute_stats",
    "end_game_bonus",
    "new_game",
    "pick_winner",
    "score_placement",
    "wall_column",
]
