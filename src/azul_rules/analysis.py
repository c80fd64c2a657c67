from dataclasses import dataclass

from .scoring import BOARD_SIZE, BonusBreakdown, end_game_bonus
from .state import Game


@dataclass
class PlayerStats:
    name: str
    wall_placements: int = 0
    placement_points: int = 0
    floor_penalty: int = 0
    endgame_bonus: BonusBreakdown | None = None
    final_score: int = 0


@dataclass
class GameStats:
    per_player: list[PlayerStats]
    rounds: int
    winner: str | None


def compute_stats(game: Game) -> GameStats:
    """Summarise a game from its round log and the players' walls."""
    stats = [PlayerStats(name=p.name, final_score=p.score) for p in game.players]

    for entry in game.round_log:
        player_stats = stats[entry["player"]]
        player_stats.placement_points += entry["gained"]
        player_stats.floor_penalty += entry["floor_penalty"]

    for player_stats, player in zip(stats, game.players):
        player_stats.wall_placements = sum(
            1 for r in range(BOARD_SIZE) for c in range(BOARD_SIZE) if player.wall[r][c]
        )
        # Bonuses only count once the game has been scored.
        if player.bonus is not None:
            player_stats.endgame_bonus = player.bonus
        else:
            player_stats.endgame_bonus = end_game_bonus(player.wall)

    rounds = max((entry["round"] for entry in game.round_log), default=0)
    return GameStats(per_player=stats, rounds=rounds, winner=game.winner)
