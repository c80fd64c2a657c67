import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Sequence

from .actions import Action
from .enums import DRAFTING_COLORS, GamePhase, TileColor
from .player import BUILD_ROW_CAPACITIES, PlayerBoard
from .scoring import BOARD_SIZE, Wall
from .tiles import IndexPicker, RandomIndexPicker, TileCollection

LOGGER = logging.getLogger(__name__)

TILES_PER_COLOR = 20
TILES_PER_FACTORY = 4
FACTORIES_BY_PLAYERS = {2: 5, 3: 7, 4: 9}
DEFAULT_NAMES = ("Player 1", "Player 2", "Player 3", "Player 4")

GameObserver = Callable[[str], None]


def pick_winner(scores: Sequence[int]) -> int:
    """Seat index of the highest score; ties go to the lowest seat."""
    return max(range(len(scores)), key=lambda idx: (scores[idx], -idx))


@dataclass
class Supply:
    bag: TileCollection = field(default_factory=TileCollection)
    box_lid: TileCollection = field(default_factory=TileCollection)
    factories: list[TileCollection] = field(default_factory=list)
    center: TileCollection = field(default_factory=TileCollection)


class Game:
    """A single game: shared supply, turn order and round lifecycle.

    Commands accept an optional ``player`` seat; when given it must match
    ``current_player``. Every check runs before anything moves, so a rejected
    command leaves the game untouched.
    """

    def __init__(
        self,
        player_count: int = 2,
        names: Sequence[str] | None = None,
        *,
        seed: int | None = None,
        picker: IndexPicker | None = None,
        starting_player: int | None = None,
    ) -> None:
        if player_count not in FACTORIES_BY_PLAYERS:
            raise ValueError("Azul supports 2-4 players")
        names = DEFAULT_NAMES if names is None else names
        if len(names) < player_count:
            raise ValueError("not enough names given for the number of players")
        if picker is not None and seed is not None:
            raise ValueError("pass either seed or picker, not both")
        if starting_player is not None and not 0 <= starting_player < player_count:
            raise ValueError("starting player out of range")

        self.phase = GamePhase.SETUP
        self.picker = picker if picker is not None else RandomIndexPicker(seed)
        self.players = [PlayerBoard(name=names[i], index=i) for i in range(player_count)]
        bag = TileCollection()
        for color in DRAFTING_COLORS:
            bag.add_tiles(color, TILES_PER_COLOR)
        self.supply = Supply(
            bag=bag,
            factories=[TileCollection() for _ in range(FACTORIES_BY_PLAYERS[player_count])],
        )
        if starting_player is None:
            starting_player = self.picker.pick_index(player_count)
        self.round_starter = starting_player
        self.current_player = starting_player
        self.round_number = 1
        self.first_player_holder: int | None = None
        self.winner: str | None = None
        self.winner_index: int | None = None
        self.round_log: list[dict[str, int]] = []
        self._observers: list[GameObserver] = []
        self._drafted = False
        self.reset_center()

    def factory_count(self) -> int:
        return len(self.supply.factories)

    def factory_tiles(self, factory_index: int) -> TileCollection:
        return self._factory(factory_index).copy()

    def center_tiles(self) -> TileCollection:
        return self.supply.center.copy()

    def build_row_tiles(self, player: int, row: int) -> TileCollection:
        return self._board(player).build_row_tiles(row)

    def floor_line_tiles(self, player: int) -> TileCollection:
        return self._board(player).floor_line_tiles()

    def wall_grid(self, player: int) -> Wall:
        return self._board(player).wall_grid()

    def score(self, player: int) -> int:
        return self._board(player).score

    def can_place_in_row(self, player: int, row: int) -> bool:
        return self._board(player).can_place_in_row(row)

    def has_selected_tiles(self, player: int) -> bool:
        return self._board(player).has_selected_tiles()

    def round_over(self) -> bool:
        if any(not f.is_empty() for f in self.supply.factories):
            return False
        # A marker nobody could take (no drafting tiles left beside it) does not hold the round open.
        return all(t == TileColor.WHITE for t in self.supply.center)

    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def tile_census(self) -> Counter:
        """Count of every tile in the game, wherever it currently sits."""
        census = Counter()
        supply = self.supply
        for pile in (supply.bag, supply.box_lid, supply.center, *supply.factories):
            census.update(pile.counts())
        for board in self.players:
            census.update(board.floor_line.counts())
            census.update(board.selected_tiles().counts())
            for row in board.build_rows:
                census.update(row.tiles().counts())
            for r in range(BOARD_SIZE):
                for c in range(BOARD_SIZE):
                    if board.wall[r][c]:
                        census[DRAFTING_COLORS[(c - r) % BOARD_SIZE]] += 1
        return census

    def legal_actions(self) -> list[Action]:
        if self.phase != GamePhase.ROUND_IN_PROGRESS or self._drafted:
            return []
        board = self.players[self.current_player]
        actions = []

        def add_actions(source_index: int, tiles: TileCollection) -> None:
            for color in DRAFTING_COLORS:
                if color not in tiles:
                    continue
                for row in range(len(BUILD_ROW_CAPACITIES)):
                    if board.can_place_in_row(row, color):
                        actions.append(Action(source_index=source_index, color=color, build_row=row))
                actions.append(Action(source_index=source_index, color=color, build_row=Action.FLOOR))

        for source_index, tiles in enumerate(self.supply.factories):
            add_actions(source_index, tiles)
        add_actions(Action.CENTER, self.supply.center)
        return actions

    def add_observer(self, observer: GameObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        self._observers.remove(observer)

    def pick_from_factory(self, factory_index: int, color: TileColor, *, player: int | None = None) -> None:
        self._check_can_draft(player)
        if color == TileColor.WHITE:
            raise ValueError("cannot pick the first player marker")
        factory = self._factory(factory_index)
        if color not in factory:
            raise ValueError(f"no {color.value} tiles in factory {factory_index}")
        picked = factory.remove_all_of_color(color)
        count = picked.size()
        self.supply.center.merge(factory)
        self._select(picked)
        LOGGER.debug(
            "%s took %d %s from factory %d",
            self.players[self.current_player].name,
            count,
            color.value,
            factory_index,
        )

    def pick_from_center(self, color: TileColor, *, player: int | None = None) -> None:
        self._check_can_draft(player)
        if color == TileColor.WHITE:
            raise ValueError("cannot pick the first player marker")
        center = self.supply.center
        if color not in center:
            raise ValueError(f"no {color.value} tiles in the center")
        picked = center.remove_all_of_color(color)
        count = picked.size()
        took_marker = TileColor.WHITE in center
        if took_marker:
            picked.merge(center.remove_all_of_color(TileColor.WHITE))
            self.first_player_holder = self.current_player
        self._select(picked)
        LOGGER.debug(
            "%s took %d %s from center%s",
            self.players[self.current_player].name,
            count,
            color.value,
            " with the first player marker" if took_marker else "",
        )

    def place_selected_tiles(self, row_or_floor: int, *, player: int | None = None) -> None:
        self._check_in_round(player)
        self.players[self.current_player].place_selected_tiles(row_or_floor)

    def end_turn(self, *, player: int | None = None) -> None:
        self._check_in_round(player)
        if not self._drafted or self.players[self.current_player].has_selected_tiles():
            raise RuntimeError("tiles must be drafted and placed before ending the turn")
        self._drafted = False
        if self.round_over():
            self._resolve_round()
        else:
            self.current_player = (self.current_player + 1) % len(self.players)

    def step(self, action: Action) -> None:
        """Play a whole turn: draft, place, end turn."""
        if action.build_row < 0:
            raise ValueError("invalid build row index")
        if action.from_center:
            self.pick_from_center(action.color)
        else:
            self.pick_from_factory(action.source_index, action.color)
        self.place_selected_tiles(action.build_row)
        self.end_turn()

    def reset_center(self) -> None:
        """Deal the factories for a new round and put the marker in the center."""
        supply = self.supply
        for idx in range(len(supply.factories)):
            drawn = supply.bag.draw_random(TILES_PER_FACTORY, self.picker)
            if drawn.size() < TILES_PER_FACTORY:
                if supply.box_lid.is_empty():
                    supply.factories[idx] = drawn
                    LOGGER.warning(
                        "bag and box lid exhausted; factories from %d on are short in round %d",
                        idx,
                        self.round_number,
                    )
                    break
                supply.bag.merge(supply.box_lid)
                drawn.merge(supply.bag.draw_random(TILES_PER_FACTORY - drawn.size(), self.picker))
            supply.factories[idx] = drawn
        supply.center.add(TileColor.WHITE)
        self.first_player_holder = None
        self.current_player = self.round_starter
        self.phase = GamePhase.ROUND_IN_PROGRESS
        LOGGER.info("round %d starts with %s", self.round_number, self.players[self.round_starter].name)

    def _board(self, player: int) -> PlayerBoard:
        if not 0 <= player < len(self.players):
            raise ValueError("invalid player index")
        return self.players[player]

    def _factory(self, factory_index: int) -> TileCollection:
        if not 0 <= factory_index < len(self.supply.factories):
            raise ValueError("invalid factory index")
        return self.supply.factories[factory_index]

    def _check_in_round(self, player: int | None) -> None:
        if self.phase != GamePhase.ROUND_IN_PROGRESS:
            raise RuntimeError(f"no turn in progress (phase {self.phase.value})")
        if player is not None and player != self.current_player:
            raise ValueError(f"player {player} is not the current player")

    def _check_can_draft(self, player: int | None) -> None:
        self._check_in_round(player)
        if self._drafted:
            raise RuntimeError("only one draft per turn")

    def _select(self, picked: TileCollection) -> None:
        self.players[self.current_player].set_selected_tiles(picked)
        self._drafted = True

    def _resolve_round(self) -> None:
        self.phase = GamePhase.ROUND_RESOLVING
        center = self.supply.center
        if TileColor.WHITE in center:
            center.remove_all_of_color(TileColor.WHITE)
            LOGGER.warning("first player marker left untaken in round %d", self.round_number)

        count = len(self.players)
        for offset in range(count):
            idx = (self.current_player + offset) % count
            board = self.players[idx]
            discard = board.finish_round()
            # The marker leaves circulation here; reset_center brings a fresh one.
            discard.remove_all_of_color(TileColor.WHITE)
            self.supply.box_lid.merge(discard)
            self.round_log.append(
                {
                    "round": self.round_number,
                    "player": board.index,
                    "gained": board.last_round.gained,
                    "floor_penalty": board.last_round.floor_penalty,
                    "floor_tiles": board.last_round.floor_tiles,
                    "score_after": board.score,
                }
            )
        if self.first_player_holder is not None:
            self.round_starter = self.first_player_holder

        if any(board.has_complete_row() for board in self.players):
            self._finish_game()
            return
        if self.supply.bag.is_empty() and self.supply.box_lid.is_empty():
            LOGGER.warning("no tiles left to deal after round %d; ending the game", self.round_number)
            self._finish_game()
            return
        self.round_number += 1
        self.reset_center()

    def _finish_game(self) -> None:
        scores = [board.finish_game() for board in self.players]
        self.winner_index = pick_winner(scores)
        self.winner = self.players[self.winner_index].name
        self.phase = GamePhase.GAME_OVER
        LOGGER.info("game over after %d rounds; %s wins with scores %s", self.round_number, self.winner, scores)
        for observer in list(self._observers):
            observer(self.winner)


def new_game(
    player_count: int = 2,
    names: Sequence[str] | None = None,
    *,
    seed: int | None = None,
    picker: IndexPicker | None = None,
    starting_player: int | None = None,
) -> Game:
    return Game(player_count, names, seed=seed, picker=picker, starting_player=starting_player)
