import pytest

from azul_rules import (
    DRAFTING_COLORS,
    FLOOR,
    PlayerBoard,
    TileCollection,
    TileColor,
    end_game_bonus,
    score_placement,
    wall_column,
)
from azul_rules.scoring import empty_wall, floor_penalty


def _board_with_selection(tiles) -> PlayerBoard:
    board = PlayerBoard(name="Ada")
    board.set_selected_tiles(TileCollection(tiles))
    return board


def test_wall_column_follows_diagonal():
    assert wall_column(0, TileColor.BLUE) == 0
    assert wall_column(1, TileColor.BLUE) == 1
    assert wall_column(2, TileColor.RED) == 4
    assert wall_column(4, TileColor.TEAL) == 3
    for row in range(5):
        assert sorted(wall_column(row, c) for c in DRAFTING_COLORS) == [0, 1, 2, 3, 4]
    with pytest.raises(ValueError):
        wall_column(0, TileColor.WHITE)


def test_isolated_and_adjacency_scoring():
    wall = empty_wall()
    wall[0][0] = True
    assert score_placement(wall, 0, 0) == 1  # isolated

    # Horizontal run of length 3.
    wall[0][1] = True
    wall[0][2] = True
    assert score_placement(wall, 0, 2) == 3

    # Vertical run of length 3.
    wall = empty_wall()
    for r in range(3):
        wall[r][0] = True
    assert score_placement(wall, 2, 0) == 3

    # Both directions: row run 2 plus column run 2.
    wall = empty_wall()
    wall[0][0] = True
    wall[1][1] = True
    wall[0][1] = True
    assert score_placement(wall, 0, 1) == 4

    # Diagonal neighbors do not count.
    wall = empty_wall()
    wall[0][0] = True
    wall[2][2] = True
    wall[1][1] = True
    assert score_placement(wall, 1, 1) == 1


def test_floor_penalty_caps_at_seven_tiles():
    assert [floor_penalty(n) for n in range(8)] == [0, -1, -2, -4, -6, -8, -11, -14]
    assert floor_penalty(8) == floor_penalty(7)
    assert floor_penalty(20) == -14


def test_full_wall_bonus_is_95():
    wall = [[True] * 5 for _ in range(5)]
    bonus = end_game_bonus(wall)
    assert (bonus.rows, bonus.columns, bonus.colors) == (5, 5, 5)
    # 5 rows x 2 + 5 columns x 7 + 5 colors x 10.
    assert bonus.total == 95


def test_endgame_bonuses_row_column_color():
    wall = empty_wall()
    wall[0] = [True] * 5
    for r in range(5):
        wall[r][0] = True
        wall[r][wall_column(r, TileColor.YELLOW)] = True

    board = PlayerBoard(name="Ada", wall=wall)
    # Row +2, column +7, yellow +10.
    assert board.finish_game() == 19
    assert board.bonus.total == 19


def test_three_reds_fill_row_two_exactly():
    board = _board_with_selection([TileColor.RED] * 3)
    assert board.can_place_in_row(2)

    board.place_selected_tiles(2)

    row = board.build_rows[2]
    assert (row.color, row.count) == (TileColor.RED, 3)
    assert row.is_full()
    assert board.floor_line_tiles().is_empty()
    assert not board.has_selected_tiles()


def test_row_caps_and_overflows_to_floor():
    board = _board_with_selection([TileColor.RED] * 2)
    board.place_selected_tiles(2)
    board.set_selected_tiles(TileCollection.of(TileColor.RED, 2))

    board.place_selected_tiles(2)

    assert board.build_row_tiles(2).as_list() == [TileColor.RED] * 3
    assert board.floor_line_tiles().as_list() == [TileColor.RED]


def test_mismatched_color_goes_entirely_to_floor():
    board = _board_with_selection([TileColor.BLUE])
    board.place_selected_tiles(3)
    board.set_selected_tiles(TileCollection.of(TileColor.RED, 2))
    assert not board.can_place_in_row(3)

    board.place_selected_tiles(3)

    assert board.build_row_tiles(3).as_list() == [TileColor.BLUE]
    assert board.floor_line_tiles().as_list() == [TileColor.RED, TileColor.RED]


def test_marker_never_enters_a_build_row():
    board = _board_with_selection([TileColor.YELLOW, TileColor.WHITE, TileColor.YELLOW])
    assert board.can_place_in_row(4)

    board.place_selected_tiles(4)

    assert board.build_row_tiles(4).as_list() == [TileColor.YELLOW] * 2
    assert board.floor_line_tiles().as_list() == [TileColor.WHITE]


def test_floor_target_takes_whole_selection():
    board = _board_with_selection([TileColor.BLACK, TileColor.BLACK, TileColor.WHITE])
    board.place_selected_tiles(FLOOR)
    assert board.floor_line_tiles().size() == 3
    assert all(board.build_row_tiles(r).is_empty() for r in range(5))


def test_placement_requires_selection():
    board = PlayerBoard(name="Ada")
    with pytest.raises(RuntimeError, match="must be selected"):
        board.place_selected_tiles(0)
    assert not board.can_place_in_row(0)


def test_selection_cannot_be_replaced_before_placement():
    board = _board_with_selection([TileColor.RED])
    with pytest.raises(RuntimeError):
        board.set_selected_tiles(TileCollection.of(TileColor.BLUE, 1))
    assert board.selected_tiles().as_list() == [TileColor.RED]


@pytest.mark.parametrize("row", range(5))
def test_tiled_wall_cell_blocks_its_row_for_that_color(row):
    board = PlayerBoard(name="Ada")
    for color in DRAFTING_COLORS:
        board.wall[row][wall_column(row, color)] = True
        assert not board.can_place_in_row(row, color)
    assert not any(board.can_place_in_row(row, color) for color in DRAFTING_COLORS)


def test_placing_onto_tiled_color_is_routed_to_floor():
    board = _board_with_selection([TileColor.BLUE])
    board.wall[0][wall_column(0, TileColor.BLUE)] = True
    board.place_selected_tiles(0)
    assert board.build_row_tiles(0).is_empty()
    assert board.floor_line_tiles().as_list() == [TileColor.BLUE]


def test_finish_round_tiles_full_rows_and_discards_rest():
    board = _board_with_selection([TileColor.RED] * 3)
    board.place_selected_tiles(2)
    board.set_selected_tiles(TileCollection.of(TileColor.BLUE, 1))
    board.place_selected_tiles(3)  # partial row stays put

    discard = board.finish_round()

    col = wall_column(2, TileColor.RED)
    assert board.wall[2][col] is True
    assert discard.as_list() == [TileColor.RED, TileColor.RED]
    assert board.build_row_tiles(2).is_empty()
    assert board.build_rows[2].color is None
    assert board.build_row_tiles(3).as_list() == [TileColor.BLUE]
    assert board.score == 1


def test_adjacent_wall_placements_same_round_score():
    board = _board_with_selection([TileColor.BLUE])
    board.place_selected_tiles(0)
    # Teal sits under blue's column in row 1.
    board.set_selected_tiles(TileCollection.of(TileColor.TEAL, 2))
    board.place_selected_tiles(1)
    assert wall_column(0, TileColor.BLUE) == wall_column(1, TileColor.TEAL)

    board.finish_round()

    # Row 0 scores alone (1), then row 1 joins it vertically (2).
    assert board.score == 3
    assert board.last_round.gained == 3


def test_floor_penalty_clamps_score_at_zero():
    board = _board_with_selection([TileColor.BLUE] * 4)
    board.score = 5
    board.place_selected_tiles(FLOOR)

    discard = board.finish_round()

    assert board.score == 0
    assert discard.size() == 4
    assert board.floor_line_tiles().is_empty()


def test_floor_overflow_beyond_seven_is_discarded_without_extra_penalty():
    eight = _board_with_selection([TileColor.RED] * 8)
    seven = _board_with_selection([TileColor.RED] * 7)
    for board in (eight, seven):
        board.score = 20
        board.place_selected_tiles(FLOOR)

    assert eight.finish_round().size() == 8
    assert seven.finish_round().size() == 7
    assert eight.score == seven.score == 6


def test_has_complete_row():
    board = PlayerBoard(name="Ada")
    for col in range(4):
        board.wall[3][col] = True
    assert not board.has_complete_row()
    board.wall[3][4] = True
    assert board.has_complete_row()


def test_wall_grid_is_a_copy():
    board = PlayerBoard(name="Ada")
    grid = board.wall_grid()
    grid[0][0] = True
    assert board.wall[0][0] is False
