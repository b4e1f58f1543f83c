from __future__ import annotations

import pytest

from autotetris.ai.heuristic import TUNED_WEIGHTS, Weights
from autotetris.ai.search import HeuristicAI, SearchNode, expand, plan_commands, play_placement
from autotetris.game.pieces import DropPosition, PieceKind
from autotetris.game.tetris import Action, TetrisGame

from helpers import fill_row, place, queue_kinds


def test_o_piece_on_empty_board_picks_leftmost(game):
    place(game, PieceKind.O, column=4)
    ai = HeuristicAI(Weights(heights_sum=1, heights_diff_sum=0, hole_count=10))
    assert ai.best_position(game, depth=1) == DropPosition(0, 0)


def test_prefers_completing_a_row(game):
    fill_row(game, 19, range(8))
    place(game, PieceKind.O, column=4)
    ai = HeuristicAI()
    assert ai.best_position(game) == DropPosition(8, 0)


def test_avoids_holes(game):
    # A one-wide step at column 0: a flat O would leave a hole under it.
    fill_row(game, 19, [0])
    place(game, PieceKind.O, column=4)
    ai = HeuristicAI()
    position = ai.best_position(game)
    assert position.column >= 1


def test_search_does_not_touch_live_game(game):
    fill_row(game, 19, range(5))
    piece = game.current_piece.copy()
    cells = game.board.cells()
    upcoming = game.queue.upcoming(7)

    HeuristicAI(depth=2).best_position(game)

    assert game.current_piece == piece
    assert game.board.cells() == cells
    assert game.queue.upcoming(7) == upcoming
    assert game.pieces_spawned == 1


def test_depth_two_sees_a_row_clear_depth_one_misses():
    game = TetrisGame(board_width=6, board_height=10, seed=0)
    fill_row(game, 9, [0, 1])
    place(game, PieceKind.O, column=2)
    queue_kinds(game, [PieceKind.O, PieceKind.O])
    ai = HeuristicAI()

    # Greedy: every flat O costs the same, leftmost wins.
    assert ai.best_position(game, depth=1) == DropPosition(0, 0)
    # Two O pieces at columns 2 and 4 complete the bottom row. The line
    # through column 2 is expanded before the one through column 4.
    assert ai.best_position(game, depth=2) == DropPosition(2, 0)


def test_depth_two_tie_goes_to_first_expanded_parent(game):
    place(game, PieceKind.O, column=4)
    queue_kinds(game, [PieceKind.O, PieceKind.O])
    assert HeuristicAI().best_position(game, depth=2) == DropPosition(0, 0)


def test_expand_enumerates_in_order(game):
    place(game, PieceKind.I, column=4, rotation=1)
    children = expand(SearchNode(game.clone(), ()))
    assert [child.path for child in children] == [
        (position,) for position in game.current_piece.enumerate_drop_positions(10)
    ]
    assert all(child.game.pieces_spawned == 2 for child in children)


def test_expand_keeps_finished_nodes(game):
    game.game_over = True
    node = SearchNode(game, (DropPosition(0, 0),))
    assert expand(node) == [node]


@pytest.mark.parametrize("depth", [0, -1, 1.5, True, 4])
def test_invalid_depth_rejected(game, depth):
    ai = HeuristicAI()
    with pytest.raises(ValueError):
        ai.best_position(game, depth=depth)


def test_invalid_depth_rejected_in_constructor_and_setter():
    with pytest.raises(ValueError):
        HeuristicAI(depth=0)
    ai = HeuristicAI(max_depth=2)
    with pytest.raises(ValueError):
        ai.set_depth(3)
    ai.set_depth(2)
    assert ai.depth == 2


def test_set_weight():
    ai = HeuristicAI()
    ai.set_weight("max_height", 0.7)
    assert ai.weights.max_height == 0.7
    with pytest.raises(ValueError):
        ai.set_weight("bumpiness", 1)


def test_set_weight_leaves_shared_preset_alone():
    ai = HeuristicAI(TUNED_WEIGHTS)
    other = HeuristicAI(TUNED_WEIGHTS)
    ai.set_weight("hole_count", 5.0)

    assert ai.weights.hole_count == 5.0
    assert TUNED_WEIGHTS.hole_count == 1.0
    assert other.weights.hole_count == 1.0


def test_finished_game_rejected(game):
    game.game_over = True
    with pytest.raises(ValueError):
        HeuristicAI().best_position(game)


def test_plan_commands(game):
    place(game, PieceKind.T, column=3, rotation=0)
    assert plan_commands(game, DropPosition(column=5, rotation=3)) == [
        Action.ROTATE_CW, Action.ROTATE_CW, Action.ROTATE_CW,
        Action.RIGHT, Action.RIGHT,
        Action.HARD_DROP,
    ]
    assert plan_commands(game, DropPosition(column=1, rotation=0)) == [
        Action.LEFT, Action.LEFT, Action.HARD_DROP,
    ]


def test_plan_commands_reaches_target(game):
    place(game, PieceKind.L, column=3, rotation=0)
    target = DropPosition(column=0, rotation=1)
    for action in plan_commands(game, target)[:-1]:
        game.step(action)
    assert (game.current_piece.column, game.current_piece.rotation) == (0, 1)


def test_play_placement_lands_on_target(game):
    place(game, PieceKind.L, column=3, rotation=0)
    play_placement(game, DropPosition(column=0, rotation=1))

    assert sorted(game.board.cells()) == [
        (0, 17, int(PieceKind.L)),
        (0, 18, int(PieceKind.L)),
        (0, 19, int(PieceKind.L)),
        (1, 19, int(PieceKind.L)),
    ]
    assert game.pieces_spawned == 2


def test_play_placement_drops_where_the_stack_blocks(game):
    for row in range(game.board.height):
        fill_row(game, row, [0, 1])
    place(game, PieceKind.O, column=4)

    play_placement(game, DropPosition(column=0, rotation=0))

    assert game.board.cell_count() == 44
    assert game.board.is_occupied(2, 19)
    assert game.board.is_occupied(3, 18)
    assert game.pieces_spawned == 2
