from __future__ import annotations

import pytest

from autotetris.ai.search import HeuristicAI
from autotetris.game.pieces import PieceKind
from autotetris.game.tetris import Action, TetrisGame
from autotetris.session import GameSession

from helpers import place


@pytest.fixture
def session(game) -> GameSession:
    return GameSession(game, tick_rate=2.5, ai_rate=10.0)


def test_intervals_from_rates(session):
    assert session.tick_interval_ms == pytest.approx(400.0)
    assert session.ai_interval_ms == pytest.approx(100.0)


@pytest.mark.parametrize("rate", [0, -1])
def test_non_positive_rates_rejected(game, rate):
    with pytest.raises(ValueError):
        GameSession(game, tick_rate=rate)
    with pytest.raises(ValueError):
        GameSession(game, ai_rate=rate)
    session = GameSession(game)
    with pytest.raises(ValueError):
        session.set_tick_rate(rate)
    with pytest.raises(ValueError):
        session.set_ai_rate(rate)


def test_gravity_cadence(session):
    row = session.game.current_piece.row
    session.update(399)
    assert session.game.current_piece.row == row
    session.update(1)
    assert session.game.current_piece.row == row + 1
    # Two more intervals elapsed in one frame.
    session.update(800)
    assert session.game.current_piece.row == row + 3


def test_manual_commands_reach_the_game(session):
    place(session.game, PieceKind.T, column=4, row=5)
    session.command(Action.LEFT)
    assert session.game.current_piece.column == 3
    session.command(Action.ROTATE_CW)
    assert session.game.current_piece.rotation == 1


def test_ai_blocks_manual_input_except_reset(session):
    place(session.game, PieceKind.T, column=4, row=5)
    session.set_ai_enabled(True)
    session.command(Action.LEFT)
    session.command(Action.HARD_DROP)
    assert session.game.current_piece.column == 4
    assert session.game.pieces_spawned == 1

    session.command(Action.RESET)
    assert session.game.pieces_spawned == 1
    assert session.game.current_piece.row == 0


def test_ai_disabled_by_default_issues_nothing(session):
    session.update(1000)
    assert session.ai_commands == 0


def test_ai_places_one_piece_ending_in_hard_drop(session):
    session.toggle_ai()
    assert session.ai_enabled

    actions = []
    while session.game.pieces_spawned == 1:
        actions.append(session.ai_step())
        assert len(actions) < 20

    assert actions[-1] == Action.HARD_DROP
    assert session.ai_commands == len(actions)
    assert session.game.board.cell_count() == 4


def test_ai_plan_matches_search(game):
    place(game, PieceKind.O, column=4)
    session = GameSession(game, ai_enabled=True)
    issued = [session.ai_step() for _ in range(5)]
    # O goes to column 0: four moves left, then the drop.
    assert issued == [Action.LEFT] * 4 + [Action.HARD_DROP]
    assert game.board.is_occupied(0, 19)
    assert game.board.is_occupied(1, 18)


def test_rejected_plan_step_falls_back_to_hard_drop(session):
    game = session.game
    place(game, PieceKind.O, column=0)
    session.set_ai_enabled(True)
    session._plan = [Action.LEFT, Action.LEFT]
    session._planned_for = game.pieces_spawned

    assert session.ai_step() == Action.HARD_DROP
    assert game.pieces_spawned == 2
    assert game.board.is_occupied(0, 19)


def test_update_drives_ai_cadence(session):
    session.set_ai_enabled(True)
    session.update(250)
    assert session.ai_commands == 2


def test_ai_idle_after_game_over(session):
    session.set_ai_enabled(True)
    session.game.game_over = True
    assert session.ai_step() is None
    assert session.ai_commands == 0


def test_from_config():
    config = {
        "board_width": 8,
        "board_height": 16,
        "seed": 5,
        "tick_rate": 5,
        "ai_rate": 20,
        "ai_enabled": True,
        "depth": 2,
        "weights": {"hole_count": 3.0},
    }
    session = GameSession.from_config(config)
    assert session.game.board.width == 8
    assert session.game.board.height == 16
    assert session.game.seed == 5
    assert session.tick_interval_ms == pytest.approx(200.0)
    assert session.ai_interval_ms == pytest.approx(50.0)
    assert session.ai_enabled
    assert session.ai.depth == 2
    assert session.ai.weights.hole_count == 3.0


def test_from_empty_config_uses_defaults():
    session = GameSession.from_config({})
    assert isinstance(session.game, TetrisGame)
    assert isinstance(session.ai, HeuristicAI)
    assert session.ai.depth == 1
    assert not session.ai_enabled
