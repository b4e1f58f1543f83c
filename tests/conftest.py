from __future__ import annotations

import pytest

from autotetris.game.tetris import TetrisGame


@pytest.fixture
def game() -> TetrisGame:
    return TetrisGame(seed=1234)
