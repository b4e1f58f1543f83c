from __future__ import annotations

from autotetris.game.pieces import Piece, PieceKind
from autotetris.game.tetris import TetrisGame


def place(game: TetrisGame, kind: PieceKind, column: int = 0, row: int = 0, rotation: int = 0) -> Piece:
    """Replace the active piece with one of ``kind`` at the given anchor."""
    piece = Piece(kind, column, row, rotation)
    game.current_piece = piece
    return piece


def fill_row(game: TetrisGame, row: int, columns, tag: int = 1) -> None:
    game.board.settle((col, row, tag) for col in columns)


def queue_kinds(game: TetrisGame, kinds) -> None:
    """Make ``kinds`` the next pieces the game's queue hands out."""
    game.queue._queue = list(kinds)
