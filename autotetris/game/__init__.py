"""Game logic: piece geometry, queue, board, and game orchestrator."""

from autotetris.game.pieces import PIECE_TYPES, PIECES, DropPosition, Piece, PieceKind
from autotetris.game.board import Board
from autotetris.game.piece_queue import PieceQueue
from autotetris.game.tetris import Action, LockOrderError, TetrisGame

__all__ = [
    "PIECE_TYPES",
    "PIECES",
    "DropPosition",
    "Piece",
    "PieceKind",
    "Board",
    "PieceQueue",
    "Action",
    "LockOrderError",
    "TetrisGame",
]
