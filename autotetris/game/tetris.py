"""
Game orchestrator — the state machine tying Board, Piece and PieceQueue.

A turn runs spawn -> player/AI commands -> gravity tick -> lock -> row clear
-> respawn, and ends for good once a freshly spawned piece overlaps the
stack. This object is the only writer of its board and piece; the AI works on
clones made with clone().
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from autotetris.game.board import Board
from autotetris.game.pieces import Piece, PieceKind
from autotetris.game.piece_queue import PieceQueue

if TYPE_CHECKING:
    from autotetris.ai.heuristic import HeuristicBreakdown


class Action(enum.IntEnum):
    """Commands accepted from the keyboard or from the AI."""
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    TICK = 6
    RESET = 7
    NOOP = 8


class LockOrderError(RuntimeError):
    """A piece was locked while it still had room to fall."""


class TetrisGame:
    """Authoritative Tetris state: board, active piece, queue and counters.

    Attributes:
        board: The settled cells.
        queue: Upcoming piece kinds.
        current_piece: The falling piece, or None between lock and respawn.
        game_over: Set once a spawned piece overlaps the stack.
        pieces_spawned: Number of pieces spawned since the last reset.
        rows_cleared: Number of rows cleared since the last reset.
    """

    def __init__(
        self,
        board_width: int = 10,
        board_height: int = 20,
        seed: int | None = None,
    ) -> None:
        """Initialize a new game and spawn its first piece.

        Args:
            board_width: Board width in columns.
            board_height: Board height in rows.
            seed: Seed for the piece queue. The same seed is reused on reset().
        """
        self.board = Board(board_width, board_height)
        self.seed = seed
        self.queue = PieceQueue(seed)
        self.current_piece: Piece | None = None
        self.game_over: bool = False
        self.pieces_spawned: int = 0
        self.rows_cleared: int = 0
        self._spawn_piece()

    def reset(self) -> dict[str, Any]:
        """Reset the game to the state it had right after construction.

        Returns:
            Initial game state dict (same format as get_state()).
        """
        self.board.reset()
        self.queue = PieceQueue(self.seed)
        self.current_piece = None
        self.game_over = False
        self.pieces_spawned = 0
        self.rows_cleared = 0
        self._spawn_piece()
        return self.get_state()

    def step(self, action: int) -> dict[str, Any]:
        """Execute one command.

        Args:
            action: An Action enum value.

        Returns:
            State dict from get_state() after the command.
        """
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE_CW:
            self.rotate_clockwise()
        elif action == Action.ROTATE_CCW:
            self.rotate_counterclockwise()
        elif action == Action.SOFT_DROP:
            self.drop_one_step()
        elif action == Action.HARD_DROP:
            self.total_drop()
        elif action == Action.TICK:
            self.tick()
        elif action == Action.RESET:
            self.reset()
        elif action != Action.NOOP:
            raise ValueError(f"Unknown action: {action!r}")
        return self.get_state()

    # ── Commands ────────────────────────────────────────────────────────

    def move_left(self) -> None:
        self._attempt(Piece.move_left, Piece.move_right)

    def move_right(self) -> None:
        self._attempt(Piece.move_right, Piece.move_left)

    def rotate_clockwise(self) -> None:
        self._attempt(Piece.rotate_clockwise, Piece.rotate_counterclockwise)

    def rotate_counterclockwise(self) -> None:
        self._attempt(Piece.rotate_counterclockwise, Piece.rotate_clockwise)

    def drop_one_step(self) -> bool:
        """Drop the piece one row, or lock it if it is resting.

        Returns:
            True if the piece moved down, False if it locked or there was
            nothing to drop.
        """
        if self.game_over or self.current_piece is None:
            return False

        if self._can_drop():
            self.current_piece.drop_one_row()
            return True

        self._lock_piece()
        return False

    def total_drop(self) -> None:
        """Drop the piece to the bottom, lock it, clear rows, and respawn."""
        if self.game_over or self.current_piece is None:
            return
        # Each successful drop moves one row, so height + 1 calls always lock.
        for _ in range(self.board.height + 1):
            if not self.drop_one_step():
                break
        self._clear_rows()
        self._spawn_piece()

    def tick(self) -> None:
        """Make a gravity step: drop once, clear full rows, spawn if needed."""
        if self.game_over:
            return
        self.drop_one_step()
        self._clear_rows()
        self._spawn_piece()

    # ── State checks ────────────────────────────────────────────────────

    def is_valid_state(self) -> bool:
        """True if every cell of the piece is in bounds and unoccupied."""
        if self.current_piece is None:
            return True
        return all(
            self.board.is_within_bounds(col, row) and not self.board.is_occupied(col, row)
            for col, row in self.current_piece.occupied_cells()
        )

    def _is_overlapping(self) -> bool:
        return any(
            self.board.is_occupied(col, row)
            for col, row in self.current_piece.occupied_cells()
        )

    def _can_drop(self) -> bool:
        """False when the piece touches the floor or the top of the stack."""
        for col, row in self.current_piece.occupied_cells():
            if row + 1 >= self.board.height:
                return False
            if self.board.is_occupied(col, row + 1):
                return False
        return True

    # ── Internal transitions ────────────────────────────────────────────

    def _attempt(self, mutate, revert) -> None:
        """Apply a piece mutation and undo it if the result is invalid."""
        if self.game_over or self.current_piece is None:
            return
        mutate(self.current_piece)
        if not self.is_valid_state():
            revert(self.current_piece)

    def _lock_piece(self) -> None:
        """Turn the active piece into settled cells and discard it.

        Raises:
            LockOrderError: If the piece could still drop.
        """
        if self._can_drop():
            raise LockOrderError(
                f"{self.current_piece.kind.name} piece at row {self.current_piece.row} "
                "cannot be locked while it can still drop"
            )
        tag = int(self.current_piece.kind)
        self.board.settle(
            (col, row, tag) for col, row in self.current_piece.occupied_cells()
        )
        self.current_piece = None

    def _clear_rows(self) -> int:
        lines = self.board.clear_full_rows()
        self.rows_cleared += lines
        return lines

    def _spawn_piece(self) -> None:
        """Spawn the next piece if none is active; detect game over."""
        if self.current_piece is not None:
            return
        self.current_piece = self.queue.create()
        self.pieces_spawned += 1
        if self._is_overlapping():
            self.game_over = True

    # ── Queries ─────────────────────────────────────────────────────────

    def settled_cells(self) -> list[tuple[int, int, int]]:
        return self.board.cells()

    def piece_cells(self) -> list[tuple[int, int]]:
        if self.current_piece is None:
            return []
        return self.current_piece.occupied_cells()

    def next_kind(self) -> PieceKind:
        return self.queue.peek_next()

    def heuristic_breakdown(self) -> HeuristicBreakdown:
        """Raw heuristic signals of the current board (for display)."""
        from autotetris.ai.heuristic import HeuristicBreakdown
        return HeuristicBreakdown.from_board(self.board)

    def get_state(self) -> dict[str, Any]:
        """Return a dict describing the full observable game state.

        Returns:
            Dict with keys:
              - settled_cells: list of (col, row, tag)
              - piece_cells: list of (col, row) of the active piece
              - current_kind: PieceKind or None
              - current_rotation: int or None
              - next_kind: PieceKind
              - game_over: bool
              - rows_cleared: int
              - pieces_spawned: int
        """
        piece = self.current_piece
        return {
            "settled_cells": self.settled_cells(),
            "piece_cells": self.piece_cells(),
            "current_kind": piece.kind if piece is not None else None,
            "current_rotation": piece.rotation if piece is not None else None,
            "next_kind": self.next_kind(),
            "game_over": self.game_over,
            "rows_cleared": self.rows_cleared,
            "pieces_spawned": self.pieces_spawned,
        }

    def clone(self) -> TetrisGame:
        """Copy the game for simulation.

        Board and piece are copied and the queue is forked, so nothing done
        to the clone reaches this game or its future piece sequence.
        """
        game = TetrisGame.__new__(TetrisGame)
        game.board = self.board.copy()
        game.seed = self.seed
        game.queue = self.queue.clone()
        game.current_piece = self.current_piece.copy() if self.current_piece is not None else None
        game.game_over = self.game_over
        game.pieces_spawned = self.pieces_spawned
        game.rows_cleared = self.rows_cleared
        return game
