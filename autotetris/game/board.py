"""
Board logic for a 10x20 Tetris grid.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - anything else = a settled cell, holding the tag of the piece that left it

Row 0 is the top of the board. Holding the settled cells in a grid means two
cells can never share a position.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np


class Board:
    """Settled cells with collision queries, row clearing, and height metrics.

    Attributes:
        width: Number of columns (default 10).
        height: Number of rows (default 20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        """Initialize an empty board.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_within_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def is_occupied(self, col: int, row: int) -> bool:
        """True if a settled cell sits at (col, row). Out of bounds is empty."""
        if not self.is_within_bounds(col, row):
            return False
        return bool(self.grid[row, col] != 0)

    def settle(self, cells: Iterable[tuple[int, int, int]]) -> None:
        """Write cells onto the board as settled.

        Does NOT check for collisions; the caller must have validated the
        position first.

        Args:
            cells: (col, row, tag) triples. The tag is opaque to the game
                logic but must be nonzero.

        Raises:
            ValueError: If a tag is 0, which would read back as empty.
        """
        for col, row, tag in cells:
            if tag == 0:
                raise ValueError(f"Settled cell at ({col}, {row}) needs a nonzero tag")
            self.grid[row, col] = tag

    def clear_full_rows(self) -> int:
        """Remove all fully filled rows and shift everything above them down.

        Returns:
            The number of rows cleared.
        """
        full = np.all(self.grid != 0, axis=1)
        lines_cleared = int(full.sum())
        if lines_cleared == 0:
            return 0

        remaining = self.grid[~full]
        empty_rows = np.zeros((lines_cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, remaining])
        return lines_cleared

    def heights(self) -> np.ndarray:
        """Get the height of every column (vectorized).

        A column's height is ``height - topmost_row`` of its settled cells.
        An empty column has height 0.

        Returns:
            Numpy array of ints with length equal to board width.
        """
        filled = self.grid != 0
        has_block = filled.any(axis=0)
        first_block = np.argmax(filled, axis=0)
        return np.where(has_block, self.height - first_block, 0)

    def heights_sum(self) -> int:
        return int(self.heights().sum())

    def heights_difference_sum(self) -> int:
        """Sum of |h[i] - h[i-1]| over adjacent columns."""
        return int(np.abs(np.diff(self.heights())).sum())

    def hole_count(self) -> int:
        """Count empty cells that have a settled cell anywhere above them.

        Per column this equals ``column_height - cells_in_column``.
        """
        filled = self.grid != 0
        block_above = np.maximum.accumulate(filled, axis=0)
        holes = block_above & ~filled
        return int(holes.sum())

    def max_height(self) -> int:
        """Height of the tallest column, 0 on an empty board."""
        return int(self.heights().max(initial=0))

    def cells(self) -> list[tuple[int, int, int]]:
        """Return every settled cell as (col, row, tag), top row first."""
        rows, cols = np.nonzero(self.grid)
        return [
            (int(col), int(row), int(self.grid[row, col]))
            for row, col in zip(rows, cols)
        ]

    def cell_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid."""
        return self.grid.copy()

    def copy(self) -> Board:
        board = Board(self.width, self.height)
        board.grid = self.grid.copy()
        return board

    def reset(self) -> None:
        """Clear the entire board, setting all cells to 0."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
