"""
Tetromino geometry table and the falling piece value type.

Every piece kind is described by one static dict; a single Piece class looks
its geometry up by kind. Rotation does not use wall kicks: a rotation either
fits in place or is reverted by the game.

Coordinate convention:
  - Offsets are (dx, dy) pairs relative to the piece's anchor, the top-left
    corner of the current rotation's bounding box.
  - On the board, row 0 is the top and row increases downward.
  - Column 0 is the left edge and column increases rightward.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple


class PieceKind(enum.IntEnum):
    """The seven tetrominoes. The value doubles as the settled-cell tag."""
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


class DropPosition(NamedTuple):
    """Horizontal placement choice; the row is always 0 when enumerated."""
    column: int
    rotation: int


# =============================================================================
# Piece Colors: standard Tetris guideline colors (RGB)
# =============================================================================

COLOR_CYAN   = (0, 255, 255)    # I
COLOR_YELLOW = (255, 255, 0)    # O
COLOR_PURPLE = (128, 0, 128)    # T
COLOR_GREEN  = (0, 255, 0)      # S
COLOR_RED    = (255, 0, 0)      # Z
COLOR_BLUE   = (0, 0, 255)      # J
COLOR_ORANGE = (255, 165, 0)    # L

# =============================================================================
# Tetromino Definitions
# =============================================================================
# sizes:     (width, height) of the bounding box for each rotation state
# rotations: the 4 occupied (dx, dy) offsets for each rotation state
# centers:   pivot offset per state, only used for debug drawing
# spawn:     (column, row, rotation) of a freshly created piece

I_PIECE: dict = {
    "kind": PieceKind.I,
    "name": "I",
    "color": COLOR_CYAN,
    "sizes": [(1, 4), (4, 1)],
    "rotations": [
        [(0, 0), (0, 1), (0, 2), (0, 3)],
        [(0, 0), (1, 0), (2, 0), (3, 0)],
    ],
    "centers": [(0, 0), (1, 0)],
    # Spawns lying flat.
    "spawn": (4, 0, 1),
}

O_PIECE: dict = {
    "kind": PieceKind.O,
    "name": "O",
    "color": COLOR_YELLOW,
    "sizes": [(2, 2)],
    "rotations": [
        [(0, 0), (1, 0), (0, 1), (1, 1)],
    ],
    "centers": [(0, 0)],
    "spawn": (4, 0, 0),
}

T_PIECE: dict = {
    "kind": PieceKind.T,
    "name": "T",
    "color": COLOR_PURPLE,
    "sizes": [(3, 2), (2, 3), (3, 2), (2, 3)],
    "rotations": [
        [(1, 0), (0, 1), (1, 1), (2, 1)],
        [(0, 0), (0, 1), (1, 1), (0, 2)],
        [(0, 0), (1, 0), (2, 0), (1, 1)],
        [(1, 0), (0, 1), (1, 1), (1, 2)],
    ],
    "centers": [(1, 1), (0, 1), (1, 0), (1, 1)],
    "spawn": (3, 0, 0),
}

S_PIECE: dict = {
    "kind": PieceKind.S,
    "name": "S",
    "color": COLOR_GREEN,
    "sizes": [(3, 2), (2, 3)],
    "rotations": [
        [(1, 0), (2, 0), (0, 1), (1, 1)],
        [(0, 0), (0, 1), (1, 1), (1, 2)],
    ],
    "centers": [(1, 1), (0, 1)],
    "spawn": (3, 0, 0),
}

Z_PIECE: dict = {
    "kind": PieceKind.Z,
    "name": "Z",
    "color": COLOR_RED,
    "sizes": [(3, 2), (2, 3)],
    "rotations": [
        [(0, 0), (1, 0), (2, 1), (1, 1)],
        [(1, 0), (0, 1), (1, 1), (0, 2)],
    ],
    "centers": [(1, 1), (0, 1)],
    "spawn": (3, 0, 0),
}

J_PIECE: dict = {
    "kind": PieceKind.J,
    "name": "J",
    "color": COLOR_BLUE,
    "sizes": [(3, 2), (2, 3), (3, 2), (2, 3)],
    "rotations": [
        [(0, 0), (0, 1), (1, 1), (2, 1)],
        [(0, 0), (0, 1), (1, 0), (0, 2)],
        [(0, 0), (1, 0), (2, 0), (2, 1)],
        [(1, 0), (0, 2), (1, 1), (1, 2)],
    ],
    "centers": [(1, 1), (0, 1), (1, 0), (1, 1)],
    "spawn": (3, 0, 0),
}

L_PIECE: dict = {
    "kind": PieceKind.L,
    "name": "L",
    "color": COLOR_ORANGE,
    "sizes": [(3, 2), (2, 3), (3, 2), (2, 3)],
    "rotations": [
        [(2, 0), (0, 1), (1, 1), (2, 1)],
        [(0, 0), (0, 1), (1, 2), (0, 2)],
        [(0, 0), (1, 0), (2, 0), (0, 1)],
        [(1, 0), (0, 0), (1, 1), (1, 2)],
    ],
    "centers": [(1, 1), (0, 1), (1, 0), (1, 1)],
    "spawn": (3, 0, 0),
}

# =============================================================================
# Lookup tables
# =============================================================================

PIECE_TYPES: list[dict] = [I_PIECE, O_PIECE, T_PIECE, S_PIECE, Z_PIECE, J_PIECE, L_PIECE]

PIECES: dict[PieceKind, dict] = {piece["kind"]: piece for piece in PIECE_TYPES}


@dataclass
class Piece:
    """The active tetromino: a kind plus an anchor and a rotation index.

    All mutators are unconditional. Validity against the board is checked by
    the game, which reverts a mutation that leaves the piece in an invalid
    state.

    Attributes:
        kind: Which of the seven tetrominoes this is.
        column: Anchor column (left edge of the bounding box).
        row: Anchor row (top edge of the bounding box).
        rotation: Index into the kind's rotation states.
    """

    kind: PieceKind
    column: int = 0
    row: int = 0
    rotation: int = 0

    @classmethod
    def spawn(cls, kind: PieceKind) -> Piece:
        """Create a piece of ``kind`` at its canonical spawn position."""
        column, row, rotation = PIECES[kind]["spawn"]
        return cls(PieceKind(kind), column, row, rotation)

    @property
    def shape(self) -> dict:
        return PIECES[self.kind]

    @property
    def num_rotations(self) -> int:
        return len(self.shape["rotations"])

    @property
    def width(self) -> int:
        return self.shape["sizes"][self.rotation][0]

    @property
    def height(self) -> int:
        return self.shape["sizes"][self.rotation][1]

    @property
    def color(self) -> tuple[int, int, int]:
        return self.shape["color"]

    def occupied_cells(self) -> list[tuple[int, int]]:
        """Absolute (column, row) of the four cells in the current state."""
        return [
            (self.column + dx, self.row + dy)
            for dx, dy in self.shape["rotations"][self.rotation]
        ]

    def center_point(self) -> tuple[int, int]:
        dx, dy = self.shape["centers"][self.rotation]
        return self.column + dx, self.row + dy

    def move_left(self) -> None:
        self.column -= 1

    def move_right(self) -> None:
        self.column += 1

    def drop_one_row(self) -> None:
        self.row += 1

    def rotate_clockwise(self) -> None:
        self.rotation = (self.rotation + 1) % self.num_rotations

    def rotate_counterclockwise(self) -> None:
        self.rotation = (self.rotation - 1) % self.num_rotations

    def force_placement(self, drop_position: DropPosition) -> None:
        """Jump straight to a drop position at row 0, skipping validation.

        Only the AI simulation uses this, and only with positions produced by
        enumerate_drop_positions().
        """
        self.rotation = drop_position.rotation
        self.column = drop_position.column
        self.row = 0

    def enumerate_drop_positions(self, board_width: int = 10) -> list[DropPosition]:
        """List every (column, rotation) at which this kind can enter the board.

        Rotation states come in their declared order and columns ascend within
        each state. Stack geometry is ignored: the piece is assumed to rotate
        freely at row 0 before dropping straight down.

        Args:
            board_width: Number of board columns.

        Returns:
            Drop positions in enumeration order.
        """
        positions = []
        for rotation, (width, _) in enumerate(self.shape["sizes"]):
            for column in range(board_width - width + 1):
                positions.append(DropPosition(column, rotation))
        return positions

    def copy(self) -> Piece:
        return Piece(self.kind, self.column, self.row, self.rotation)
