from __future__ import annotations

import pytest

from autotetris.game.pieces import PIECE_TYPES, PIECES, DropPosition, Piece, PieceKind


def test_every_kind_has_four_cells_per_state():
    for shape in PIECE_TYPES:
        assert len(shape["sizes"]) == len(shape["rotations"]) == len(shape["centers"])
        for (width, height), cells in zip(shape["sizes"], shape["rotations"]):
            assert len(set(cells)) == 4
            assert max(dx for dx, _ in cells) == width - 1
            assert max(dy for _, dy in cells) == height - 1
            assert min(dx for dx, _ in cells) == 0
            assert min(dy for _, dy in cells) == 0


@pytest.mark.parametrize(
    "kind, states",
    [
        (PieceKind.O, 1),
        (PieceKind.I, 2),
        (PieceKind.S, 2),
        (PieceKind.Z, 2),
        (PieceKind.J, 4),
        (PieceKind.L, 4),
        (PieceKind.T, 4),
    ],
)
def test_rotation_state_counts(kind, states):
    assert Piece(kind).num_rotations == states


def test_spawn_positions():
    i_piece = Piece.spawn(PieceKind.I)
    assert (i_piece.column, i_piece.row, i_piece.rotation) == (4, 0, 1)
    assert i_piece.occupied_cells() == [(4, 0), (5, 0), (6, 0), (7, 0)]

    o_piece = Piece.spawn(PieceKind.O)
    assert (o_piece.column, o_piece.row) == (4, 0)

    t_piece = Piece.spawn(PieceKind.T)
    assert sorted(t_piece.occupied_cells()) == [(3, 1), (4, 0), (4, 1), (5, 1)]


def test_occupied_cells_follow_anchor():
    piece = Piece(PieceKind.O, column=2, row=5)
    assert sorted(piece.occupied_cells()) == [(2, 5), (2, 6), (3, 5), (3, 6)]


def test_move_left_then_right_restores_column():
    piece = Piece.spawn(PieceKind.L)
    piece.move_left()
    assert piece.column == 2
    piece.move_right()
    assert piece.column == 3


def test_rotation_wraps_both_ways():
    piece = Piece(PieceKind.T)
    piece.rotate_counterclockwise()
    assert piece.rotation == 3
    piece.rotate_clockwise()
    assert piece.rotation == 0

    o_piece = Piece(PieceKind.O)
    o_piece.rotate_clockwise()
    assert o_piece.rotation == 0


def test_drop_one_row():
    piece = Piece(PieceKind.S, row=3)
    piece.drop_one_row()
    assert piece.row == 4


def test_force_placement_resets_row():
    piece = Piece(PieceKind.J, column=3, row=7, rotation=0)
    piece.force_placement(DropPosition(column=8, rotation=3))
    assert (piece.column, piece.row, piece.rotation) == (8, 0, 3)


def test_enumerate_drop_positions_o_piece():
    positions = Piece(PieceKind.O).enumerate_drop_positions(10)
    assert positions == [DropPosition(c, 0) for c in range(9)]


def test_enumerate_drop_positions_i_piece():
    positions = Piece(PieceKind.I).enumerate_drop_positions(10)
    assert len(positions) == 10 + 7
    assert positions[:10] == [DropPosition(c, 0) for c in range(10)]
    assert positions[10:] == [DropPosition(c, 1) for c in range(7)]


def test_enumerate_drop_positions_stay_in_bounds():
    for kind in PieceKind:
        piece = Piece(kind)
        for position in piece.enumerate_drop_positions(10):
            piece.force_placement(position)
            assert all(0 <= col < 10 for col, _ in piece.occupied_cells())


def test_copy_is_independent():
    piece = Piece(PieceKind.Z, column=1, row=2, rotation=1)
    clone = piece.copy()
    clone.move_right()
    assert piece.column == 1
    assert clone == Piece(PieceKind.Z, column=2, row=2, rotation=1)


def test_center_point_and_color():
    piece = Piece(PieceKind.T, column=3, row=0)
    assert piece.center_point() == (4, 1)
    assert piece.color == PIECES[PieceKind.T]["color"]
