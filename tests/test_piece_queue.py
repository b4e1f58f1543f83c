from __future__ import annotations

from autotetris.game.pieces import Piece, PieceKind
from autotetris.game.piece_queue import PieceQueue


def test_first_bag_is_a_permutation():
    queue = PieceQueue(seed=7)
    kinds = [queue.create().kind for _ in range(7)]
    assert sorted(kinds) == sorted(PieceKind)


def test_consecutive_bags_each_hold_every_kind():
    queue = PieceQueue(seed=3)
    kinds = [queue.create().kind for _ in range(28)]
    for start in range(0, 28, 7):
        assert sorted(kinds[start:start + 7]) == sorted(PieceKind)


def test_peek_matches_next_create():
    queue = PieceQueue(seed=11)
    for _ in range(20):
        expected = queue.peek_next()
        assert queue.create().kind == expected


def test_queue_never_runs_dry():
    queue = PieceQueue(seed=0)
    for _ in range(30):
        queue.create()
        assert len(queue) >= 1


def test_bag_appended_only_when_low():
    queue = PieceQueue(seed=0)
    queue.create()
    assert len(queue) == 6
    for _ in range(5):
        queue.create()
    assert len(queue) == 1
    queue.create()
    assert len(queue) == 7


def test_create_returns_spawned_piece():
    queue = PieceQueue(seed=5)
    kind = queue.peek_next()
    assert queue.create() == Piece.spawn(kind)


def test_same_seed_same_sequence():
    a = PieceQueue(seed=42)
    b = PieceQueue(seed=42)
    assert [a.create().kind for _ in range(21)] == [b.create().kind for _ in range(21)]


def test_clone_forks_randomness():
    queue = PieceQueue(seed=9)
    queue.create()
    clone = queue.clone()

    simulated = [clone.create().kind for _ in range(20)]
    real = [queue.create().kind for _ in range(20)]
    assert simulated == real


def test_clone_does_not_consume_original():
    queue = PieceQueue(seed=9)
    upcoming = queue.upcoming(10)
    clone = queue.clone()
    for _ in range(10):
        clone.create()
    assert queue.upcoming(10) == upcoming
