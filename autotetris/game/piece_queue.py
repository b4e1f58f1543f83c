"""
7-bag piece queue.

Upcoming kinds are generated in shuffled batches of all seven pieces. A new
bag is appended whenever the queue would otherwise drop below one entry, so
the next piece can always be peeked.
"""

from __future__ import annotations

import random

from autotetris.game.pieces import Piece, PieceKind

BAG: tuple[PieceKind, ...] = tuple(PieceKind)


class PieceQueue:
    """Ordered sequence of upcoming piece kinds fed by the 7-bag randomizer.

    Args:
        seed: Seed or ready-made ``random.Random`` for reproducible games.
            ``None`` seeds from system entropy.
    """

    def __init__(self, seed: int | random.Random | None = None) -> None:
        if isinstance(seed, random.Random):
            self._rng = seed
        else:
            self._rng = random.Random(seed)
        self._queue: list[PieceKind] = []

    def __len__(self) -> int:
        return len(self._queue)

    def _append_bag(self) -> None:
        bag = list(BAG)
        self._rng.shuffle(bag)
        self._queue.extend(bag)

    def create(self) -> Piece:
        """Pop the next kind and return a fresh piece at its spawn position."""
        if len(self._queue) <= 1:
            self._append_bag()
        return Piece.spawn(self._queue.pop(0))

    def peek_next(self) -> PieceKind:
        """Return the kind the next create() will produce, without consuming it."""
        if not self._queue:
            self._append_bag()
        return self._queue[0]

    def upcoming(self, count: int) -> list[PieceKind]:
        """The next ``count`` kinds, topping up with bags as needed."""
        while len(self._queue) < count:
            self._append_bag()
        return list(self._queue[:count])

    def clone(self) -> PieceQueue:
        """Copy the queue and fork its random state.

        The clone draws exactly the sequence the original would, and drawing
        from it never advances the original.
        """
        rng = random.Random()
        rng.setstate(self._rng.getstate())
        queue = PieceQueue(rng)
        queue._queue = list(self._queue)
        return queue
