"""
Bounded-lookahead placement search.

For the current piece (and, with depth > 1, the pieces after it) every drop
position is simulated on a clone of the game: force the placement at row 0,
drop it all the way, clear rows, spawn the next piece. The resulting boards
are scored with the heuristic and the first move of the best line is
returned. The live game is never touched.

Cost grows as positions ** depth, roughly 34 clones per level on a 10-wide
board, so depth is capped.
"""

from __future__ import annotations

import dataclasses
from typing import NamedTuple

from autotetris.ai.heuristic import Weights, evaluate
from autotetris.game.pieces import DropPosition
from autotetris.game.tetris import Action, TetrisGame

MAX_SEARCH_DEPTH = 3


class SearchNode(NamedTuple):
    """A simulated future and the drop positions chosen to reach it."""
    game: TetrisGame
    path: tuple[DropPosition, ...]


def _validate_depth(depth: int, max_depth: int) -> int:
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ValueError(f"Search depth must be an integer, got {depth!r}")
    if depth < 1:
        raise ValueError(f"Search depth must be positive, got {depth}")
    if depth > max_depth:
        raise ValueError(f"Search depth {depth} exceeds the maximum of {max_depth}")
    return depth


def expand(node: SearchNode) -> list[SearchNode]:
    """Simulate every drop position of the node's active piece.

    A node whose game has ended has nothing to place and is returned as is.
    """
    game = node.game
    if game.game_over or game.current_piece is None:
        return [node]

    children = []
    for position in game.current_piece.enumerate_drop_positions(game.board.width):
        child = game.clone()
        child.current_piece.force_placement(position)
        child.total_drop()
        children.append(SearchNode(child, node.path + (position,)))
    return children


class HeuristicAI:
    """Greedy placement search scored by a weighted board heuristic.

    Attributes:
        weights: Heuristic factors; set_weight() swaps in an updated copy.
        depth: Number of consecutive placements to look ahead.
        max_depth: Upper bound accepted for depth.
    """

    def __init__(
        self,
        weights: Weights | None = None,
        depth: int = 1,
        max_depth: int = MAX_SEARCH_DEPTH,
    ) -> None:
        self.weights = weights or Weights()
        self.max_depth = max_depth
        self.depth = _validate_depth(depth, max_depth)

    def set_weight(self, name: str, value: float) -> None:
        if name not in Weights.names():
            raise ValueError(f"Unknown heuristic weight: {name!r}")
        self.weights = dataclasses.replace(self.weights, **{name: float(value)})

    def set_depth(self, depth: int) -> None:
        self.depth = _validate_depth(depth, self.max_depth)

    def best_position(self, game: TetrisGame, depth: int | None = None) -> DropPosition:
        """Pick the drop position for the game's current piece.

        Expands ``depth`` levels breadth-first, scores every leaf board and
        returns the first move on the path to the lowest score. Ties go to
        the leaf enumerated first: rotation states in order, columns
        ascending, parents in the order they were expanded.

        Args:
            game: Live game; it is only cloned, never mutated.
            depth: Lookahead in placements; defaults to self.depth.

        Returns:
            The drop position to play now.

        Raises:
            ValueError: If depth is not a positive integer within max_depth,
                or the game has no piece to place.
        """
        depth = _validate_depth(self.depth if depth is None else depth, self.max_depth)
        if game.game_over or game.current_piece is None:
            raise ValueError("No active piece to place")

        frontier = [SearchNode(game.clone(), ())]
        for _ in range(depth):
            frontier = [child for node in frontier for child in expand(node)]

        scored = [(evaluate(node.game.board, self.weights), node) for node in frontier]
        _, best_node = min(scored, key=lambda item: item[0])
        return best_node.path[0]


def plan_commands(game: TetrisGame, target: DropPosition) -> list[Action]:
    """Commands that bring the current piece to ``target`` and drop it.

    Clockwise rotations come first, then horizontal moves, then a hard drop.
    Rotation keeps the anchor column, so the shift is measured up front.
    """
    piece = game.current_piece
    if piece is None:
        return []
    turns = (target.rotation - piece.rotation) % piece.num_rotations
    shift = target.column - piece.column
    commands = [Action.ROTATE_CW] * turns
    commands += [Action.RIGHT if shift > 0 else Action.LEFT] * abs(shift)
    commands.append(Action.HARD_DROP)
    return commands


def play_placement(game: TetrisGame, target: DropPosition) -> None:
    """Walk the live piece to ``target`` with game commands, then drop it.

    Every rotation and move goes through TetrisGame.step(), so the stack is
    respected. If the game rejects one, the piece is hard-dropped where it
    stands.
    """
    for action in plan_commands(game, target):
        before = game.current_piece.copy()
        game.step(action)
        if action != Action.HARD_DROP and game.current_piece == before:
            game.step(Action.HARD_DROP)
            return
