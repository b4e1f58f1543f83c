"""
Weighted linear board heuristic.

    score = w1 * heights_sum + w2 * heights_diff_sum + w3 * hole_count + w4 * max_height

Raw sums, no normalization. Lower is better: the search minimizes it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from autotetris.game.board import Board


@dataclass(frozen=True)
class Weights:
    """Factors for the four board signals.

    The defaults weigh holes most heavily, which keeps stacks clean.
    Instances are immutable; use dataclasses.replace() to change a factor.
    """

    heights_sum: float = 1.0
    heights_diff_sum: float = 0.0
    hole_count: float = 10.0
    max_height: float = 0.0

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> Weights:
        """Build weights from the ``weights`` mapping of the config file.

        Missing names keep their defaults.

        Raises:
            ValueError: If the mapping holds an unknown name.
        """
        if not config:
            return cls()
        unknown = set(config) - set(cls.names())
        if unknown:
            raise ValueError(f"Unknown heuristic weights: {sorted(unknown)}")
        return cls(**{name: float(value) for name, value in config.items()})

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


# Smaller-magnitude set that plays well in practice.
TUNED_WEIGHTS = Weights(heights_sum=0.1, heights_diff_sum=0.1, hole_count=1.0, max_height=0.0)


@dataclass(frozen=True)
class HeuristicBreakdown:
    """The raw board signals the heuristic combines."""

    heights_sum: int
    heights_diff_sum: int
    hole_count: int
    max_height: int

    @classmethod
    def from_board(cls, board: Board) -> HeuristicBreakdown:
        return cls(
            heights_sum=board.heights_sum(),
            heights_diff_sum=board.heights_difference_sum(),
            hole_count=board.hole_count(),
            max_height=board.max_height(),
        )

    def score(self, weights: Weights) -> float:
        return (
            weights.heights_sum * self.heights_sum
            + weights.heights_diff_sum * self.heights_diff_sum
            + weights.hole_count * self.hole_count
            + weights.max_height * self.max_height
        )

    def as_text(self) -> str:
        """Multi-line text for the heuristic debug panel."""
        return (
            f"Height sum: {self.heights_sum}\n"
            f"Height diff sum: {self.heights_diff_sum}\n"
            f"Hole count: {self.hole_count}\n"
            f"Max height: {self.max_height}"
        )


def evaluate(board: Board, weights: Weights) -> float:
    """Score a board; lower is better."""
    return HeuristicBreakdown.from_board(board).score(weights)
