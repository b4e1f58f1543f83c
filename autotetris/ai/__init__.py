"""AI components: board heuristic and placement search."""

from autotetris.ai.heuristic import TUNED_WEIGHTS, HeuristicBreakdown, Weights, evaluate
from autotetris.ai.search import MAX_SEARCH_DEPTH, HeuristicAI, plan_commands, play_placement

__all__ = [
    "TUNED_WEIGHTS",
    "HeuristicBreakdown",
    "Weights",
    "evaluate",
    "MAX_SEARCH_DEPTH",
    "HeuristicAI",
    "plan_commands",
    "play_placement",
]
