"""
Headless evaluation of the heuristic AI.

Plays a batch of games with the AI choosing every placement and collects
per-game and aggregate statistics, optionally writing one CSV row per game.
Useful for comparing weight sets and search depths.
"""

from __future__ import annotations

import csv
import pathlib
import time
from typing import Any

import numpy as np

from autotetris.ai.heuristic import Weights
from autotetris.ai.search import MAX_SEARCH_DEPTH, HeuristicAI, play_placement
from autotetris.game.tetris import TetrisGame

CSV_FIELDNAMES = [
    "game",
    "seed",
    "pieces",
    "rows_cleared",
    "game_over",
    "holes_at_end",
    "height_sum_at_end",
    "max_height_at_end",
    "bumpiness_at_end",
]


def play_game(ai: HeuristicAI, game: TetrisGame, max_pieces: int = 500) -> dict[str, Any]:
    """Let the AI play one game to the end or until max_pieces have spawned.

    Each chosen placement is played with real rotate, move and drop
    commands, so a target the stack blocks ends in a drop where the piece
    got stuck.

    Returns:
        Per-game record with the keys of CSV_FIELDNAMES except game/seed.
    """
    while not game.game_over and game.pieces_spawned < max_pieces:
        play_placement(game, ai.best_position(game))

    breakdown = game.heuristic_breakdown()
    return {
        "pieces": game.pieces_spawned,
        "rows_cleared": game.rows_cleared,
        "game_over": game.game_over,
        "holes_at_end": breakdown.hole_count,
        "height_sum_at_end": breakdown.heights_sum,
        "max_height_at_end": breakdown.max_height,
        "bumpiness_at_end": breakdown.heights_diff_sum,
    }


def summarize(records: list[dict[str, Any]]) -> dict[str, dict[str, float]]:
    """Mean/median/std/min/max of the numeric per-game fields."""
    summary = {}
    for key in ("pieces", "rows_cleared", "holes_at_end", "max_height_at_end"):
        arr = np.array([r[key] for r in records], dtype=float)
        summary[key] = {
            "mean": float(arr.mean()),
            "median": float(np.median(arr)),
            "std": float(arr.std()),
            "min": float(arr.min()),
            "max": float(arr.max()),
        }
    return summary


def evaluate(
    config: dict[str, Any],
    num_games: int = 10,
    max_pieces: int = 500,
    csv_path: str | pathlib.Path | None = None,
) -> list[dict[str, Any]]:
    """Run a batch of AI games and print statistics.

    Game i uses seed ``config["seed"] + i`` when a seed is configured, so a
    batch is reproducible.

    Args:
        config: Config dict loaded from autotetris.yaml.
        num_games: Number of games to play.
        max_pieces: Piece cap per game, so strong weight sets terminate.
        csv_path: Optional path for one CSV row per game.

    Returns:
        The per-game records.
    """
    if num_games < 1:
        raise ValueError(f"num_games must be positive, got {num_games}")

    weights = Weights.from_config(config.get("weights"))
    ai = HeuristicAI(
        weights=weights,
        depth=config.get("depth", 1),
        max_depth=config.get("max_depth", MAX_SEARCH_DEPTH),
    )
    base_seed = config.get("seed")

    print(f"Weights: {weights.as_dict()}")
    print(f"Running {num_games} games at depth {ai.depth} (cap {max_pieces} pieces)...\n")
    start_time = time.time()

    records = []
    for i in range(num_games):
        seed = None if base_seed is None else base_seed + i
        game = TetrisGame(
            config.get("board_width", 10),
            config.get("board_height", 20),
            seed=seed,
        )
        record = {"game": i, "seed": seed, **play_game(ai, game, max_pieces)}
        records.append(record)
        print(
            f"  Game {i + 1}/{num_games} | Pieces: {record['pieces']} | "
            f"Rows: {record['rows_cleared']} | Holes: {record['holes_at_end']}"
            + ("" if record["game_over"] else " (capped)")
        )

    elapsed = time.time() - start_time
    print(f"\nEvaluation complete in {elapsed:.1f}s ({elapsed / num_games:.2f}s per game)\n")

    print(f"{'Metric':<20} {'Mean':>8} {'Median':>8} {'Std':>8} {'Min':>8} {'Max':>8}")
    print("-" * 64)
    for name, stats in summarize(records).items():
        print(
            f"{name:<20} {stats['mean']:>8.1f} {stats['median']:>8.1f} "
            f"{stats['std']:>8.1f} {stats['min']:>8.1f} {stats['max']:>8.1f}"
        )

    if csv_path is not None:
        csv_path = pathlib.Path(csv_path)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDNAMES)
            writer.writeheader()
            writer.writerows(records)
        print(f"\nPer-game results written to {csv_path}")

    return records
