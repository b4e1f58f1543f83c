"""
Entry point for autotetris.

Supports three modes:
  - play:     Play manually; Tab hands control to the AI at any time.
  - watch:    Watch the heuristic AI play.
  - evaluate: Run headless AI games and print statistics.

Usage:
    python main.py --mode play
    python main.py --mode watch --depth 2
    python main.py --mode evaluate --games 20 --seed 0 --csv results/eval.csv
"""

from __future__ import annotations

import argparse
import sys

from autotetris.config import DEFAULT_CONFIG_PATH, load_config


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config and the override attributes.
    """
    parser = argparse.ArgumentParser(
        description="autotetris — play Tetris or watch a heuristic AI play it.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "watch", "evaluate"],
        default="play",
        help="Run mode: 'play' (manual), 'watch' (AI plays), 'evaluate' (headless AI games).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="AI search depth in placements (overrides the config file).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece sequence (overrides the config file).",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=10,
        help="Number of games in 'evaluate' mode.",
    )
    parser.add_argument(
        "--max-pieces",
        type=int,
        default=500,
        help="Piece cap per game in 'evaluate' mode.",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write per-game results to this CSV file in 'evaluate' mode.",
    )
    return parser.parse_args()


def main() -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args()
    config = load_config(args.config)
    if args.depth is not None:
        config["depth"] = args.depth
    if args.seed is not None:
        config["seed"] = args.seed

    try:
        if args.mode == "play":
            from autotetris.play import play
            play(config)

        elif args.mode == "watch":
            from autotetris.play import play
            play(config, ai_enabled=True)

        elif args.mode == "evaluate":
            from autotetris.evaluate import evaluate
            evaluate(config, num_games=args.games, max_pieces=args.max_pieces, csv_path=args.csv)

        else:
            print(f"Unknown mode: {args.mode}", file=sys.stderr)
            sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
