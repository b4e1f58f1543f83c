"""
Record a demo GIF of the heuristic AI playing.

Renders the board to images using PIL (no pygame needed), then saves as GIF.
Usage: python scripts/record_gif.py [--depth 2] [--seed 0] [--pieces 150]
"""

import argparse
import sys
import pathlib

# Ensure project root is on path
PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from PIL import Image, ImageDraw, ImageFont
from autotetris.ai.heuristic import Weights
from autotetris.ai.search import HeuristicAI, play_placement
from autotetris.config import load_config
from autotetris.game.pieces import PIECE_TYPES, Piece
from autotetris.game.tetris import TetrisGame

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
CONFIG_PATH = PROJECT_ROOT / "config" / "autotetris.yaml"
OUTPUT_PATH = PROJECT_ROOT / "assets" / "demo.gif"
TARGET_FPS = 12
FRAME_DURATION_MS = 1000 // TARGET_FPS

# Visual settings
CELL_SIZE = 24
SIDEBAR_WIDTH = 180

# Colors (RGB)
BG_COLOR = (18, 18, 24)
GRID_COLOR = (40, 40, 50)
GRID_LINE_COLOR = (30, 30, 40)
SIDEBAR_BG = (14, 14, 20)
BORDER_COLOR = (80, 80, 100)
LABEL_COLOR = (140, 140, 160)
ACCENT_COLOR = (100, 200, 255)

# Piece colors by settled-cell tag, shared with the pygame renderer
PIECE_COLORS = {int(piece["kind"]): piece["color"] for piece in PIECE_TYPES}


def darken(color, amount=50):
    return tuple(max(0, c - amount) for c in color)


def lighten(color, amount=40):
    return tuple(min(255, c + amount) for c in color)


def try_load_font(size):
    """Try to load a monospace font, fall back to default."""
    font_paths = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
    ]
    for fp in font_paths:
        try:
            return ImageFont.truetype(fp, size)
        except OSError:
            continue
    return ImageFont.load_default()


FONT_SMALL = try_load_font(12)
FONT_LARGE = try_load_font(18)


def draw_cell(draw, x, y, color, size=CELL_SIZE):
    """Draw a single filled cell with 3D-style shading."""
    draw.rectangle([x, y, x + size - 1, y + size - 1], fill=color)
    highlight = lighten(color, 60)
    draw.line([(x, y), (x + size - 2, y)], fill=highlight, width=1)
    draw.line([(x, y), (x, y + size - 2)], fill=highlight, width=1)
    shadow = darken(color, 60)
    draw.line([(x + 1, y + size - 1), (x + size - 1, y + size - 1)], fill=shadow, width=1)
    draw.line([(x + size - 1, y + 1), (x + size - 1, y + size - 1)], fill=shadow, width=1)


def render_frame(game, ai):
    """Render the game as a PIL Image."""
    board = game.board
    board_w = board.width * CELL_SIZE
    board_h = board.height * CELL_SIZE
    img = Image.new("RGB", (board_w + SIDEBAR_WIDTH, board_h), BG_COLOR)
    draw = ImageDraw.Draw(img)

    for row in range(board.height):
        for col in range(board.width):
            x, y = col * CELL_SIZE, row * CELL_SIZE
            draw.rectangle([x, y, x + CELL_SIZE - 1, y + CELL_SIZE - 1], fill=GRID_COLOR, outline=GRID_LINE_COLOR)
    for col, row, tag in board.cells():
        draw_cell(draw, col * CELL_SIZE, row * CELL_SIZE, PIECE_COLORS.get(tag, (128, 128, 128)))
    if game.current_piece is not None:
        color = PIECE_COLORS[int(game.current_piece.kind)]
        for col, row in game.current_piece.occupied_cells():
            draw_cell(draw, col * CELL_SIZE, row * CELL_SIZE, color)
    draw.rectangle([0, 0, board_w - 1, board_h - 1], outline=BORDER_COLOR, width=2)

    # --- Sidebar ---
    sx = board_w
    draw.rectangle([sx, 0, sx + SIDEBAR_WIDTH - 1, board_h - 1], fill=SIDEBAR_BG)
    draw.line([(sx, 0), (sx, board_h)], fill=BORDER_COLOR, width=2)
    cx, cy = sx + 12, 12

    draw.text((cx, cy), "NEXT", fill=LABEL_COLOR, font=FONT_SMALL)
    cy += 18
    preview = Piece.spawn(game.next_kind())
    for dx, dy in preview.shape["rotations"][preview.rotation]:
        draw_cell(draw, cx + dx * 16, cy + dy * 16, PIECE_COLORS[int(preview.kind)], size=16)
    cy += 4 * 16 + 12

    stats = [
        ("ROWS", str(game.rows_cleared)),
        ("PIECES", str(game.pieces_spawned)),
        ("DEPTH", str(ai.depth)),
    ]
    for label, value in stats:
        draw.text((cx, cy), label, fill=LABEL_COLOR, font=FONT_SMALL)
        cy += 15
        draw.text((cx, cy), value, fill=ACCENT_COLOR, font=FONT_LARGE)
        cy += 28

    for line in game.heuristic_breakdown().as_text().splitlines():
        draw.text((cx, cy), line, fill=LABEL_COLOR, font=FONT_SMALL)
        cy += 15

    return img


def parse_args():
    parser = argparse.ArgumentParser(description="Record the heuristic AI to a GIF.")
    parser.add_argument("--depth", type=int, default=None)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--pieces", type=int, default=150, help="Stop after this many pieces.")
    parser.add_argument("--output", type=str, default=str(OUTPUT_PATH))
    return parser.parse_args()


def main():
    args = parse_args()
    config = load_config(CONFIG_PATH)
    output_path = pathlib.Path(args.output)

    ai = HeuristicAI(
        weights=Weights.from_config(config.get("weights")),
        depth=args.depth if args.depth is not None else config.get("depth", 1),
        max_depth=config.get("max_depth", 3),
    )
    game = TetrisGame(config.get("board_width", 10), config.get("board_height", 20), seed=args.seed)

    print("Recording demo GIF...")
    print(f"  Output: {output_path}")
    print(f"  Depth: {ai.depth}, seed: {args.seed}, pieces: {args.pieces}")

    frames = [render_frame(game, ai)]
    while not game.game_over and game.pieces_spawned < args.pieces:
        play_placement(game, ai.best_position(game))
        frames.append(render_frame(game, ai))

    # Freeze on the last frame for a second
    frames.extend(frames[-1].copy() for _ in range(TARGET_FPS))

    print(f"Recording complete: {len(frames)} frames, {game.rows_cleared} rows cleared")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    quantized = [f.quantize(colors=64, method=Image.Quantize.MEDIANCUT) for f in frames]
    quantized[0].save(
        str(output_path),
        save_all=True,
        append_images=quantized[1:],
        duration=FRAME_DURATION_MS,
        loop=0,
        optimize=True,
    )
    file_size_mb = output_path.stat().st_size / (1024 * 1024)
    print(f"GIF saved: {output_path} ({file_size_mb:.1f} MB)")


if __name__ == "__main__":
    main()
