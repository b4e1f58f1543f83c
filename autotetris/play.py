"""
Interactive pygame loop for manual play and for watching the AI.

The loop only translates key presses into session commands and feeds the
frame time to the session, which owns the gravity and AI cadences.
"""

from __future__ import annotations

from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from autotetris.ai.heuristic import Weights
from autotetris.game.tetris import Action
from autotetris.renderer import TetrisRenderer
from autotetris.session import GameSession

WEIGHT_STEP = 0.1

# ── Keyboard mapping ──────────────────────────────────────────────────────
# Arrows or WASD to move/rotate/soft drop, Z to rotate back, Space to hard drop
KEY_MAP: dict[int, Action] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Action.LEFT,
        pygame.K_a: Action.LEFT,
        pygame.K_RIGHT: Action.RIGHT,
        pygame.K_d: Action.RIGHT,
        pygame.K_UP: Action.ROTATE_CW,
        pygame.K_w: Action.ROTATE_CW,
        pygame.K_z: Action.ROTATE_CCW,
        pygame.K_DOWN: Action.SOFT_DROP,
        pygame.K_s: Action.SOFT_DROP,
        pygame.K_SPACE: Action.HARD_DROP,
        pygame.K_r: Action.RESET,
    }


def handle_ai_key(session: GameSession, renderer: TetrisRenderer, key: int) -> bool:
    """Apply an AI-settings key. Returns True if the key was consumed."""
    ai = session.ai
    names = Weights.names()
    if key == pygame.K_TAB:
        session.toggle_ai()
        print(f"AI {'on' if session.ai_enabled else 'off'}")
    elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
        if ai.depth < ai.max_depth:
            ai.set_depth(ai.depth + 1)
    elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
        if ai.depth > 1:
            ai.set_depth(ai.depth - 1)
    elif pygame.K_1 <= key < pygame.K_1 + len(names):
        renderer.selected_weight = key - pygame.K_1
    elif key in (pygame.K_LEFTBRACKET, pygame.K_RIGHTBRACKET):
        name = names[renderer.selected_weight]
        delta = WEIGHT_STEP if key == pygame.K_RIGHTBRACKET else -WEIGHT_STEP
        ai.set_weight(name, round(getattr(ai.weights, name) + delta, 2))
    else:
        return False
    return True


def play(config: dict[str, Any], ai_enabled: bool | None = None) -> None:
    """Run the game window until it is closed or Escape is pressed.

    Args:
        config: Config dict loaded from autotetris.yaml.
        ai_enabled: Start with the AI playing; None uses the config value.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    session = GameSession.from_config(config)
    if ai_enabled is not None:
        session.set_ai_enabled(ai_enabled)

    fps = config.get("fps", 60)
    renderer = TetrisRenderer(
        session,
        cell_size=config.get("cell_size", 30),
        show_centers=config.get("show_centers", False),
    )
    # Force renderer init before event loop (pygame must be initialized for event.get())
    renderer.render()
    clock = pygame.time.Clock()

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                running = False
                break
            if handle_ai_key(session, renderer, event.key):
                continue
            if event.key in KEY_MAP:
                session.command(KEY_MAP[event.key])

        if not running:
            break

        session.update(clock.tick(fps))
        renderer.render()

    print(
        f"Rows cleared: {session.game.rows_cleared} | "
        f"Pieces: {session.game.pieces_spawned} | AI commands: {session.ai_commands}"
    )
    renderer.close()
