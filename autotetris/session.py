"""
Live game session: command routing and the two timer cadences.

The presentation layer forwards key presses to command() and elapsed time to
update(). Gravity ticks and AI-issued commands run on independent intervals.
While the AI is enabled it replaces manual input; either way every command
goes through the same TetrisGame.step() path.
"""

from __future__ import annotations

from typing import Any

from autotetris.ai.heuristic import Weights
from autotetris.ai.search import MAX_SEARCH_DEPTH, HeuristicAI, plan_commands
from autotetris.game.tetris import Action, TetrisGame


def _interval_ms(rate: float) -> float:
    if rate <= 0:
        raise ValueError(f"Rate must be positive, got {rate}")
    return 1000.0 / rate


class GameSession:
    """A live game plus its AI and timers.

    Attributes:
        game: The live game.
        ai: The heuristic search driving the game when ai_enabled is set.
        ai_enabled: Whether AI commands replace manual ones.
        tick_interval_ms: Milliseconds between gravity ticks.
        ai_interval_ms: Milliseconds between AI-issued commands.
        ai_commands: Number of commands the AI has issued.
    """

    def __init__(
        self,
        game: TetrisGame,
        ai: HeuristicAI | None = None,
        ai_enabled: bool = False,
        tick_rate: float = 2.5,
        ai_rate: float = 10.0,
    ) -> None:
        self.game = game
        self.ai = ai or HeuristicAI()
        self.ai_enabled = ai_enabled
        self.tick_interval_ms = _interval_ms(tick_rate)
        self.ai_interval_ms = _interval_ms(ai_rate)
        self.ai_commands = 0

        self._tick_elapsed = 0.0
        self._ai_elapsed = 0.0
        self._plan: list[Action] = []
        self._planned_for = -1

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> GameSession:
        """Build a session from a config dict (see config/autotetris.yaml)."""
        game = TetrisGame(
            config.get("board_width", 10),
            config.get("board_height", 20),
            seed=config.get("seed"),
        )
        ai = HeuristicAI(
            weights=Weights.from_config(config.get("weights")),
            depth=config.get("depth", 1),
            max_depth=config.get("max_depth", MAX_SEARCH_DEPTH),
        )
        return cls(
            game,
            ai,
            ai_enabled=config.get("ai_enabled", False),
            tick_rate=config.get("tick_rate", 2.5),
            ai_rate=config.get("ai_rate", 10.0),
        )

    def set_tick_rate(self, per_second: float) -> None:
        self.tick_interval_ms = _interval_ms(per_second)

    def set_ai_rate(self, per_second: float) -> None:
        self.ai_interval_ms = _interval_ms(per_second)

    def set_ai_enabled(self, enabled: bool) -> None:
        self.ai_enabled = enabled
        self._plan = []
        self._planned_for = -1
        self._ai_elapsed = 0.0

    def toggle_ai(self) -> None:
        self.set_ai_enabled(not self.ai_enabled)

    def command(self, action: Action) -> None:
        """Apply a manual command. Only RESET gets through while the AI plays."""
        if self.ai_enabled and action != Action.RESET:
            return
        self.game.step(action)
        if action == Action.RESET:
            self._tick_elapsed = 0.0
            self._plan = []
            self._planned_for = -1

    def update(self, elapsed_ms: float) -> None:
        """Advance both cadences by ``elapsed_ms`` milliseconds."""
        self._tick_elapsed += elapsed_ms
        while self._tick_elapsed >= self.tick_interval_ms:
            self._tick_elapsed -= self.tick_interval_ms
            self.game.tick()

        if not self.ai_enabled:
            return
        self._ai_elapsed += elapsed_ms
        while self._ai_elapsed >= self.ai_interval_ms:
            self._ai_elapsed -= self.ai_interval_ms
            self.ai_step()

    def ai_step(self) -> Action | None:
        """Issue the next AI command for the current piece.

        A new plan is searched whenever a new piece has spawned. If a planned
        rotation or move is rejected by the game the piece is hard-dropped
        where it is.

        Returns:
            The command issued, or None when there was nothing to do.
        """
        game = self.game
        if game.game_over or game.current_piece is None:
            return None

        if self._planned_for != game.pieces_spawned:
            target = self.ai.best_position(game)
            self._plan = plan_commands(game, target)
            self._planned_for = game.pieces_spawned

        if not self._plan:
            return None
        action = self._plan.pop(0)
        before = game.current_piece.copy()
        game.step(action)
        if action != Action.HARD_DROP and game.current_piece == before:
            self._plan = []
            action = Action.HARD_DROP
            game.step(action)
        self.ai_commands += 1
        return action
