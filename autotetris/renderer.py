"""
Pygame renderer for a game session.

Draws the board grid, the active piece and a sidebar with the next piece
preview, counters, the heuristic breakdown and the AI settings. The renderer
only reads state; it never mutates the game.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from autotetris.ai.heuristic import Weights
from autotetris.game.pieces import PIECE_TYPES, PIECES, Piece
from autotetris.session import GameSession


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
DIM_TEXT_COLOR = (150, 150, 160)
HIGHLIGHT_COLOR = (100, 200, 255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)
CENTER_MARK_COLOR = (255, 0, 255)

# ── Settled-cell tag -> RGB color mapping (built from PIECE_TYPES at import) ──
PIECE_COLORS: dict[int, tuple[int, int, int]] = {
    int(piece["kind"]): piece["color"] for piece in PIECE_TYPES
}


class TetrisRenderer:
    """Pygame-based view of a GameSession.

    The window is divided into:
      - Left: board area (cell_size * board_width) x (cell_size * board_height)
      - Right: sidebar with next piece, counters, heuristic and AI status

    Attributes:
        session: The session being rendered.
        cell_size: Pixel size of each grid cell.
        show_centers: Mark the active piece's rotation center (debug).
        selected_weight: Index of the weight highlighted for adjustment.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 9

    def __init__(
        self,
        session: GameSession,
        cell_size: int = 30,
        show_centers: bool = False,
    ) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first
        call to render(), so headless environments don't open a window.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.session = session
        self.cell_size = cell_size
        self.show_centers = show_centers
        self.selected_weight = 0

        board = session.game.board
        self.board_pixel_width = cell_size * board.width
        self.board_pixel_height = cell_size * board.height
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self) -> None:
        """Draw the current session state and flip the display."""
        if not self._initialized:
            self._init_pygame()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board()
        self._draw_current_piece()
        self._draw_sidebar()
        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )
        if self.session.game.game_over:
            self._draw_game_over_overlay()
        pygame.display.flip()

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("autotetris")
        self._font = pygame.font.SysFont("monospace", 20)
        self._small_font = pygame.font.SysFont("monospace", 14)
        self._initialized = True

    def _draw_cell(self, x: int, y: int, color: tuple[int, int, int], size: int) -> None:
        pygame.draw.rect(self.screen, color, (x, y, size, size))
        # Slightly darker border for a 3D effect
        darker = tuple(max(0, c - 40) for c in color)
        pygame.draw.rect(self.screen, darker, (x, y, size, size), 1)

    def _draw_board(self) -> None:
        """Draw empty cells, settled cells and grid lines."""
        board = self.session.game.board
        size = self.cell_size
        for row in range(board.height):
            for col in range(board.width):
                x, y = col * size, row * size
                pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, (x, y, size, size))
                pygame.draw.rect(self.screen, GRID_LINE_COLOR, (x, y, size, size), 1)

        for col, row, tag in board.cells():
            color = PIECE_COLORS.get(tag, (128, 128, 128))
            self._draw_cell(col * self.cell_size, row * self.cell_size, color, self.cell_size)

    def _draw_current_piece(self) -> None:
        piece = self.session.game.current_piece
        if piece is None:
            return
        for col, row in piece.occupied_cells():
            self._draw_cell(col * self.cell_size, row * self.cell_size, piece.color, self.cell_size)

        if self.show_centers:
            cx, cy = piece.center_point()
            pygame.draw.circle(
                self.screen,
                CENTER_MARK_COLOR,
                (cx * self.cell_size + self.cell_size // 2, cy * self.cell_size + self.cell_size // 2),
                4,
            )

    def _draw_sidebar(self) -> None:
        session = self.session
        game = session.game
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        x = sidebar_x + 15
        self._draw_next_preview(x, 15)

        y = 150
        for label, value in (("ROWS", game.rows_cleared), ("PIECES", game.pieces_spawned)):
            self._draw_text(f"{label}: {value}", x, y)
            y += 28

        y += 10
        for line in game.heuristic_breakdown().as_text().splitlines():
            self._draw_text(line, x, y, font=self._small_font)
            y += 18

        y += 20
        ai_label = "ON" if session.ai_enabled else "OFF"
        self._draw_text(f"AI: {ai_label}  depth {session.ai.depth}", x, y)
        y += 28
        for i, name in enumerate(Weights.names()):
            value = getattr(session.ai.weights, name)
            color = HIGHLIGHT_COLOR if i == self.selected_weight else DIM_TEXT_COLOR
            self._draw_text(f"{i + 1} {name}: {value:.1f}", x, y, color=color, font=self._small_font)
            y += 18

        y += 20
        for line in ("Tab: toggle AI", "+/-: depth", "1-4, [ ]: weights", "R: reset"):
            self._draw_text(line, x, y, color=DIM_TEXT_COLOR, font=self._small_font)
            y += 18

    def _draw_next_preview(self, x_offset: int, y_offset: int) -> None:
        """Draw the NEXT label and the upcoming piece in its spawn rotation."""
        self._draw_text("NEXT", x_offset, y_offset)
        preview_cell = self.cell_size * 2 // 3
        box_size = preview_cell * 5
        box_y = y_offset + 25
        pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, (x_offset, box_y, box_size, box_size))
        pygame.draw.rect(self.screen, BORDER_COLOR, (x_offset, box_y, box_size, box_size), 1)

        piece = Piece.spawn(self.session.game.next_kind())
        piece.column, piece.row = 0, 0
        offset_x = x_offset + (box_size - piece.width * preview_cell) // 2
        offset_y = box_y + (box_size - piece.height * preview_cell) // 2
        for col, row in piece.occupied_cells():
            self._draw_cell(
                offset_x + col * preview_cell,
                offset_y + row * preview_cell,
                PIECES[piece.kind]["color"],
                preview_cell,
            )

    def _draw_game_over_overlay(self) -> None:
        """Semi-transparent game over overlay with restart instructions."""
        overlay = pygame.Surface(
            (self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA
        )
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        font_large = pygame.font.SysFont("monospace", 36, bold=True)
        text_go = font_large.render("GAME OVER", True, (255, 50, 50))
        text_restart = self._small_font.render("Press R to restart", True, TEXT_COLOR)

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        self.screen.blit(text_go, (cx - text_go.get_width() // 2, cy - 40))
        self.screen.blit(text_restart, (cx - text_restart.get_width() // 2, cy + 10))

    def _draw_text(
        self,
        text: str,
        x: int,
        y: int,
        color: tuple[int, int, int] = TEXT_COLOR,
        font: pygame.font.Font | None = None,
    ) -> None:
        surface = (font or self._font).render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
