from __future__ import annotations

from typing import Dict, Tuple

import pygame

from game_types import Color
from models import CellKind, Palette, Position
from session import GameSession


CONTROLS_TEXT = "Arrows: move | B: BFS hint | A: A* hint | R: new map | ESC: quit"


def cell_rect(pos: Position, cell_size: int) -> pygame.Rect:
    """Screen rect of a grid cell (the board starts at the window origin)."""
    return pygame.Rect(pos.x * cell_size, pos.y * cell_size, cell_size, cell_size)


def _kind_colors(palette: Palette) -> Dict[CellKind, Color]:
    return {
        CellKind.EMPTY: palette.empty,
        CellKind.WALL: palette.wall,
        CellKind.TREASURE: palette.treasure,
        # the player is drawn on top afterwards
        CellKind.PLAYER: palette.empty,
    }


def draw_cells(
    surf: pygame.Surface, session: GameSession, cell_size: int, palette: Palette
) -> None:
    """Draw every cell: hidden ones blank, revealed ones by kind, hints on top."""
    colors = _kind_colors(palette)
    grid = session.grid
    for pos in grid.positions():
        if not grid.is_visible(pos):
            color = palette.hidden
        elif pos in session.hint_cells:
            color = palette.hint
        else:
            color = colors[grid.get(pos)]
        pygame.draw.rect(surf, color, cell_rect(pos, cell_size))


def draw_player(
    surf: pygame.Surface, session: GameSession, cell_size: int, palette: Palette
) -> None:
    pygame.draw.rect(surf, palette.player, cell_rect(session.player, cell_size))


def draw_grid_lines(surf: pygame.Surface, size: int, cell_size: int, color: Color) -> None:
    end = size * cell_size
    for i in range(size + 1):
        offset = i * cell_size
        pygame.draw.line(surf, color, (offset, 0), (offset, end), 1)
        pygame.draw.line(surf, color, (0, offset), (end, offset), 1)


def draw_hud(
    surf: pygame.Surface,
    hud_font: pygame.font.Font,
    session: GameSession,
    top: int,
    elapsed: str,
    status: str,
    palette: Palette,
) -> None:
    """Draw the score/time line, the controls line and the status message."""
    lines = [
        f"Score: {session.score} | Treasures: {session.treasures_found}/{session.treasures_total} | Time: {elapsed}",
        CONTROLS_TEXT,
    ]
    if status:
        lines.append(status)
    y = top + 6
    for line in lines:
        surf.blit(hud_font.render(line, True, palette.text), (8, y))
        y += hud_font.get_linesize()


class GameRenderer:
    """Renderer that owns the fonts and draws a full frame."""

    HUD_LINES = 3

    def __init__(self, grid_size: int, cell_size: int, palette: Palette) -> None:
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.palette = palette
        self.hud_font = pygame.font.SysFont("monospace", max(12, cell_size // 2))

    @property
    def board_px(self) -> int:
        return self.grid_size * self.cell_size

    def window_size(self) -> Tuple[int, int]:
        hud_h = self.hud_font.get_linesize() * self.HUD_LINES + 12
        width = max(self.board_px, self.hud_font.size(CONTROLS_TEXT)[0] + 16)
        return width, self.board_px + hud_h

    def render_frame(
        self, screen: pygame.Surface, session: GameSession, elapsed: str, status: str
    ) -> None:
        """Render and present a full frame."""
        screen.fill(self.palette.background)
        draw_cells(screen, session, self.cell_size, self.palette)
        draw_player(screen, session, self.cell_size, self.palette)
        draw_grid_lines(screen, self.grid_size, self.cell_size, self.palette.grid_line)
        draw_hud(
            screen,
            self.hud_font,
            session,
            self.board_px,
            elapsed,
            status,
            self.palette,
        )
        pygame.display.flip()
