from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import Color


PALETTE = {
    Color.EMPTY: (20, 20, 26),
    Color.RED: (240, 0, 0),
    Color.GREEN: (0, 240, 0),
    Color.BLUE: (0, 0, 240),
    Color.MAGENTA: (240, 0, 240),
    Color.CYAN: (0, 240, 240),
    Color.YELLOW: (240, 240, 0),
}


def color_for_value(v: int) -> Tuple[int, int, int]:
    return PALETTE.get(abs(v), (200, 200, 200))


def _highlight(color: Tuple[int, int, int]) -> Tuple[int, int, int]:
    return tuple(min(255, c + 90) for c in color)  # type: ignore[return-value]


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def _grid_surface(self, state: np.ndarray, full_lines: Iterable[int] = ()) -> pygame.Surface:
        h, w = state.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        full_lines = set(full_lines)
        for y in range(h):
            # Full rows stay on screen for one tick before they are removed
            full = y in full_lines
            for x in range(w):
                v = int(state[y, x])
                color = color_for_value(v)
                if full:
                    color = _highlight(color)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def draw(self, screen: pygame.Surface, state: np.ndarray, full_lines: Iterable[int] = (),
             message: Optional[str] = None) -> None:
        grid_surf = self._grid_surface(state, full_lines)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        if message:
            font = pygame.font.SysFont(None, 32)
            text = font.render(message, True, (255, 255, 255))
            rect = text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
