from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .pieces import Piece
from .shapes import Color, Coordinate


class BoardRow:
    """One settled row: a color per column plus a running count of filled cells."""

    def __init__(self, width: int) -> None:
        self.width = int(width)
        self.colors = np.full(self.width, Color.EMPTY, dtype=np.int8)
        self.filled = 0

    def get_color(self, offset: int) -> Color:
        return Color(int(self.colors[offset]))

    def set_color(self, offset: int, color: Color) -> None:
        # Cells are only ever filled; whole rows are removed instead of cleared
        if self.colors[offset] == Color.EMPTY and color != Color.EMPTY:
            self.filled += 1
        self.colors[offset] = color

    def is_full(self) -> bool:
        return self.filled == self.width


class Board:
    """Settled cells of the playing field.

    Rows are kept bottom-up and only materialize when a piece lands on them or
    above them. Callers address rows top-down with `y`, so row `y` lives at
    index `height - y - 1`. Rows may also grow past the visible top (negative
    `y`) when a piece locks inside the spawn area.
    """

    def __init__(self, height: int, width: int) -> None:
        if int(height) <= 0 or int(width) <= 0:
            raise ValueError(f"board dimensions must be positive, got {height}x{width}")
        self.height = int(height)
        self.width = int(width)
        self.rows: List[BoardRow] = []

    def get_height(self) -> int:
        return self.height

    def get_width(self) -> int:
        return self.width

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def _row_index(self, y: int) -> int:
        return self.height - y - 1

    def get_color(self, x: int, y: int) -> Color:
        row_idx = self._row_index(y)
        if row_idx < 0 or row_idx >= len(self.rows):
            return Color.EMPTY
        return self.rows[row_idx].get_color(x)

    def is_line_full(self, y: int) -> bool:
        row_idx = self._row_index(y)
        if row_idx < 0 or row_idx >= len(self.rows):
            return False
        return self.rows[row_idx].is_full()

    def place(self, cells: Iterable[Coordinate], color: Color) -> None:
        """Merge `cells` into the settled rows with `color`."""
        for x, y in cells:
            if not 0 <= x < self.width or y >= self.height:
                raise ValueError(f"cell {(x, y)} is outside a {self.height}x{self.width} board")
            row_idx = self._row_index(y)
            while row_idx >= len(self.rows):
                self.rows.append(BoardRow(self.width))
            self.rows[row_idx].set_color(x, color)

    def add_piece(self, piece: Piece) -> None:
        self.place(piece.get_coords(), piece.get_color())

    def remove_full_rows(self) -> int:
        """Drop every full row and return how many were removed.

        Rows above a removed one fall down on their own since addressing is
        relative to the row count.
        """
        kept = [row for row in self.rows if not row.is_full()]
        removed = len(self.rows) - len(kept)
        self.rows = kept
        return removed

    def clone_state(self) -> np.ndarray:
        """Visible rows as a `(height, width)` array, row 0 at the top."""
        state = np.zeros((self.height, self.width), dtype=np.int8)
        for row_idx, row in enumerate(self.rows[: self.height]):
            state[self.height - row_idx - 1] = row.colors
        return state
