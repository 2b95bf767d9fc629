from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from .grid import Board
from .pieces import Action, Piece
from .shapes import NUM_ORIENTATIONS, PIECE_COLORS, Color, Coordinate, PieceType

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    height: int = 18
    width: int = 10
    random_seed: Optional[int] = None
    drop_interval_ms: int = 600


class Game:
    """Falling-block engine: one board, at most one falling piece.

    Not thread-safe. Callers that drive the game from several sources (a drop
    timer and key presses) must make sure only one `update()` runs at a time;
    `GameSession` does that with a lock.
    """

    def __init__(self, height: int, width: int, rng: Optional[random.Random] = None) -> None:
        self.board = Board(height, width)
        self.rng = rng or random.Random()
        self.piece: Optional[Piece] = None
        self.started = False
        self.over = False
        self.last_rows_cleared = 0
        self.rows_cleared_total = 0

    @classmethod
    def from_config(cls, config: Optional[GameConfig] = None) -> "Game":
        config = config or GameConfig()
        return cls(config.height, config.width, random.Random(config.random_seed))

    def reset(self) -> None:
        self.board = Board(self.board.height, self.board.width)
        self.piece = None
        self.started = False
        self.over = False
        self.last_rows_cleared = 0
        self.rows_cleared_total = 0

    # ---------- Queries ----------
    def get_board(self) -> Board:
        return self.board

    def get_piece(self) -> Optional[Piece]:
        return self.piece

    def game_started(self) -> bool:
        return self.started

    def game_over(self) -> bool:
        return self.over

    # ---------- Transitions ----------
    def start(self) -> None:
        self.started = True
        self._spawn()

    def _spawn(self) -> bool:
        """Spawn a piece; a spawn that does not fit ends the game."""
        self._new_piece()
        if self.detect_conflict(self.piece.get_coords()):
            logger.debug("spawn blocked, game over")
            self.over = True
            return False
        return True

    def _new_piece(self) -> None:
        pivot = (self.board.width // 2 - 1, -1)
        self.piece = Piece(
            kind=self.rng.choice(list(PieceType)),
            orientation=self.rng.randrange(NUM_ORIENTATIONS),
            pivot=pivot,
            color=self.rng.choice(PIECE_COLORS),
        )
        logger.debug("new piece %s/%d at %s", self.piece.kind.name, self.piece.orientation, pivot)

    def detect_conflict(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.board.width or y >= self.board.height:
                return True
            if self.board.get_color(x, y) != Color.EMPTY:
                return True
        return False

    def update(self, action: Action) -> bool:
        """Advance one tick with `action`; False once the game is over."""
        if self.over:
            return False
        action = Action(action)

        # Rows completed by the previous lock are cleared here, one tick late
        self.last_rows_cleared = self.board.remove_full_rows()
        self.rows_cleared_total += self.last_rows_cleared

        if self.piece is None and not self._spawn():
            return False

        if not self.detect_conflict(self.piece.get_next_cells(action)):
            self.piece.update(action)
        elif action == Action.DOWN:
            logger.debug("piece landed at %s", self.piece.pivot)
            self.board.add_piece(self.piece)
            self.piece = None
        else:
            logger.debug("%s rejected", action.name)
        return True

    def get_state(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the settled cells
        state = self.board.clone_state()
        if self.piece is not None and not self.over:
            color = int(self.piece.get_color())
            for x, y in self.piece.get_coords():
                if 0 <= y < self.board.height and 0 <= x < self.board.width:
                    state[y, x] = color
        return state
