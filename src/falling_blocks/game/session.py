from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional, Tuple

import numpy as np

from .core import Game
from .pieces import Action

logger = logging.getLogger(__name__)


UpdateCallback = Callable[[Game], None]


class GameSession:
    """Serializes every call into a shared `Game`.

    The drop timer and the input loop both go through `update()`, which holds
    the lock for the engine step and the `on_update` callback, so a redraw
    always sees the state that step produced.
    """

    def __init__(self, game: Game, on_update: Optional[UpdateCallback] = None) -> None:
        self.game = game
        self.on_update = on_update
        self._lock = threading.Lock()

    def start(self) -> None:
        with self._lock:
            self.game.start()
            self._notify()

    def update(self, action: Action) -> bool:
        with self._lock:
            progressing = self.game.update(action)
            self._notify()
            return progressing

    def reset(self) -> None:
        with self._lock:
            self.game.reset()
            self._notify()

    def snapshot(self) -> np.ndarray:
        with self._lock:
            return self.game.get_state()

    def full_lines(self) -> List[int]:
        with self._lock:
            return self._full_lines()

    def view(self) -> Tuple[np.ndarray, List[int]]:
        """State and full rows read under one lock, for drawing a frame."""
        with self._lock:
            return self.game.get_state(), self._full_lines()

    def _full_lines(self) -> List[int]:
        board = self.game.get_board()
        return [y for y in range(board.height) if board.is_line_full(y)]

    def is_over(self) -> bool:
        with self._lock:
            return self.game.game_over()

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self.game)


class AutoDropper:
    """Background thread that pushes the piece down every `interval` seconds."""

    def __init__(self, session: GameSession, interval: float = 0.6) -> None:
        if interval <= 0:
            raise ValueError(f"drop interval must be positive, got {interval}")
        self.session = session
        self.interval = float(interval)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="auto-drop", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set() and not self.session.is_over():
            self.session.update(Action.DOWN)
            self._stop.wait(self.interval)
        logger.debug("auto drop stopped")
