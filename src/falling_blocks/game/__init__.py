"""Game module for Falling Blocks.

Exports the engine and supporting classes:
- PieceType, Color: Piece kinds and cell colors (Color.EMPTY marks free cells)
- Piece, Action: The falling tetromino and the four moves it accepts
- Board: Settled rows, collision queries and line removal
- Game, GameConfig: Engine state machine and its settings
- GameSession, AutoDropper: Lock-serialized access and timed descent
"""

from .shapes import Color, PieceType, get_cells
from .pieces import Action, Piece
from .grid import Board, BoardRow
from .core import Game, GameConfig
from .session import AutoDropper, GameSession

__all__ = [
    "Color",
    "PieceType",
    "get_cells",
    "Action",
    "Piece",
    "Board",
    "BoardRow",
    "Game",
    "GameConfig",
    "GameSession",
    "AutoDropper",
]
