from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

from .shapes import NUM_ORIENTATIONS, Color, Coordinate, PieceType, get_cells


class Action(IntEnum):
    DOWN = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3


def _advance(pivot: Coordinate, orientation: int, action: Action) -> Tuple[Coordinate, int]:
    x, y = pivot
    if action == Action.DOWN:
        y += 1
    elif action == Action.LEFT:
        x -= 1
    elif action == Action.RIGHT:
        x += 1
    elif action == Action.ROTATE:
        orientation = (orientation + 1) % NUM_ORIENTATIONS
    return (x, y), orientation


@dataclass
class Piece:
    """The falling tetromino.

    `pivot` is the bottom-center cell of the piece's 4x4 box; see
    `shapes.SHAPE_TABLE`. Rotation cycles through the table with no kicks.
    """

    kind: PieceType
    orientation: int
    pivot: Coordinate
    color: Color

    def update(self, action: Action) -> None:
        self.pivot, self.orientation = _advance(self.pivot, self.orientation, Action(action))

    def get_coords(self) -> List[Coordinate]:
        return get_cells(self.kind, self.orientation, self.pivot)

    def get_next_cells(self, action: Action) -> List[Coordinate]:
        # Works on copies of pivot/orientation; the piece itself is untouched
        pivot, orientation = _advance(self.pivot, self.orientation, Action(action))
        return get_cells(self.kind, orientation, pivot)

    def get_color(self) -> Color:
        return self.color
