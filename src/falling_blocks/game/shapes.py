from __future__ import annotations

from enum import IntEnum
from typing import List, Tuple

import numpy as np


Coordinate = Tuple[int, int]

NUM_ORIENTATIONS = 4


class PieceType(IntEnum):
    I = 0
    L = 1
    J = 2
    O = 3
    S = 4
    Z = 5
    T = 6


class Color(IntEnum):
    EMPTY = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    MAGENTA = 4
    CYAN = 5
    YELLOW = 6


PIECE_COLORS = tuple(c for c in Color if c != Color.EMPTY)


# Every shape fits in a 4x4 box whose bottom-center cell is the pivot:
#
#   [ ][ ][ ][ ]
#   [ ][ ][ ][ ]
#   [ ][ ][ ][ ]
#   [ ][x][ ][ ]
#
# Indexed as SHAPE_TABLE[kind, orientation, cell] -> (dx, dy).
SHAPE_TABLE = np.array(
    [
        # I
        [
            [[-1, -1], [0, -1], [1, -1], [2, -1]],
            [[0, -3], [0, -2], [0, -1], [0, 0]],
            [[-1, -1], [0, -1], [1, -1], [2, -1]],
            [[0, -3], [0, -2], [0, -1], [0, 0]],
        ],
        # L
        [
            [[0, -2], [0, -1], [0, 0], [1, 0]],
            [[-1, -1], [0, -1], [1, -1], [-1, 0]],
            [[0, -2], [1, -2], [1, -1], [1, 0]],
            [[1, -1], [-1, 0], [0, 0], [1, 0]],
        ],
        # J
        [
            [[1, -2], [1, -1], [0, 0], [1, 0]],
            [[-1, -1], [-1, 0], [0, 0], [1, 0]],
            [[0, -2], [1, -2], [0, -1], [0, 0]],
            [[-1, -1], [0, -1], [1, -1], [1, 0]],
        ],
        # O
        [
            [[0, -1], [1, -1], [0, 0], [1, 0]],
            [[0, -1], [1, -1], [0, 0], [1, 0]],
            [[0, -1], [1, -1], [0, 0], [1, 0]],
            [[0, -1], [1, -1], [0, 0], [1, 0]],
        ],
        # S
        [
            [[0, -1], [1, -1], [-1, 0], [0, 0]],
            [[0, -2], [0, -1], [1, -1], [1, 0]],
            [[0, -1], [1, -1], [-1, 0], [0, 0]],
            [[0, -2], [0, -1], [1, -1], [1, 0]],
        ],
        # Z
        [
            [[-1, -1], [0, -1], [0, 0], [1, 0]],
            [[1, -2], [0, -1], [1, -1], [0, 0]],
            [[-1, -1], [0, -1], [0, 0], [1, 0]],
            [[1, -2], [0, -1], [1, -1], [0, 0]],
        ],
        # T
        [
            [[0, -1], [-1, 0], [0, 0], [1, 0]],
            [[-1, -2], [-1, -1], [0, -1], [-1, 0]],
            [[-1, -1], [0, -1], [1, -1], [0, 0]],
            [[1, -2], [0, -1], [1, -1], [1, 0]],
        ],
    ],
    dtype=np.int8,
)
SHAPE_TABLE.setflags(write=False)


def get_cells(kind: PieceType, orientation: int, pivot: Coordinate) -> List[Coordinate]:
    """Cells occupied by `kind` at `orientation` with its pivot at `pivot`."""
    px, py = pivot
    offsets = SHAPE_TABLE[int(kind), orientation % NUM_ORIENTATIONS]
    return [(px + int(dx), py + int(dy)) for dx, dy in offsets]
