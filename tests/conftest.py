from __future__ import annotations

import random
from typing import Iterable

import pytest

from falling_blocks.game import Board, Color, Game


def fill(board: Board, y: int, xs: Iterable[int], color: Color = Color.RED) -> None:
    board.place([(x, y) for x in xs], color)


@pytest.fixture
def game() -> Game:
    g = Game(4, 4, rng=random.Random(1234))
    g.start()
    return g
