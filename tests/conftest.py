from __future__ import annotations

from typing import List

import pytest

from buttercat_othello.game.board import Board, Color, PieceType
from buttercat_othello.game.hand import Hand
from buttercat_othello.game.rules import Game


class ScriptedSource:
    """Piece source that hands out queued types, then a fixed default."""

    def __init__(self, *queued: PieceType, default: PieceType = PieceType.NORMAL) -> None:
        self.queued: List[PieceType] = list(queued)
        self.default = default
        self.drawn: List[PieceType] = []

    def draw(self) -> PieceType:
        piece_type = self.queued.pop(0) if self.queued else self.default
        self.drawn.append(piece_type)
        return piece_type


def make_game(
    rows=None,
    black=(PieceType.NORMAL,) * 4,
    white=(PieceType.NORMAL,) * 4,
    turn: Color = Color.BLACK,
    source=None,
) -> Game:
    board = Board.from_rows(rows) if rows is not None else Board()
    return Game(
        board=board,
        current_turn=turn,
        source=source or ScriptedSource(),
        black_hand=Hand.of(Color.BLACK, list(black)),
        white_hand=Hand.of(Color.WHITE, list(white)),
    )


def rows_with(top: str = "........", bottom: str = "........", **rows: str) -> List[str]:
    """Eight board rows, empty unless given (``top``, ``bottom`` or ``r<n>``)."""

    grid = ["........"] * 8
    grid[0] = top
    grid[7] = bottom
    for key, value in rows.items():
        grid[int(key[1:])] = value
    return grid


@pytest.fixture
def scripted():
    return ScriptedSource


@pytest.fixture
def game_factory():
    return make_game


@pytest.fixture
def rows():
    return rows_with
