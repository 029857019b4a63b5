import pytest

from buttercat_othello.game.board import Board, Color, Piece, PieceType, opponent
from buttercat_othello.geometry import Position


def test_initial_cross():
    board = Board()
    assert board.get(Position(3, 3)) == Piece(Color.WHITE)
    assert board.get(Position(4, 4)) == Piece(Color.WHITE)
    assert board.get(Position(3, 4)) == Piece(Color.BLACK)
    assert board.get(Position(4, 3)) == Piece(Color.BLACK)
    assert board.total() == 4
    assert board.count(Color.BLACK) == 2
    assert board.count(Color.WHITE) == 2


def test_clone_is_independent():
    board = Board()
    twin = board.clone()
    twin.set(Position(0, 0), Piece(Color.BLACK, PieceType.CAT))
    assert board.get(Position(0, 0)) is None
    assert twin != board
    assert board == Board()


def test_from_rows_symbols():
    rows = ["BWbwcdxy"] + ["........"] * 7
    board = Board.from_rows(rows)
    assert board.get(Position(0, 0)) == Piece(Color.BLACK)
    assert board.get(Position(2, 0)) == Piece(Color.BLACK, PieceType.BUTTER)
    assert board.get(Position(5, 0)) == Piece(Color.WHITE, PieceType.CAT)
    assert board.get(Position(7, 0)).is_buttercat
    # Buttercat pieces still count for their stored color
    assert board.count(Color.BLACK) == 4
    assert board.count(Color.WHITE) == 4
    assert board.render().splitlines()[1] == "0 B W b w c d x y"


def test_from_rows_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Board.from_rows(["........"] * 7)
    with pytest.raises(ValueError):
        Board.from_rows(["......."] + ["........"] * 7)


def test_piece_type_flags():
    assert not PieceType.NORMAL.is_special
    assert all(t.is_special for t in (PieceType.BUTTER, PieceType.CAT, PieceType.BUTTERCAT))
    assert PieceType.BUTTER.rotates and PieceType.CAT.rotates
    assert not PieceType.BUTTERCAT.rotates
    assert opponent(Color.BLACK) is Color.WHITE
