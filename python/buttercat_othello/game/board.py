from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from ..geometry import SIZE, Position, all_positions


class Color(str, Enum):
    BLACK = "black"
    WHITE = "white"


class PieceType(str, Enum):
    NORMAL = "normal"
    BUTTER = "butter"  # lands in the opponent's color, rotates instead of flipping
    CAT = "cat"  # lands in the placer's color, rotates instead of flipping
    BUTTERCAT = "buttercat"  # never captures and is never captured

    @property
    def is_special(self) -> bool:
        return self is not PieceType.NORMAL

    @property
    def rotates(self) -> bool:
        # Captured butter/cat pieces spin a full turn and keep color and type
        return self in (PieceType.BUTTER, PieceType.CAT)


# Flip between players
def opponent(color: Color) -> Color:
    return Color.WHITE if color is Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class Piece:
    color: Color
    type: PieceType = PieceType.NORMAL

    @property
    def is_buttercat(self) -> bool:
        return self.type is PieceType.BUTTERCAT


Cell = Optional[Piece]


class Board:
    def __init__(self, cells: Optional[Sequence[Cell]] = None) -> None:
        if cells is None:
            self._cells: List[Cell] = [None] * (SIZE * SIZE)
            self.reset()
        else:
            if len(cells) != SIZE * SIZE:
                raise ValueError(f"Board needs {SIZE * SIZE} cells, got {len(cells)}")
            self._cells = list(cells)

    @classmethod
    def empty(cls) -> "Board":
        return cls([None] * (SIZE * SIZE))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from eight strings, one per row.

        ``.`` is empty, ``B``/``W`` are normal pieces, ``b``/``w`` butter,
        ``c``/``d`` cat (black/white) and ``x``/``y`` buttercat (black/white).
        """

        if len(rows) != SIZE:
            raise ValueError(f"Expected {SIZE} rows, got {len(rows)}")
        cells: List[Cell] = []
        for row in rows:
            if len(row) != SIZE:
                raise ValueError(f"Row {row!r} must have {SIZE} cells")
            for symbol in row:
                cells.append(_SYMBOL_TO_PIECE[symbol])
        return cls(cells)

    def reset(self) -> None:
        # Standard Othello cross in the middle
        for i in range(len(self._cells)):
            self._cells[i] = None
        self.set(Position(3, 3), Piece(Color.WHITE))
        self.set(Position(4, 4), Piece(Color.WHITE))
        self.set(Position(3, 4), Piece(Color.BLACK))
        self.set(Position(4, 3), Piece(Color.BLACK))

    def get(self, pos: Position) -> Cell:
        return self._cells[pos.index]

    def set(self, pos: Position, piece: Piece) -> None:
        self._cells[pos.index] = piece

    def at(self, x: int, y: int) -> Cell:
        # Unchecked fast path for the scanners
        return self._cells[y * SIZE + x]

    def clone(self) -> "Board":
        # Pieces are immutable so a shallow list copy is fully independent
        return Board(self._cells)

    def cells(self) -> Tuple[Cell, ...]:
        return tuple(self._cells)

    def pieces(self) -> Iterator[Tuple[Position, Piece]]:
        for pos in all_positions():
            piece = self._cells[pos.index]
            if piece is not None:
                yield pos, piece

    def count(self, color: Color) -> int:
        return sum(1 for piece in self._cells if piece is not None and piece.color is color)

    def total(self) -> int:
        return sum(1 for piece in self._cells if piece is not None)

    def render(self) -> str:
        lines = ["  " + " ".join(str(x) for x in range(SIZE))]
        for y in range(SIZE):
            row = (symbol_for(self._cells[y * SIZE + x]) for x in range(SIZE))
            lines.append(f"{y} " + " ".join(row))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board(black={self.count(Color.BLACK)}, white={self.count(Color.WHITE)})"


_SYMBOL_TO_PIECE = {
    ".": None,
    "B": Piece(Color.BLACK),
    "W": Piece(Color.WHITE),
    "b": Piece(Color.BLACK, PieceType.BUTTER),
    "w": Piece(Color.WHITE, PieceType.BUTTER),
    "c": Piece(Color.BLACK, PieceType.CAT),
    "d": Piece(Color.WHITE, PieceType.CAT),
    "x": Piece(Color.BLACK, PieceType.BUTTERCAT),
    "y": Piece(Color.WHITE, PieceType.BUTTERCAT),
}

_PIECE_TO_SYMBOL = {piece: symbol for symbol, piece in _SYMBOL_TO_PIECE.items()}


def symbol_for(cell: Cell) -> str:
    return _PIECE_TO_SYMBOL[cell]
