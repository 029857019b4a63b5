"""Board geometry for the 8x8 ButterCat Othello grid.

Positions, the eight compass directions, the special-piece exclusion zone and
the static square tables used by the CPU evaluator all live here so the rules
engine and the search share a single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple


SIZE = 8


@dataclass(frozen=True)
class Position:
    """A square on the board.

    Attributes
    ----------
    x:
        Column index, ``0`` is the left edge.
    y:
        Row index, ``0`` is the top edge.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if not (0 <= self.x < SIZE and 0 <= self.y < SIZE):
            raise ValueError(f"Invalid position: ({self.x}, {self.y})")

    @property
    def index(self) -> int:
        return self.y * SIZE + self.x

    def step(self, dx: int, dy: int) -> Optional["Position"]:
        """Return the neighbor in direction ``(dx, dy)`` or ``None`` off-board."""

        nx = self.x + dx
        ny = self.y + dy
        if not (0 <= nx < SIZE and 0 <= ny < SIZE):
            return None
        return Position(nx, ny)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


# fmt: off
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1,  0),          (1,  0),
    (-1,  1), (0,  1), (1,  1),
)

POSITION_WEIGHTS: Tuple[Tuple[int, ...], ...] = (
    (100, -20, 10,  5,  5, 10, -20, 100),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    ( 10,  -2,  5,  1,  1,  5,  -2,  10),
    (  5,  -2,  1,  0,  0,  1,  -2,   5),
    (  5,  -2,  1,  0,  0,  1,  -2,   5),
    ( 10,  -2,  5,  1,  1,  5,  -2,  10),
    (-20, -50, -2, -2, -2, -2, -50, -20),
    (100, -20, 10,  5,  5, 10, -20, 100),
)

# Squares touching each corner (the "C" and "X" squares).
DANGEROUS_SQUARES: Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]] = {
    (0, 0): ((1, 0), (0, 1), (1, 1)),
    (7, 0): ((6, 0), (7, 1), (6, 1)),
    (0, 7): ((0, 6), (1, 7), (1, 6)),
    (7, 7): ((6, 6), (7, 6), (6, 7)),
}
# fmt: on

CORNERS: Tuple[Position, ...] = tuple(Position(x, y) for x, y in DANGEROUS_SQUARES)

CENTRAL_MIN = 2
CENTRAL_MAX = 5


def is_central(pos: Position) -> bool:
    """True for the inner 4x4 block where special pieces may not be placed."""

    return CENTRAL_MIN <= pos.x <= CENTRAL_MAX and CENTRAL_MIN <= pos.y <= CENTRAL_MAX


def is_corner(pos: Position) -> bool:
    return (pos.x, pos.y) in DANGEROUS_SQUARES


def is_edge(pos: Position) -> bool:
    return pos.x in (0, SIZE - 1) or pos.y in (0, SIZE - 1)


def position_value(pos: Position) -> int:
    """Static positional weight of ``pos`` (corners best, X squares worst)."""

    return POSITION_WEIGHTS[pos.y][pos.x]


def all_positions() -> Iterator[Position]:
    """Iterate over every square in row-major order."""

    for y in range(SIZE):
        for x in range(SIZE):
            yield Position(x, y)


def ray(origin: Position, dx: int, dy: int) -> Iterator[Position]:
    """Yield squares walking away from ``origin`` until the board edge."""

    current = origin.step(dx, dy)
    while current is not None:
        yield current
        current = current.step(dx, dy)


def edge_squares() -> List[Position]:
    """Every square on the outer ring, each listed once."""

    return [pos for pos in all_positions() if is_edge(pos)]
