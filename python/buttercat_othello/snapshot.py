"""Read-only views of a game handed to the front-ends."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from .game.board import Color, PieceType
from .game.hand import Hand
from .game.rules import Game, Winner
from .geometry import SIZE, Position


Message = Dict[str, Any]


@dataclass(frozen=True)
class CellView:
    x: int
    y: int
    color: Optional[Color]
    piece_type: Optional[PieceType]
    is_valid_move: bool
    is_flipping: bool


@dataclass(frozen=True)
class SlotView:
    id: int
    color: Color
    piece_type: PieceType
    is_used: bool
    is_selected: bool


@dataclass(frozen=True)
class HandView:
    color: Color
    slots: Tuple[SlotView, ...]
    selected_slot_id: Optional[int]

    @property
    def has_selection(self) -> bool:
        return self.selected_slot_id is not None


@dataclass(frozen=True)
class GameSnapshot:
    board: Tuple[Tuple[CellView, ...], ...]
    current_turn: Color
    is_game_over: bool
    is_locked: bool
    black_hand: HandView
    white_hand: HandView
    black_count: int
    white_count: int
    winner: Optional[Winner]
    has_valid_moves: bool

    def cell(self, x: int, y: int) -> CellView:
        return self.board[y][x]

    def hand(self, color: Color) -> HandView:
        return self.black_hand if color is Color.BLACK else self.white_hand

    def to_message(self) -> Message:
        """Plain ``dict`` form with enum members reduced to their values."""

        return _plain(asdict(self))


def _hand_view(hand: Hand) -> HandView:
    slots = tuple(
        SlotView(
            id=slot.id,
            color=slot.color,
            piece_type=slot.piece_type,
            is_used=slot.is_used,
            is_selected=slot.id == hand.selected_slot_id,
        )
        for slot in hand.slots
    )
    return HandView(color=hand.color, slots=slots, selected_slot_id=hand.selected_slot_id)


def take_snapshot(game: Game) -> GameSnapshot:
    turn = game.current_turn
    legal = set(game.valid_moves(turn))

    rows = []
    for y in range(SIZE):
        row = []
        for x in range(SIZE):
            pos = Position(x, y)
            piece = game.board.get(pos)
            row.append(
                CellView(
                    x=x,
                    y=y,
                    color=piece.color if piece else None,
                    piece_type=piece.type if piece else None,
                    is_valid_move=pos in legal,
                    is_flipping=game.is_flipping(pos),
                )
            )
        rows.append(tuple(row))

    return GameSnapshot(
        board=tuple(rows),
        current_turn=turn,
        is_game_over=game.is_game_over(),
        is_locked=game.is_locked,
        black_hand=_hand_view(game.hand(Color.BLACK)),
        white_hand=_hand_view(game.hand(Color.WHITE)),
        black_count=game.piece_count(Color.BLACK),
        white_count=game.piece_count(Color.WHITE),
        winner=game.winner(),
        has_valid_moves=game.has_valid_moves(turn),
    )


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, (Color, PieceType)):
        return value.value
    return value
