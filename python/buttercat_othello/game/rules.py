"""Rules engine for ButterCat Othello built on :mod:`buttercat_othello.game.board`."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Union

from ..geometry import DIRECTIONS, SIZE, Position, all_positions, is_central
from .board import Board, Color, Piece, PieceType, opponent
from .hand import Drawer, Hand, PieceSource, SupplySlot, owner_of


DRAW = "draw"

Winner = Union[Color, str]


class TurnPhase(str, Enum):
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_PLACEMENT = "awaiting_placement"
    LOCKED = "locked"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Selection:
    """The single slot currently picked up, across both players."""

    color: Color
    slot_id: int


class Game:
    """Aggregate root: board, turn, both hands, selection and flip lock.

    Every mutation rebinds ``board``/hands to freshly built objects, so a
    :meth:`clone` never observes later changes made to the original.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        current_turn: Color = Color.BLACK,
        source: Optional[Drawer] = None,
        black_hand: Optional[Hand] = None,
        white_hand: Optional[Hand] = None,
    ) -> None:
        self.source: Drawer = source or PieceSource()
        self._board = board if board is not None else Board()
        self._current_turn = current_turn
        self._hands: Dict[Color, Hand] = {
            Color.BLACK: (black_hand or Hand.initial(Color.BLACK, self.source)).deselect(),
            Color.WHITE: (white_hand or Hand.initial(Color.WHITE, self.source)).deselect(),
        }
        self._selection: Optional[Selection] = None
        self._flipping: FrozenSet[Position] = frozenset()
        self._locked = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self._board

    @property
    def current_turn(self) -> Color:
        return self._current_turn

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def flipping_positions(self) -> FrozenSet[Position]:
        return self._flipping

    def is_flipping(self, pos: Position) -> bool:
        return pos in self._flipping

    def hand(self, color: Color) -> Hand:
        hand = self._hands[color]
        if self._selection is not None and self._selection.color is color:
            return hand.select(self._selection.slot_id)
        return hand

    def current_hand(self) -> Hand:
        return self.hand(self._current_turn)

    def selected_slot(self, color: Color) -> Optional[SupplySlot]:
        if self._selection is None or self._selection.color is not color:
            return None
        return self._hands[color].slot(self._selection.slot_id)

    def piece_count(self, color: Color) -> int:
        return self._board.count(color)

    @property
    def phase(self) -> TurnPhase:
        if self._locked:
            return TurnPhase.LOCKED
        if self.is_game_over():
            return TurnPhase.GAME_OVER
        if self.selected_slot(self._current_turn) is not None:
            return TurnPhase.AWAITING_PLACEMENT
        return TurnPhase.AWAITING_SELECTION

    # ------------------------------------------------------------------
    # Move legality
    # ------------------------------------------------------------------
    def _capture_run(self, pos: Position, dx: int, dy: int, basis: Color) -> List[Position]:
        # Opponent pieces sandwiched between pos and the next basis piece
        rival = opponent(basis)
        run: List[Position] = []
        x = pos.x + dx
        y = pos.y + dy
        while 0 <= x < SIZE and 0 <= y < SIZE:
            piece = self._board.at(x, y)
            if piece is None or piece.is_buttercat:
                return []
            if piece.color is rival:
                run.append(Position(x, y))
            else:
                return run
            x += dx
            y += dy
        return []

    def _has_capture(self, x: int, y: int, basis: Color) -> bool:
        # Allocation-free variant of _capture_run for the hot paths
        rival = opponent(basis)
        board = self._board
        for dx, dy in DIRECTIONS:
            cx = x + dx
            cy = y + dy
            seen_rival = False
            while 0 <= cx < SIZE and 0 <= cy < SIZE:
                piece = board.at(cx, cy)
                if piece is None or piece.is_buttercat:
                    break
                if piece.color is rival:
                    seen_rival = True
                else:
                    if seen_rival:
                        return True
                    break
                cx += dx
                cy += dy
        return False

    def can_place(self, pos: Position, color: Color) -> bool:
        if self._board.get(pos) is not None:
            return False
        return self._has_capture(pos.x, pos.y, color)

    def valid_moves(self, color: Color) -> List[Position]:
        """Squares ``color`` may play, honoring its selected piece type."""

        selected = self.selected_slot(color)
        exclude_central = selected is not None and selected.piece_type.is_special
        return [
            pos
            for pos in all_positions()
            if self.can_place(pos, color) and not (exclude_central and is_central(pos))
        ]

    def playable_moves(self, color: Color) -> List[Position]:
        """Squares ``color`` could play with some piece currently in hand."""

        hand = self._hands[color]
        if not hand.has_available_slots():
            return []
        central_ok = hand.has_type([PieceType.NORMAL])
        return [
            pos
            for pos in all_positions()
            if self.can_place(pos, color) and (central_ok or not is_central(pos))
        ]

    def has_valid_moves(self, color: Optional[Color] = None) -> bool:
        color = self._current_turn if color is None else color
        hand = self._hands[color]
        if not hand.has_available_slots():
            return False
        central_ok = hand.has_type([PieceType.NORMAL])
        board = self._board
        for y in range(SIZE):
            for x in range(SIZE):
                if board.at(x, y) is not None:
                    continue
                if not central_ok and 2 <= x <= 5 and 2 <= y <= 5:
                    continue
                if self._has_capture(x, y, color):
                    return True
        return False

    def is_game_over(self) -> bool:
        if self.has_valid_moves(self._current_turn):
            return False
        return not self.has_valid_moves(opponent(self._current_turn))

    def winner(self) -> Optional[Winner]:
        """Color with more pieces, ``DRAW`` on a tie, ``None`` while playing."""

        if not self.is_game_over():
            return None
        black = self._board.count(Color.BLACK)
        white = self._board.count(Color.WHITE)
        if black > white:
            return Color.BLACK
        if white > black:
            return Color.WHITE
        return DRAW

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def select_piece(self, slot_id: int) -> None:
        if self._locked:
            return
        owner = owner_of(slot_id)
        # Validates the slot; raises IllegalSelectionError when unusable
        self._hands[owner].select(slot_id)
        self._selection = Selection(color=owner, slot_id=slot_id)

    def deselect_piece(self) -> None:
        if self._locked:
            return
        self._selection = None

    def place(self, pos: Position, color: Color) -> Optional[List[Position]]:
        """Place the selected piece for ``color`` at ``pos``.

        Returns the captured positions (never ``pos`` itself) or ``None`` when
        the placement is not allowed right now.
        """

        if self._locked or color is not self._current_turn:
            return None
        slot = self.selected_slot(color)
        if slot is None:
            return None
        piece_type = slot.piece_type
        if piece_type.is_special and is_central(pos):
            return None
        if not self.can_place(pos, color):
            return None

        flipped: List[Position] = []
        board = self._board.clone()
        if piece_type is not PieceType.BUTTERCAT:
            for dx, dy in DIRECTIONS:
                for target in self._capture_run(pos, dx, dy, color):
                    captured = board.get(target)
                    if not captured.type.rotates:
                        board.set(target, Piece(color, captured.type))
                    flipped.append(target)

        placed_color = opponent(color) if piece_type is PieceType.BUTTER else color
        board.set(pos, Piece(placed_color, piece_type))
        self._board = board

        self._hands[color] = self.hand(color).use_selected(self.source)
        self._selection = None
        self._current_turn = opponent(color)
        return flipped

    def start_flipping(self, positions: Iterable[Position]) -> None:
        self._locked = True
        self._flipping = frozenset(positions)

    def end_flipping(self) -> None:
        self._locked = False
        self._flipping = frozenset()

    def pass_turn(self) -> None:
        self._selection = None
        self._current_turn = opponent(self._current_turn)

    def clone(self) -> "Game":
        twin = Game.__new__(Game)
        # Own copy of the draw state so simulated placements leave the match RNG alone
        twin.source = copy.deepcopy(self.source)
        twin._board = self._board.clone()
        twin._current_turn = self._current_turn
        # Hands are immutable values, a new dict is enough
        twin._hands = dict(self._hands)
        twin._selection = self._selection
        twin._flipping = self._flipping
        twin._locked = self._locked
        return twin
