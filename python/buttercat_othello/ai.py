from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .game.board import Color, PieceType, opponent
from .game.rules import Game
from .geometry import CORNERS, DANGEROUS_SQUARES, SIZE, Position, edge_squares, is_corner, position_value
from .settings import GameMode


LOG = logging.getLogger("buttercat_othello.ai")

Score = float

WIN_SCORE = 100000.0
DEFAULT_DEPTH = 5

_EDGE_SQUARES = tuple(edge_squares())


@dataclass(frozen=True)
class CpuMove:
    slot_id: int
    position: Position


# List every (slot, square) pair the side to move could play
def all_valid_moves(game: Game) -> List[CpuMove]:
    turn = game.current_turn
    moves: List[CpuMove] = []
    # Legal squares only depend on whether the selected piece is special
    cache: Dict[bool, List[Position]] = {}
    for slot in game.hand(turn).available_slots():
        special = slot.piece_type.is_special
        if special not in cache:
            probe = game.clone()
            probe.select_piece(slot.id)
            cache[special] = probe.valid_moves(turn)
        moves.extend(CpuMove(slot_id=slot.id, position=pos) for pos in cache[special])
    return moves


def distinct_moves(game: Game, moves: List[CpuMove]) -> List[CpuMove]:
    """Drop moves that repeat an earlier (piece type, square) pair."""

    hand = game.hand(game.current_turn)
    seen = set()
    unique: List[CpuMove] = []
    for move in moves:
        key = (hand.slot(move.slot_id).piece_type, move.position)
        if key not in seen:
            seen.add(key)
            unique.append(move)
    return unique


def _simulate(game: Game, move: CpuMove) -> Optional[Game]:
    child = game.clone()
    child.select_piece(move.slot_id)
    if child.place(move.position, child.current_turn) is None:
        return None
    return child


# ---------------------------------------------------------------------------
# Static evaluation
# ---------------------------------------------------------------------------


def _positional_score(game: Game, color: Color) -> int:
    return sum(position_value(pos) for pos, piece in game.board.pieces() if piece.color is color)


def _owns(game: Game, x: int, y: int, color: Color) -> bool:
    piece = game.board.at(x, y)
    return piece is not None and piece.color is color


def count_stable(game: Game, color: Color) -> int:
    """Owned corners plus the unbroken owned runs along both edges from them."""

    count = 0
    for corner in CORNERS:
        if not _owns(game, corner.x, corner.y, color):
            continue
        count += 1
        step_x = 1 if corner.x == 0 else -1
        step_y = 1 if corner.y == 0 else -1
        for dx, dy in ((step_x, 0), (0, step_y)):
            x = corner.x + dx
            y = corner.y + dy
            while 0 <= x < SIZE and 0 <= y < SIZE and _owns(game, x, y, color):
                count += 1
                x += dx
                y += dy
    return count


def count_dangerous(game: Game, color: Color) -> int:
    """Pieces of ``color`` sitting next to a corner that is still empty."""

    count = 0
    for (cx, cy), neighbors in DANGEROUS_SQUARES.items():
        if game.board.at(cx, cy) is not None:
            continue
        count += sum(1 for x, y in neighbors if _owns(game, x, y, color))
    return count


def count_edges(game: Game, color: Color) -> int:
    return sum(1 for pos in _EDGE_SQUARES if _owns(game, pos.x, pos.y, color))


def evaluate_position(game: Game, color: Color) -> Score:
    """Heuristic score of ``game`` from ``color``'s point of view."""

    rival = opponent(color)

    if game.is_game_over():
        winner = game.winner()
        if winner is color:
            return WIN_SCORE
        if winner is rival:
            return -WIN_SCORE
        return 0.0

    own_pieces = game.piece_count(color)
    rival_pieces = game.piece_count(rival)
    total = own_pieces + rival_pieces

    score = 0.0
    score += (_positional_score(game, color) - _positional_score(game, rival)) * 2
    score += (len(game.playable_moves(color)) - len(game.playable_moves(rival))) * 10
    score += (count_stable(game, color) - count_stable(game, rival)) * 25
    # Material matters little until the board fills up
    score += (own_pieces - rival_pieces) * (2 if total < 40 else 15)
    score -= count_dangerous(game, color) * 30
    score += count_dangerous(game, rival) * 30
    score += (count_edges(game, color) - count_edges(game, rival)) * 5
    return score


def piece_type_adjustment(piece_type: PieceType, position: Position, pieces_on_board: int) -> Score:
    """Bonus or penalty for spending ``piece_type`` on ``position``."""

    value = position_value(position)
    adjustment = 0.0
    if piece_type is PieceType.BUTTER:
        # Lands in the opponent's color: only worth it on squares bad for them
        if value < -10:
            adjustment += 30
        elif value > 50:
            adjustment -= 100
        else:
            adjustment -= 15
    elif piece_type is PieceType.CAT:
        if value > 50:
            adjustment += 40
        elif value > 0:
            adjustment += 20
        else:
            adjustment += 10
    elif piece_type is PieceType.BUTTERCAT:
        adjustment += 15

    if piece_type.is_special and pieces_on_board < 20:
        adjustment -= 10
    return adjustment


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class CpuStrategy(ABC):
    """Chooses a (slot, square) pair for the side to move."""

    @abstractmethod
    def decide_move(self, game: Game) -> Optional[CpuMove]:
        raise NotImplementedError

    @property
    @abstractmethod
    def description(self) -> str:
        raise NotImplementedError


class EasyCpuStrategy(CpuStrategy):
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def decide_move(self, game: Game) -> Optional[CpuMove]:
        moves = all_valid_moves(game)
        if not moves:
            return None

        hand = game.hand(game.current_turn)
        by_slot: Dict[int, List[Position]] = {}
        for move in moves:
            by_slot.setdefault(move.slot_id, []).append(move.position)

        # Keep the cat piece for later when anything else can be played
        preferred = [sid for sid in by_slot if hand.slot(sid).piece_type is not PieceType.CAT]
        slot_id = self.rng.choice(preferred or list(by_slot))
        positions = by_slot[slot_id]

        if hand.slot(slot_id).piece_type is PieceType.CAT:
            # Corners are already safe, the cat's immunity would be wasted there
            non_corner = [pos for pos in positions if not is_corner(pos)]
            if non_corner:
                positions = non_corner

        return CpuMove(slot_id=slot_id, position=self.rng.choice(positions))

    @property
    def description(self) -> str:
        return "Easy(random)"


class HardCpuStrategy(CpuStrategy):
    def __init__(self, depth: int = DEFAULT_DEPTH) -> None:
        if depth < 1:
            raise ValueError("Search depth must be at least 1")
        self.depth = depth
        self.color: Optional[Color] = None
        self.nodes = 0

    def decide_move(self, game: Game) -> Optional[CpuMove]:
        # Root of the search; the placement itself is the first ply
        self.color = game.current_turn
        self.nodes = 0
        moves = all_valid_moves(game)
        if not moves:
            return None

        hand = game.hand(self.color)
        pieces_on_board = game.piece_count(Color.BLACK) + game.piece_count(Color.WHITE)

        best_score = -math.inf
        best_move: Optional[CpuMove] = None
        searched: Dict[Tuple[PieceType, Position], Score] = {}

        for move in moves:
            piece_type = hand.slot(move.slot_id).piece_type
            key = (piece_type, move.position)
            if key not in searched:
                child = _simulate(game, move)
                if child is None:
                    continue
                searched[key] = self.minimax(child, self.depth - 1, -math.inf, math.inf)

            score = searched[key] + piece_type_adjustment(piece_type, move.position, pieces_on_board)
            if score > best_score or best_move is None:
                best_score = score
                best_move = move

        LOG.debug(
            "%s picked %s (score=%.1f, nodes=%d)", self.description, best_move, best_score, self.nodes
        )
        return best_move

    def minimax(self, game: Game, depth: int, alpha: float, beta: float) -> Score:
        # Depth-limited minimax core
        self.nodes += 1
        assert self.color is not None, "decide_move sets the searching color"

        if depth <= 0 or game.is_game_over():
            return self._evaluate(game)

        moves = distinct_moves(game, all_valid_moves(game))
        if not moves:
            passed = game.clone()
            passed.pass_turn()
            return self.minimax(passed, depth - 1, alpha, beta)

        maximizing = game.current_turn is self.color
        value = -math.inf if maximizing else math.inf
        legal_branch_found = False
        for move in moves:
            child = _simulate(game, move)
            if child is None:
                continue

            legal_branch_found = True
            result = self.minimax(child, depth - 1, alpha, beta)
            if maximizing:
                value = max(value, result)
                alpha = max(alpha, value)
            else:
                value = min(value, result)
                beta = min(beta, value)
            if beta <= alpha:
                break

        if not legal_branch_found:
            return self._evaluate(game)
        return value

    def _evaluate(self, game: Game) -> Score:
        assert self.color is not None
        return evaluate_position(game, self.color)

    @property
    def description(self) -> str:
        return f"Hard(minimax depth={self.depth})"


def create_strategy(
    mode: GameMode,
    depth: int = DEFAULT_DEPTH,
    rng: Optional[random.Random] = None,
) -> Optional[CpuStrategy]:
    """Strategy backing a game mode, ``None`` for human-vs-human play."""

    if mode is GameMode.CPU_EASY:
        return EasyCpuStrategy(rng=rng)
    if mode is GameMode.CPU_HARD:
        return HardCpuStrategy(depth=depth)
    return None


__all__ = [
    "CpuMove",
    "CpuStrategy",
    "EasyCpuStrategy",
    "HardCpuStrategy",
    "all_valid_moves",
    "create_strategy",
    "evaluate_position",
]
