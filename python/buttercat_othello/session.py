"""Match management between the rules engine and the front-ends."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .ai import CpuStrategy, create_strategy
from .game.board import Color
from .game.hand import Drawer, PieceSource
from .game.rules import Game
from .geometry import Position
from .settings import GameSettings
from .snapshot import GameSnapshot, take_snapshot


LOG = logging.getLogger("buttercat_othello.session")


@dataclass
class PlaceResult:
    success: bool
    flipped: List[Position] = field(default_factory=list)
    error: Optional[str] = None
    state: Optional[GameSnapshot] = None


class GameSession:
    """Owns the current :class:`Game` and the CPU players for one window.

    ``cpu_players`` overrides the strategy derived from ``settings`` and may
    map both colors for CPU-vs-CPU matches.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        source: Optional[Drawer] = None,
        cpu_players: Optional[Dict[Color, CpuStrategy]] = None,
    ) -> None:
        self.settings = settings or GameSettings()
        self._rng = random.Random(self.settings.seed)
        self.source: Drawer = source or PieceSource(random.Random(self._rng.random()))
        self.cpu_players = cpu_players if cpu_players is not None else self._players_from_settings()
        self.game = Game(source=self.source)
        self.last_pass: Optional[Color] = None

    def _players_from_settings(self) -> Dict[Color, CpuStrategy]:
        strategy = create_strategy(
            self.settings.mode,
            depth=self.settings.search_depth,
            rng=random.Random(self._rng.random()),
        )
        if strategy is None:
            return {}
        return {self.settings.cpu_color: strategy}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def state(self) -> GameSnapshot:
        return take_snapshot(self.game)

    def is_cpu_turn(self) -> bool:
        if self.game.is_locked or self.game.is_game_over():
            return False
        return self.game.current_turn in self.cpu_players

    def must_pass(self) -> bool:
        """The side to move is stuck but the game is not over."""

        return not self.game.has_valid_moves() and not self.game.is_game_over()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def select_slot(self, slot_id: int) -> GameSnapshot:
        self.game.select_piece(slot_id)
        return self.state()

    def deselect(self) -> GameSnapshot:
        self.game.deselect_piece()
        return self.state()

    def place(self, x: int, y: int) -> PlaceResult:
        try:
            pos = Position(x, y)
        except ValueError:
            return PlaceResult(success=False, error="out_of_bounds", state=self.state())

        game = self.game
        turn = game.current_turn
        if game.is_locked:
            return PlaceResult(success=False, error="locked", state=self.state())
        slot = game.selected_slot(turn)
        if slot is None:
            code = "not_your_turn" if game.selection is not None else "no_selection"
            return PlaceResult(success=False, error=code, state=self.state())

        piece_type = slot.piece_type
        flipped = game.place(pos, turn)
        if flipped is None:
            return PlaceResult(success=False, error="illegal_move", state=self.state())

        LOG.info("%s placed %s at %s, flipping %d", turn.value, piece_type.value, pos, len(flipped))
        self.last_pass = None
        if flipped:
            game.start_flipping(flipped)

        if game.is_game_over():
            LOG.info("Game over: winner=%s", game.winner())
        return PlaceResult(success=True, flipped=flipped, state=self.state())

    def end_flip_animation(self) -> GameSnapshot:
        self.game.end_flipping()
        return self.state()

    def pass_turn(self) -> GameSnapshot:
        LOG.info("%s passes", self.game.current_turn.value)
        self.last_pass = self.game.current_turn
        self.game.pass_turn()
        return self.state()

    def auto_pass(self) -> bool:
        if not self.must_pass():
            return False
        self.pass_turn()
        return True

    def new_game(self, settings: Optional[GameSettings] = None) -> GameSnapshot:
        if settings is not None and settings != self.settings:
            self.settings = settings
            self.cpu_players = self._players_from_settings()
        self.game = Game(source=self.source)
        self.last_pass = None
        LOG.info("New game (%s, cpu=%s)", self.settings.mode.value, self.settings.cpu_color.value)
        return self.state()

    def play_cpu_turn(self) -> Optional[PlaceResult]:
        """Let the CPU owning the current turn move; ``None`` if it is not its turn."""

        if not self.is_cpu_turn():
            return None

        strategy = self.cpu_players[self.game.current_turn]
        move = strategy.decide_move(self.game)
        if move is None:
            state = self.pass_turn()
            return PlaceResult(success=False, error="no_moves", state=state)

        LOG.debug("%s chose slot %d at %s", strategy.description, move.slot_id, move.position)
        self.game.select_piece(move.slot_id)
        return self.place(move.position.x, move.position.y)
