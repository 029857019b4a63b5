"""Pygame front-end for ButterCat Othello."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

try:
    import pygame
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise SystemExit(
        "Pygame is required for the graphical client. Install it with 'pip install pygame'."
    ) from exc

from ..game.board import Color, PieceType, opponent
from ..game.hand import IllegalSelectionError
from ..session import GameSession
from ..settings import GameMode, GameSettings, SettingsError
from ..snapshot import CellView, GameSnapshot, HandView, SlotView


LOG = logging.getLogger("buttercat_othello.client")


# ---------------------------------------------------------------------------
# Rendering configuration
# ---------------------------------------------------------------------------

WINDOW_WIDTH = 1020
WINDOW_HEIGHT = 760
FPS = 30

CELL_SIZE = 76
BOARD_ORIGIN = (206, 40)
BOARD_PIXELS = CELL_SIZE * 8

BOARD_BG = (46, 125, 50)
LINE_COLOR = (27, 94, 32)
DISC_COLORS = {Color.BLACK: (33, 33, 33), Color.WHITE: (245, 245, 245)}
BUTTERCAT_COLOR = (255, 193, 7)
DISC_OUTLINE = (38, 50, 56)
SELECTION_COLOR = (255, 152, 0)
HIGHLIGHT_MOVE = (129, 199, 132, 140)
FLIP_HIGHLIGHT = (255, 235, 59, 150)
TEXT_COLOR = (33, 33, 33)

TYPE_BADGES = {PieceType.BUTTER: "B", PieceType.CAT: "C", PieceType.BUTTERCAT: "BC"}

DISC_RADIUS = 30
SLOT_RADIUS = 24
HAND_X = {Color.BLACK: 100, Color.WHITE: WINDOW_WIDTH - 100}
HAND_TOP = 150
HAND_SPACING = 70

MODE_LABELS = {
    GameMode.PVP: "Mode: PvP",
    GameMode.CPU_EASY: "Mode: CPU Easy",
    GameMode.CPU_HARD: "Mode: CPU Hard",
}
NEXT_MODE = {
    GameMode.PVP: GameMode.CPU_EASY,
    GameMode.CPU_EASY: GameMode.CPU_HARD,
    GameMode.CPU_HARD: GameMode.PVP,
}


@dataclass
class Button:
    label: str
    rect: pygame.Rect

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, hovered: bool) -> None:
        base_color = (76, 175, 80) if self.label.startswith("Mode") else (33, 150, 243)
        color = tuple(min(c + 40, 255) for c in base_color) if hovered else base_color
        pygame.draw.rect(surface, color, self.rect, border_radius=6)
        pygame.draw.rect(surface, (13, 71, 161), self.rect, width=2, border_radius=6)
        text_surf = font.render(self.label, True, (255, 255, 255))
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def cell_center(x: int, y: int) -> Tuple[int, int]:
    ox, oy = BOARD_ORIGIN
    return ox + x * CELL_SIZE + CELL_SIZE // 2, oy + y * CELL_SIZE + CELL_SIZE // 2


def cell_at(pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    mx, my = pos
    ox, oy = BOARD_ORIGIN
    if not (ox <= mx < ox + BOARD_PIXELS and oy <= my < oy + BOARD_PIXELS):
        return None
    return (mx - ox) // CELL_SIZE, (my - oy) // CELL_SIZE


def slot_center(color: Color, index: int) -> Tuple[int, int]:
    return HAND_X[color], HAND_TOP + index * HAND_SPACING


class ButterCatPygameApp:
    def __init__(self, settings: GameSettings) -> None:
        pygame.init()
        pygame.display.set_caption("ButterCat Othello")
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        self.font_small = pygame.font.Font(None, 24)
        self.font_medium = pygame.font.Font(None, 32)

        self.buttons = [
            Button("New Game", pygame.Rect(40, WINDOW_HEIGHT - 70, 140, 45)),
            Button(MODE_LABELS[settings.mode], pygame.Rect(200, WINDOW_HEIGHT - 70, 180, 45)),
            Button(self._cpu_color_label(settings), pygame.Rect(400, WINDOW_HEIGHT - 70, 180, 45)),
        ]

        self.session = GameSession(settings)
        self.state: GameSnapshot = self.session.state()
        self.message: Optional[str] = None

        # Deadlines in pygame ticks for the deferred calls
        self.flip_deadline: Optional[int] = None
        self.cpu_deadline: Optional[int] = None
        self._schedule_cpu()

    # ------------------------------------------------------------------
    # Game flow helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _cpu_color_label(settings: GameSettings) -> str:
        return f"CPU: {settings.cpu_color.value.capitalize()}"

    def reset(self, settings: Optional[GameSettings] = None) -> None:
        self.state = self.session.new_game(settings)
        self.buttons[1].label = MODE_LABELS[self.session.settings.mode]
        self.buttons[2].label = self._cpu_color_label(self.session.settings)
        self.message = None
        self.flip_deadline = None
        self.cpu_deadline = None
        self._schedule_cpu()

    def _schedule_cpu(self) -> None:
        if self.session.is_cpu_turn():
            self.cpu_deadline = pygame.time.get_ticks() + self.session.settings.cpu_delay_ms
            self.message = "CPU is thinking..."

    def _after_move(self) -> None:
        self.state = self.session.state()
        if self.state.is_locked:
            self.flip_deadline = pygame.time.get_ticks() + self.session.settings.flip_delay_ms
        else:
            self._turn_complete()

    def _turn_complete(self) -> None:
        if self.session.auto_pass():
            passed = self.session.last_pass
            self.message = f"{passed.value.capitalize()} has no moves and passes"
        self.state = self.session.state()
        if self.state.is_game_over:
            self.message = self._winner_message(self.state)
            return
        self._schedule_cpu()

    @staticmethod
    def _winner_message(state: GameSnapshot) -> str:
        if isinstance(state.winner, Color):
            return f"{state.winner.value.capitalize()} wins!"
        return "Draw!"

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def handle_click(self, pos: Tuple[int, int]) -> None:
        for button in self.buttons:
            if button.contains(pos):
                self._handle_button(button)
                return

        if self.state.is_locked or self.state.is_game_over or self.session.is_cpu_turn():
            return

        slot = self._slot_at(pos)
        if slot is not None:
            self._select(slot)
            return

        clicked = cell_at(pos)
        if clicked is None:
            return

        result = self.session.place(*clicked)
        if not result.success:
            if result.error == "no_selection":
                self.message = "Select a piece from your hand first"
            return

        self.message = None
        self._after_move()

    def _select(self, slot: SlotView) -> None:
        if slot.color is not self.state.current_turn:
            return
        try:
            self.state = self.session.select_slot(slot.id)
        except IllegalSelectionError as exc:
            LOG.warning("Rejected selection of slot %d: %s", slot.id, exc)

    def _handle_button(self, button: Button) -> None:
        settings = self.session.settings
        if button.label.startswith("New"):
            self.reset()
        elif button.label.startswith("Mode"):
            self.reset(replace(settings, mode=NEXT_MODE[settings.mode]))
        elif button.label.startswith("CPU"):
            self.reset(replace(settings, cpu_color=opponent(settings.cpu_color)))

    def _slot_at(self, pos: Tuple[int, int]) -> Optional[SlotView]:
        mx, my = pos
        for hand in (self.state.black_hand, self.state.white_hand):
            for index, slot in enumerate(hand.slots):
                x, y = slot_center(hand.color, index)
                if (mx - x) ** 2 + (my - y) ** 2 <= SLOT_RADIUS ** 2:
                    return slot
        return None

    # ------------------------------------------------------------------
    # Deferred calls
    # ------------------------------------------------------------------
    def update(self) -> None:
        now = pygame.time.get_ticks()
        if self.flip_deadline is not None and now >= self.flip_deadline:
            self.flip_deadline = None
            self.state = self.session.end_flip_animation()
            self._turn_complete()
            return

        if self.cpu_deadline is not None and now >= self.cpu_deadline:
            self.cpu_deadline = None
            result = self.session.play_cpu_turn()
            if result is None:
                return
            if result.error == "no_moves":
                self.message = "CPU has no moves and passes"
                self._turn_complete()
                return
            self.message = None
            self._after_move()

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def draw(self) -> None:
        self.screen.fill((250, 250, 250))
        board_rect = pygame.Rect(*BOARD_ORIGIN, BOARD_PIXELS, BOARD_PIXELS)
        pygame.draw.rect(self.screen, BOARD_BG, board_rect)

        self._draw_grid()
        show_hints = not self.session.is_cpu_turn()
        for row in self.state.board:
            for cell in row:
                self._draw_cell(cell, show_hints)
        self._draw_hand(self.state.black_hand)
        self._draw_hand(self.state.white_hand)
        self._draw_ui()

    def _draw_grid(self) -> None:
        ox, oy = BOARD_ORIGIN
        for i in range(9):
            offset = i * CELL_SIZE
            pygame.draw.line(self.screen, LINE_COLOR, (ox + offset, oy), (ox + offset, oy + BOARD_PIXELS), 2)
            pygame.draw.line(self.screen, LINE_COLOR, (ox, oy + offset), (ox + BOARD_PIXELS, oy + offset), 2)

    def _draw_cell(self, cell: CellView, show_hints: bool) -> None:
        x, y = cell_center(cell.x, cell.y)
        if cell.is_flipping:
            self._blit_circle(FLIP_HIGHLIGHT, (x, y), DISC_RADIUS + 6)

        if cell.color is None or cell.piece_type is None:
            if cell.is_valid_move and show_hints:
                self._blit_circle(HIGHLIGHT_MOVE, (x, y), DISC_RADIUS // 2)
            return

        self._draw_disc((x, y), cell.color, cell.piece_type, DISC_RADIUS)

    def _draw_disc(self, center: Tuple[int, int], color: Color, piece_type: PieceType, radius: int) -> None:
        fill = BUTTERCAT_COLOR if piece_type is PieceType.BUTTERCAT else DISC_COLORS[color]
        pygame.draw.circle(self.screen, fill, center, radius)
        pygame.draw.circle(self.screen, DISC_OUTLINE, center, radius, 3)
        badge = TYPE_BADGES.get(piece_type)
        if badge:
            ink = (255, 255, 255) if fill == DISC_COLORS[Color.BLACK] else TEXT_COLOR
            text = self.font_small.render(badge, True, ink)
            self.screen.blit(text, text.get_rect(center=center))

    def _draw_hand(self, hand: HandView) -> None:
        x, _ = slot_center(hand.color, 0)
        title = self.font_small.render(hand.color.value.capitalize(), True, TEXT_COLOR)
        self.screen.blit(title, title.get_rect(center=(x, HAND_TOP - 50)))
        for index, slot in enumerate(hand.slots):
            center = slot_center(hand.color, index)
            self._draw_disc(center, hand.color, slot.piece_type, SLOT_RADIUS)
            if slot.is_selected:
                pygame.draw.circle(self.screen, SELECTION_COLOR, center, SLOT_RADIUS + 5, width=3)

    def _draw_ui(self) -> None:
        mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(self.screen, self.font_small, button.contains(mouse_pos))

        status = (
            f"Turn: {self.state.current_turn.value.capitalize()}   "
            f"Black {self.state.black_count} - {self.state.white_count} White"
        )
        text = self.font_medium.render(status, True, TEXT_COLOR)
        self.screen.blit(text, (620, WINDOW_HEIGHT - 62))

        if self.message:
            msg = self.font_small.render(self.message, True, (94, 53, 177))
            self.screen.blit(msg, (BOARD_ORIGIN[0], 12))

    def _blit_circle(self, rgba: Tuple[int, int, int, int], center: Tuple[int, int], radius: int) -> None:
        surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(surf, rgba, (radius, radius), radius)
        self.screen.blit(surf, (center[0] - radius, center[1] - radius))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.update()
            self.draw()
            pygame.display.flip()
            self.clock.tick(FPS)

        pygame.quit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="ButterCat Othello (pygame)")
    GameSettings.add_arguments(parser)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = GameSettings.from_args(args)
    except SettingsError as exc:
        parser.error(str(exc))

    app = ButterCatPygameApp(settings)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main())
