"""Command-line interface for playing ButterCat Othello in a terminal."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import List, Optional, Tuple

from .ai import EasyCpuStrategy, HardCpuStrategy
from .game.board import Color, PieceType, opponent
from .game.hand import IllegalSelectionError
from .session import GameSession, PlaceResult
from .settings import GameMode, GameSettings, SettingsError
from .snapshot import GameSnapshot, HandView


TYPE_LABELS = {
    PieceType.NORMAL: "normal",
    PieceType.BUTTER: "butter (lands in your rival's color)",
    PieceType.CAT: "cat (cannot be flipped)",
    PieceType.BUTTERCAT: "buttercat (no captures either way)",
}

CELL_SYMBOLS = {
    (Color.BLACK, PieceType.NORMAL): "X",
    (Color.WHITE, PieceType.NORMAL): "O",
    (Color.BLACK, PieceType.BUTTER): "b",
    (Color.WHITE, PieceType.BUTTER): "w",
    (Color.BLACK, PieceType.CAT): "c",
    (Color.WHITE, PieceType.CAT): "d",
    (Color.BLACK, PieceType.BUTTERCAT): "*",
    (Color.WHITE, PieceType.BUTTERCAT): "*",
}


def render_board(state: GameSnapshot) -> str:
    lines = ["   " + " ".join(str(x) for x in range(len(state.board)))]
    for y, row in enumerate(state.board):
        symbols = []
        for cell in row:
            if cell.color is not None and cell.piece_type is not None:
                symbols.append(CELL_SYMBOLS[(cell.color, cell.piece_type)])
            elif cell.is_valid_move:
                symbols.append("+")
            else:
                symbols.append(".")
        lines.append(f"{y}  " + " ".join(symbols))
    lines.append(f"Black (X): {state.black_count}  White (O): {state.white_count}")
    return "\n".join(lines)


def render_hand(hand: HandView) -> str:
    lines = [f"{hand.color.value.capitalize()} hand:"]
    for slot in hand.slots:
        marker = ">" if slot.is_selected else " "
        lines.append(f" {marker} [{slot.id}] {TYPE_LABELS[slot.piece_type]}")
    return "\n".join(lines)


def _show(state: GameSnapshot) -> None:
    print()
    print(render_board(state))
    print(render_hand(state.hand(state.current_turn)))
    print()


def _prompt(prompt: str) -> Optional[str]:
    try:
        value = input(prompt)
    except EOFError:
        return None

    value = value.strip()
    if value.lower() in {"q", "quit", "exit"}:
        return None
    return value


def _prompt_integer(prompt: str) -> Optional[int]:
    value = _prompt(prompt)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        print("Please enter a number or 'q' to quit.")
        return _prompt_integer(prompt)


def parse_square(value: str) -> Optional[Tuple[int, int]]:
    """Parse ``"x y"`` or ``"x,y"`` into a coordinate pair."""

    parts = value.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def _describe(actor: str, result: PlaceResult) -> str:
    if not result.flipped:
        return f"{actor} placed without flipping."
    squares = ", ".join(str(pos) for pos in result.flipped)
    return f"{actor} flipped {len(result.flipped)}: {squares}"


def _human_turn(session: GameSession) -> bool:
    color = session.game.current_turn
    while True:
        state = session.state()
        _show(state)
        print(f"{color.value.capitalize()} to move.")

        slot_id = _prompt_integer("Select a piece from your hand (slot id, or q to quit): ")
        if slot_id is None:
            return False
        try:
            session.select_slot(slot_id)
        except IllegalSelectionError as exc:
            print(f"Cannot select that piece: {exc}")
            continue
        if session.game.selection is None or session.game.selection.color is not color:
            print("That piece belongs to your opponent.")
            session.deselect()
            continue

        square = _prompt("Place at 'x y' (or q to quit): ")
        if square is None:
            return False
        coords = parse_square(square)
        if coords is None:
            print("Please type two numbers, e.g. '2 3'.")
            continue

        result = session.place(*coords)
        if not result.success:
            print(f"Illegal placement: {result.error}. Try again.")
            continue

        session.end_flip_animation()
        print(_describe("You", result))
        return True


def _cpu_turn(session: GameSession, label: str) -> None:
    result = session.play_cpu_turn()
    if result is None:
        return
    if result.error == "no_moves":
        print(f"{label} has no legal moves and passes.")
        return
    session.end_flip_animation()
    print(_describe(label, result))


def _announce_result(session: GameSession) -> None:
    state = session.state()
    print(render_board(state))
    winner = state.winner
    if isinstance(winner, Color):
        print(f"{winner.value.capitalize()} wins {max(state.black_count, state.white_count)}"
              f" to {min(state.black_count, state.white_count)}!")
    else:
        print("It's a draw!")


def run_match(session: GameSession, show_board: bool = True) -> int:
    while not session.game.is_game_over():
        if session.auto_pass():
            print(f"{session.last_pass.value.capitalize()} has no legal moves and passes.")
            continue

        if session.is_cpu_turn():
            _cpu_turn(session, f"CPU ({session.game.current_turn.value})")
            if show_board:
                print(render_board(session.state()))
        elif not _human_turn(session):
            print("Thanks for playing!")
            return 0

    _announce_result(session)
    return 0


def _choose_color() -> Optional[Color]:
    while True:
        choice = _prompt("Play as Black (B) or White (W)? Black moves first [B/W]: ")
        if choice is None:
            return None
        choice = choice.lower()
        if choice in {"b", "black"}:
            return Color.BLACK
        if choice in {"w", "white"}:
            return Color.WHITE
        print("Please type 'B' or 'W'.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ButterCat Othello in the terminal")
    GameSettings.add_arguments(parser)
    parser.add_argument("--watch", action="store_true", help="CPU vs CPU (easy black, hard white)")
    parser.add_argument("--ask-color", action="store_true", help="Prompt for your color")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        settings = GameSettings.from_args(args)
    except SettingsError as exc:
        parser.error(str(exc))

    if args.watch:
        rng = random.Random(settings.seed)
        session = GameSession(
            settings,
            cpu_players={
                Color.BLACK: EasyCpuStrategy(rng=rng),
                Color.WHITE: HardCpuStrategy(depth=settings.search_depth),
            },
        )
        print("CPU vs CPU: easy plays Black, hard plays White.")
        return run_match(session, show_board=True)

    if args.ask_color and settings.mode is not GameMode.PVP:
        human = _choose_color()
        if human is None:
            return 0
        settings = replace(settings, cpu_color=opponent(human))

    session = GameSession(settings)
    print("Game start! Enter 'q' at any prompt to quit.")
    return run_match(session)


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    sys.exit(main())
