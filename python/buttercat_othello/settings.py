"""Match settings shared by the front-ends.

Values come from defaults, then ``BUTTERCAT_OTHELLO_*`` environment
variables, then command-line flags.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from .game.board import Color


ENV_PREFIX = "BUTTERCAT_OTHELLO_"


class SettingsError(ValueError):
    pass


class GameMode(str, Enum):
    PVP = "pvp"
    CPU_EASY = "cpu-easy"
    CPU_HARD = "cpu-hard"

    @property
    def uses_cpu(self) -> bool:
        return self is not GameMode.PVP


def parse_mode(value: str) -> GameMode:
    try:
        return GameMode(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in GameMode)
        raise SettingsError(f"Unknown game mode {value!r}; expected one of {choices}") from exc


def parse_color(value: str) -> Color:
    try:
        return Color(value.strip().lower())
    except ValueError as exc:
        raise SettingsError(f"Unknown color {value!r}; expected black or white") from exc


def _parse_int(name: str, value: str, minimum: int) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise SettingsError(f"{name} must be an integer, got {value!r}") from exc
    if parsed < minimum:
        raise SettingsError(f"{name} must be at least {minimum}, got {parsed}")
    return parsed


@dataclass(frozen=True)
class GameSettings:
    mode: GameMode = GameMode.CPU_HARD
    cpu_color: Color = Color.WHITE
    search_depth: int = 5
    flip_delay_ms: int = 600
    cpu_delay_ms: int = 400
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.search_depth < 1:
            raise SettingsError("search_depth must be at least 1")
        if self.flip_delay_ms < 0 or self.cpu_delay_ms < 0:
            raise SettingsError("delays cannot be negative")

    def is_cpu(self, color: Color) -> bool:
        return self.mode.uses_cpu and color is self.cpu_color

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameSettings":
        env = os.environ if environ is None else environ
        settings = cls()

        mode = env.get(ENV_PREFIX + "MODE", "").strip()
        if mode:
            settings = replace(settings, mode=parse_mode(mode))

        cpu_color = env.get(ENV_PREFIX + "CPU_COLOR", "").strip()
        if cpu_color:
            settings = replace(settings, cpu_color=parse_color(cpu_color))

        depth = env.get(ENV_PREFIX + "DEPTH", "").strip()
        if depth:
            settings = replace(settings, search_depth=_parse_int("DEPTH", depth, 1))

        seed = env.get(ENV_PREFIX + "SEED", "").strip()
        if seed:
            settings = replace(settings, seed=_parse_int("SEED", seed, 0))

        return settings

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--mode", choices=[mode.value for mode in GameMode])
        parser.add_argument("--cpu-color", choices=[color.value for color in Color])
        parser.add_argument("--depth", type=int, help="Hard CPU search depth in plies")
        parser.add_argument("--seed", type=int, help="Seed for piece draws and the easy CPU")

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "GameSettings":
        settings = cls.from_env(environ)
        if getattr(args, "mode", None):
            settings = replace(settings, mode=parse_mode(args.mode))
        if getattr(args, "cpu_color", None):
            settings = replace(settings, cpu_color=parse_color(args.cpu_color))
        if getattr(args, "depth", None) is not None:
            settings = replace(settings, search_depth=args.depth)
        if getattr(args, "seed", None) is not None:
            settings = replace(settings, seed=args.seed)
        return settings
