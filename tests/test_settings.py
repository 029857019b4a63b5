import argparse

import pytest

from buttercat_othello.game.board import Color
from buttercat_othello.settings import GameMode, GameSettings, SettingsError, parse_mode


def _parse(argv):
    parser = argparse.ArgumentParser()
    GameSettings.add_arguments(parser)
    return parser.parse_args(argv)


def test_defaults():
    settings = GameSettings()
    assert settings.mode is GameMode.CPU_HARD
    assert settings.cpu_color is Color.WHITE
    assert settings.search_depth == 5
    assert settings.flip_delay_ms == 600
    assert settings.cpu_delay_ms == 400
    assert settings.seed is None
    assert settings.is_cpu(Color.WHITE)
    assert not settings.is_cpu(Color.BLACK)


def test_from_env():
    settings = GameSettings.from_env(
        {
            "BUTTERCAT_OTHELLO_MODE": " PVP ",
            "BUTTERCAT_OTHELLO_CPU_COLOR": "Black",
            "BUTTERCAT_OTHELLO_DEPTH": "3",
            "BUTTERCAT_OTHELLO_SEED": "42",
        }
    )
    assert settings.mode is GameMode.PVP
    assert settings.cpu_color is Color.BLACK
    assert settings.search_depth == 3
    assert settings.seed == 42
    assert not settings.is_cpu(Color.BLACK)


def test_empty_env_keeps_defaults():
    assert GameSettings.from_env({}) == GameSettings()


@pytest.mark.parametrize(
    "key, value",
    [
        ("BUTTERCAT_OTHELLO_MODE", "chess"),
        ("BUTTERCAT_OTHELLO_CPU_COLOR", "red"),
        ("BUTTERCAT_OTHELLO_DEPTH", "0"),
        ("BUTTERCAT_OTHELLO_DEPTH", "deep"),
        ("BUTTERCAT_OTHELLO_SEED", "-1"),
    ],
)
def test_bad_env_values(key, value):
    with pytest.raises(SettingsError):
        GameSettings.from_env({key: value})


def test_flags_override_env():
    args = _parse(["--mode", "cpu-easy", "--depth", "2"])
    settings = GameSettings.from_args(
        args, environ={"BUTTERCAT_OTHELLO_MODE": "pvp", "BUTTERCAT_OTHELLO_SEED": "7"}
    )
    assert settings.mode is GameMode.CPU_EASY
    assert settings.search_depth == 2
    assert settings.seed == 7


def test_zero_depth_flag_is_rejected():
    with pytest.raises(SettingsError):
        GameSettings.from_args(_parse(["--depth", "0"]), environ={})


def test_invalid_construction():
    with pytest.raises(SettingsError):
        GameSettings(flip_delay_ms=-1)
    with pytest.raises(SettingsError):
        parse_mode("blitz")
    assert GameMode.CPU_EASY.uses_cpu
    assert not GameMode.PVP.uses_cpu
