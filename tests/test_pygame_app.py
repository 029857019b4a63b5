import pytest

pygame = pytest.importorskip("pygame")

from buttercat_othello.client import pygame_app  # noqa: E402
from buttercat_othello.game.board import Color  # noqa: E402
from buttercat_othello.settings import GameMode, GameSettings  # noqa: E402


@pytest.fixture
def app(monkeypatch, scripted):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    settings = GameSettings(mode=GameMode.PVP, flip_delay_ms=0, cpu_delay_ms=0)
    application = pygame_app.ButterCatPygameApp(settings)
    application.session.source = scripted()
    application.state = application.session.new_game()
    yield application
    pygame.quit()


def test_cell_geometry():
    assert pygame_app.cell_at(pygame_app.cell_center(3, 5)) == (3, 5)
    assert pygame_app.cell_at((0, 0)) is None


def test_click_select_place_and_flip(app):
    app.handle_click(pygame_app.cell_center(2, 3))
    assert app.message == "Select a piece from your hand first"

    app.handle_click(pygame_app.slot_center(Color.BLACK, 0))
    assert app.state.black_hand.selected_slot_id == 0

    app.handle_click(pygame_app.cell_center(2, 3))
    assert app.state.is_locked
    assert app.flip_deadline is not None

    app.update()
    assert not app.state.is_locked
    assert app.state.current_turn is Color.WHITE
    assert app.state.black_count == 4
    app.draw()


def test_mode_button_cycles(app):
    mode_button = app.buttons[1]
    app.handle_click(mode_button.rect.center)
    assert app.session.settings.mode is GameMode.CPU_EASY
    assert mode_button.label == "Mode: CPU Easy"
