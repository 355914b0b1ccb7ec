import pygame
import pytest

import plinko as P
from plinko.engine import PlinkoEngine
from plinko.geometry import Board
from plinko.renderer import AppearanceConfig, Renderer


@pytest.fixture
def renderer():
    engine = PlinkoEngine(Board(400, 700), seed=0)
    return Renderer(engine, AppearanceConfig(labels=False))


def test_render_frame(renderer):
    frame = renderer.render()
    assert frame.shape == (700, 400, 3)
    assert frame.dtype.name == 'uint8'
    assert tuple(frame[0, 0]) == P.BG_COLOR
    # first peg centre
    assert tuple(frame[236, 25]) == P.PEG_COLOR


def test_render_draws_balls(renderer):
    renderer.engine.add_ball(200.0, 50.0)
    frame = renderer.render()
    assert tuple(frame[50, 200]) == P.BALL_COLOR


def test_click_spawns_ball(renderer):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10))
    assert renderer.handle_event(event)
    assert len(renderer.engine.balls) == 1


def test_resize_rebuilds_geometry(renderer):
    event = pygame.event.Event(pygame.VIDEORESIZE, w=600, h=1000, size=(600, 1000))
    assert renderer.handle_event(event)
    board = renderer.engine.board
    assert board.height == pytest.approx(950.0)
    assert board.width == pytest.approx(541.5)


def test_quit_events(renderer):
    assert not renderer.handle_event(pygame.event.Event(pygame.QUIT))
    assert not renderer.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q))
