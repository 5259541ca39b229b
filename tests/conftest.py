import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from golf_worlds.core.registry import default_registry
from golf_worlds.core.scheduler import Scheduler
from golf_worlds.core.session import SessionController
from golf_worlds.core.surface import RenderSurface


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakeContainer:
    def __init__(self, width=800, height=480, left=0.0, top=0.0):
        self.rect = (left, top, width, height)

    def layout_rect(self):
        return self.rect

    def set_size(self, width, height):
        self.rect = (self.rect[0], self.rect[1], width, height)


class RecordingShell:
    def __init__(self):
        self.worlds = []
        self.menus = 0
        self.errors = []
        self.status = None
        self.subtitle = None

    def show_world(self, name, summary):
        self.worlds.append((name, summary))

    def show_menu(self):
        self.menus += 1

    def report_error(self, message):
        self.errors.append(message)

    def set_status(self, text):
        self.status = text

    def set_subtitle(self, text):
        self.subtitle = text


@pytest.fixture(scope="session", autouse=True)
def pygame_init():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def container():
    return FakeContainer()


@pytest.fixture
def shell():
    return RecordingShell()


@pytest.fixture
def session(clock, container, shell):
    surface = RenderSurface(container)
    return SessionController(
        default_registry(), surface, Scheduler(clock), shell, rng=random.Random(1234)
    )


def run_frames(session, clock, count, step_ms=16):
    for _ in range(count):
        clock.advance(step_ms)
        session.scheduler.pump()
