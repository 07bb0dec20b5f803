import pytest

from chase8.components import GameState, TargetEntity, Position
from chase8.machine import Machine
from chase8.player import create_player
from chase8.sprites import PLAYER_FRAME_B, TARGET


class ScriptedRng:
    """Stands in for random.Random, handing out fixed bytes in order."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def randrange(self, n):
        assert n == 256
        self.calls += 1
        return self.values.pop(0)


class StubTerminal:
    """Just enough of blessed.Terminal for the renderer and App."""

    def __init__(self, width=80, height=24, keys=()):
        self.width = width
        self.height = height
        self.normal = '<n>'
        self.keys = list(keys)

    def move_xy(self, x, y):
        return f'<{x},{y}>'

    def color_rgb(self, r, g, b):
        return f'<fg {r},{g},{b}>'

    def on_color_rgb(self, r, g, b):
        return f'<bg {r},{g},{b}>'

    def inkey(self, timeout=None):
        return self.keys.pop(0) if self.keys else ''


def place(machine, player_xy, target_xy):
    """Build a game state with both sprites already on screen."""
    state = GameState(
        player=create_player(*player_xy),
        target=TargetEntity(Position(*target_xy)),
    )
    machine.draw_sprite(player_xy[0], player_xy[1], PLAYER_FRAME_B)
    machine.draw_sprite(target_xy[0], target_xy[1], TARGET)
    return state


@pytest.fixture
def machine():
    return Machine(seed=1234)


@pytest.fixture
def scripted_machine():
    """Machine whose first target lands at (40, 20), then (1, 1), (50, 2)."""
    return Machine(rng=ScriptedRng([40, 20, 1, 1, 50, 2]))
