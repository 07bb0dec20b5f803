"""
Target Spawner
===============
Target placement and the collision respawn sequence.
"""

import logging

from .components import GameState, Position, TargetEntity
from .machine import Machine
from .sprites import TARGET, SPRITE_ROWS


logger = logging.getLogger(__name__)

TONE_DURATION = 2
COORD_MASK = 0xFF


def random_position(machine: Machine) -> Position:
    """Two independent uniform bytes. No rejection, may land off-field."""
    x = machine.random_byte(COORD_MASK)
    y = machine.random_byte(COORD_MASK)
    return Position(x, y)


def spawn_target(machine: Machine) -> TargetEntity:
    """Create the target at a random position and draw it."""
    target = TargetEntity(random_position(machine))
    machine.draw_sprite(target.position.x, target.position.y, TARGET, SPRITE_ROWS)
    return target


def respawn_target(state: GameState, machine: Machine) -> None:
    """
    Erase the target, move it somewhere random, redraw it and beep.

    Runs inside the tick that detected the collision, with no other
    draws in between.
    """
    target = state.target
    old = target.position.as_tuple()

    machine.draw_sprite(target.position.x, target.position.y, TARGET, SPRITE_ROWS)
    target.position = random_position(machine)
    machine.draw_sprite(target.position.x, target.position.y, TARGET, SPRITE_ROWS)
    machine.set_tone_duration(TONE_DURATION)

    logger.debug('Target respawned %s -> %s on tick %d',
                 old, target.position.as_tuple(), state.tick)
