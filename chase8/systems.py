"""
Game Systems
=============
The per-tick game loop and the systems it runs, in order:
input, movement, animation, sprite erase/redraw, collision.

The host owns the clock and calls run_tick() once per tick.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import logging

from .components import (
    GameState, PlayerEntity, AnimationState, Position,
    TOGGLE_MASK, FRAME_FLAG_A, FRAME_FLAG_B, COUNTDOWN_RESET
)
from .machine import Machine
from .player import (
    create_player, DEFAULT_START,
    KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT
)
from .spawner import spawn_target, respawn_target
from .sprites import PLAYER_FRAME_A, PLAYER_FRAME_B, SPRITE_ROWS


logger = logging.getLogger(__name__)

# (key, dx, dy) - each tested on its own every tick
DIRECTION_KEYS = (
    (KEY_UP, 0, -1),
    (KEY_DOWN, 0, 1),
    (KEY_LEFT, -1, 0),
    (KEY_RIGHT, 1, 0),
)


@dataclass
class TickResult:
    """What happened during one tick."""
    collided: bool
    toggled: bool
    bitmap: Sequence[int]


# =============================================================================
# INPUT / MOVEMENT
# =============================================================================

def input_system(machine: Machine) -> Tuple[int, int]:
    """
    Sample the four direction keys and return the summed (dx, dy).

    Orthogonal keys combine into a diagonal step with no normalization.
    """
    dx, dy = 0, 0
    for key_id, kx, ky in DIRECTION_KEYS:
        if machine.key_pressed(key_id):
            dx += kx
            dy += ky
    return dx, dy


def movement_system(player: PlayerEntity, dx: int, dy: int) -> None:
    """Apply the deltas with 8-bit wraparound. No clamping to the field."""
    pos = player.position
    pos.x = (pos.x + dx) & 0xFF
    pos.y = (pos.y + dy) & 0xFF


# =============================================================================
# ANIMATION
# =============================================================================

def select_frame(flag_before: int, toggled: bool) -> Sequence[int]:
    """Bitmap for this tick's final draw, given the pre-tick flag."""
    flag = flag_before ^ TOGGLE_MASK if toggled else flag_before
    if flag == FRAME_FLAG_A:
        return PLAYER_FRAME_A
    if flag == FRAME_FLAG_B:
        return PLAYER_FRAME_B
    raise ValueError(f'Invalid frame flag: {flag:#04x}')


def animation_system(anim: AnimationState) -> bool:
    """
    Step the countdown. When it has run out, flip the frame flag and
    restart it at 15. Returns True on the ticks the flag flips.
    """
    if anim.ticks_remaining == 0:
        anim.frame_flag ^= TOGGLE_MASK
        anim.ticks_remaining = COUNTDOWN_RESET
        return True
    anim.ticks_remaining -= 1
    return False


# =============================================================================
# GAME LOOP
# =============================================================================

def new_game(machine: Machine, start: Optional[Tuple[int, int]] = None) -> GameState:
    """Create a game on a cleared display with both sprites drawn."""
    x, y = start if start is not None else DEFAULT_START
    machine.clear()

    state = GameState(player=create_player(x, y), animation=AnimationState())
    bitmap = select_frame(state.animation.frame_flag, False)
    pos = state.player.position
    machine.draw_sprite(pos.x, pos.y, bitmap, SPRITE_ROWS)
    state.target = spawn_target(machine)

    logger.info('New game: player at %s, target at %s',
                pos.as_tuple(), state.target.position.as_tuple())
    return state


def run_tick(state: GameState, machine: Machine) -> TickResult:
    """Run one full tick of the game against the machine."""
    player = state.player
    anim = state.animation
    state.tick += 1

    player.previous_position = Position(player.position.x, player.position.y)

    dx, dy = input_system(machine)
    movement_system(player, dx, dy)

    flag_before = anim.frame_flag
    bitmap = select_frame(flag_before, False)

    prev = player.previous_position
    machine.draw_sprite(prev.x, prev.y, bitmap, SPRITE_ROWS)

    toggled = animation_system(anim)
    if toggled:
        bitmap = select_frame(flag_before, True)

    pos = player.position
    collided = machine.draw_sprite(pos.x, pos.y, bitmap, SPRITE_ROWS)

    if collided:
        respawn_target(state, machine)

    return TickResult(collided=collided, toggled=toggled, bitmap=bitmap)
