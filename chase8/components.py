"""
Component Definitions
======================
Game state records. Plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Tuple


# =============================================================================
# ANIMATION CONSTANTS
# =============================================================================

TOGGLE_MASK = 0x0F
FRAME_FLAG_A = 0x00
FRAME_FLAG_B = 0x0F
INITIAL_FRAME_FLAG = FRAME_FLAG_B
COUNTDOWN_RESET = 15


# =============================================================================
# SPATIAL COMPONENTS
# =============================================================================

@dataclass
class Position:
    """Unsigned 8-bit screen coordinates."""
    x: int = 0
    y: int = 0

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass
class PlayerEntity:
    """The player sprite. previous_position is where it was drawn last tick."""
    position: Position = field(default_factory=Position)
    previous_position: Position = field(default_factory=Position)


@dataclass
class TargetEntity:
    """The sprite the player chases."""
    position: Position = field(default_factory=Position)


# =============================================================================
# ANIMATION COMPONENTS
# =============================================================================

@dataclass
class AnimationState:
    """Two-frame player animation on a free-running countdown."""
    frame_flag: int = INITIAL_FRAME_FLAG
    ticks_remaining: int = COUNTDOWN_RESET


# =============================================================================
# GAME STATE
# =============================================================================

@dataclass
class GameState:
    """Everything the tick mutates. One writer, one tick at a time."""
    player: PlayerEntity = field(default_factory=PlayerEntity)
    animation: AnimationState = field(default_factory=AnimationState)
    target: TargetEntity = field(default_factory=TargetEntity)

    # Ticks run since the game started
    tick: int = 0
