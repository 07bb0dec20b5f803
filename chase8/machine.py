"""
Host Machine
=============
The primitive surface the game runs on: a 64x32 one-bit XOR display,
a sixteen-key keypad, a byte random source and a sound timer.
"""

from typing import List, Optional, Sequence, Tuple
import logging
import random


logger = logging.getLogger(__name__)

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8
KEY_COUNT = 16


class Display:
    """
    One-bit framebuffer with XOR sprite compositing.

    Every sprite pixel wraps independently around both edges, so a
    sprite drawn at x=60 shows its right half at the left edge.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self.pixels: List[bool] = [False] * (width * height)

    def clear(self):
        """Turn every pixel off."""
        self.pixels = [False] * (self.width * self.height)

    def get(self, x: int, y: int) -> bool:
        """Pixel state at on-screen coordinates (wrapped)."""
        return self.pixels[(y % self.height) * self.width + (x % self.width)]

    def lit_count(self) -> int:
        return sum(self.pixels)

    def snapshot(self) -> Tuple[bool, ...]:
        """Immutable copy of the framebuffer, for comparisons."""
        return tuple(self.pixels)

    def draw(self, x: int, y: int, rows: Sequence[int]) -> bool:
        """
        XOR the sprite rows onto the display at (x, y).

        Returns True if any pixel that was on got turned off.
        """
        overlaps = False
        for row, bits in enumerate(rows):
            py = (y + row) % self.height
            for col in range(SPRITE_WIDTH):
                if bits & (0x80 >> col):
                    idx = py * self.width + (x + col) % self.width
                    if self.pixels[idx]:
                        self.pixels[idx] = False
                        overlaps = True
                    else:
                        self.pixels[idx] = True
        return overlaps


class Machine:
    """
    Host for the game core.

    The game only talks to the machine through draw_sprite, key_pressed,
    random_byte and set_tone_duration. Everything else here belongs to the
    front end driving it.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.display = Display()
        self.rng = rng if rng is not None else random.Random(seed)
        self.buttons: List[bool] = [False] * KEY_COUNT
        self.sound_timer = 0

    # -------------------------------------------------------------------------
    # Game-facing primitives
    # -------------------------------------------------------------------------

    def draw_sprite(self, x: int, y: int, bitmap: Sequence[int],
                    rows: Optional[int] = None) -> bool:
        """Draw the first `rows` rows of bitmap; returns the collision flag."""
        if rows is None:
            rows = len(bitmap)
        if rows > len(bitmap):
            raise ValueError(f'Sprite has {len(bitmap)} rows, {rows} requested')
        return self.display.draw(x, y, bitmap[:rows])

    def key_pressed(self, key_id: int) -> bool:
        """Instantaneous press state of a keypad key."""
        return self.buttons[_check_key(key_id)]

    def random_byte(self, mask: int) -> int:
        """Uniform random byte ANDed with mask."""
        return self.rng.randrange(256) & mask

    def set_tone_duration(self, ticks: int):
        """Start a tone lasting the given number of ticks."""
        self.sound_timer = ticks & 0xFF
        logger.debug('Tone set for %d ticks', self.sound_timer)

    # -------------------------------------------------------------------------
    # Host side
    # -------------------------------------------------------------------------

    def press_key(self, key_id: int):
        self.buttons[_check_key(key_id)] = True

    def release_key(self, key_id: int):
        self.buttons[_check_key(key_id)] = False

    def release_all(self):
        self.buttons = [False] * KEY_COUNT

    def step_timers(self):
        """Advance the sound timer by one tick. Holds at zero."""
        if self.sound_timer > 0:
            self.sound_timer -= 1

    @property
    def tone_active(self) -> bool:
        return self.sound_timer > 0

    def clear(self):
        self.display.clear()


def _check_key(key_id: int) -> int:
    if not 0 <= key_id < KEY_COUNT:
        raise ValueError(f'No such key: {key_id:#x}')
    return key_id
