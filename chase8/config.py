"""
Configuration
==============
Palettes, speed and start-up options.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


VERSION = '0.1.0'

TARGET_FPS = 60
FRAME_TIME = 1.0 / TARGET_FPS

DEFAULT_SPEED = 1  # ticks per frame
MAX_SPEED = 40
SPEED_MSG_FRAMES = 30

Color = Tuple[int, int, int]
Palette = Tuple[Color, Color]  # (foreground, background)


class ConfigError(ValueError):
    """Invalid configuration value."""


def _hex(value: int) -> Color:
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


# 1-bit palettes, most from lospec.com
DEFAULT_PALETTES: List[Palette] = [
    (_hex(0xdddddd), _hex(0x000000)),
    (_hex(0xd2b7ff), _hex(0x060010)),  # 1-bit-error-4
    (_hex(0xf0f6f0), _hex(0x222323)),  # 1bit-monitor-glow
    (_hex(0xd9c8bf), _hex(0x28282e)),  # vanilla-milkshake
    (_hex(0xc9cca1), _hex(0x515262)),  # dreamscape8
    (_hex(0xb2b47e), _hex(0x212123)),  # cc-29
    (_hex(0xc8d0d8), _hex(0x302828)),  # 18-bytes
    (_hex(0x4593a5), _hex(0x32313b)),  # chasm
    (_hex(0xa9a77f), _hex(0x1a1b00)),  # lcd-drab-4
    (_hex(0xbedc7f), _hex(0x112318)),  # ammo-8
    (_hex(0xefd8a1), _hex(0x2a1d0d)),  # fantasy-24
    (_hex(0xffd4a3), _hex(0x0d2b45)),  # slso8
    (_hex(0xee8695), _hex(0x292831)),  # twilight-5
    (_hex(0xe2f3e4), _hex(0x332c50)),  # kirokaze-gameboy
    (_hex(0xd8bfd8), _hex(0x74569b)),  # blessing
]


def parse_color(text: str) -> Color:
    """Parse '#rgb' or '#rrggbb'."""
    if not text.startswith('#'):
        raise ConfigError(f'Invalid color {text!r}: expected #rgb or #rrggbb')
    digits = text[1:]
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    if len(digits) != 6:
        raise ConfigError(f'Invalid color {text!r}: expected #rgb or #rrggbb')
    try:
        value = int(digits, 16)
    except ValueError:
        raise ConfigError(f'Invalid color {text!r}: not hexadecimal') from None
    return _hex(value)


def parse_palettes(text: str) -> List[Palette]:
    """Parse '#fg,#bg;#fg,#bg;...' into a palette list."""
    palettes = []
    for chunk in text.split(';'):
        if not chunk:
            continue
        fg, sep, bg = chunk.partition(',')
        if not sep:
            raise ConfigError(f'Invalid palette {chunk!r}: expected #fg,#bg')
        palettes.append((parse_color(fg.strip()), parse_color(bg.strip())))
    if not palettes:
        raise ConfigError('Palette list is empty')
    return palettes


def validate_speed(speed: int) -> int:
    if speed <= 0:
        raise ConfigError('Speed must be > 0')
    if speed > MAX_SPEED:
        raise ConfigError(f'Speed must be <= {MAX_SPEED}')
    return speed


@dataclass
class Config:
    """Runtime options. Palette and speed change while playing."""
    palettes: List[Palette] = field(default_factory=lambda: list(DEFAULT_PALETTES))
    palette_index: int = 0
    speed: int = DEFAULT_SPEED
    muted: bool = False
    show_fps: bool = False
    seed: Optional[int] = None
    start: Optional[Tuple[int, int]] = None

    def __post_init__(self):
        if not self.palettes:
            raise ConfigError('At least one palette is required')
        validate_speed(self.speed)
        self.palette_index %= len(self.palettes)

    @property
    def palette(self) -> Palette:
        return self.palettes[self.palette_index]

    @property
    def fg(self) -> Color:
        return self.palette[0]

    @property
    def bg(self) -> Color:
        return self.palette[1]

    def next_palette(self):
        self.palette_index = (self.palette_index + 1) % len(self.palettes)

    def prev_palette(self):
        self.palette_index = (self.palette_index - 1) % len(self.palettes)

    def set_speed(self, speed: int):
        """Set ticks per frame, clamped to 1..MAX_SPEED."""
        self.speed = max(1, min(MAX_SPEED, speed))
