"""
Rendering Engine
=================
Double-buffered terminal renderer for the one-bit display.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from blessed import Terminal

from .machine import Display


Color = Tuple[int, int, int]

GRAY_DARK = (68, 68, 68)
GRAY_MED = (138, 138, 138)
WHITE = (238, 238, 238)

# Upper half block: fg paints the top pixel, bg the bottom one
HALF_BLOCK = '▀'

HUD_ROWS = 3


@dataclass
class Cell:
    """A single cell in the render buffer."""
    char: str = ' '
    fg: Optional[Color] = None
    bg: Optional[Color] = None  # None = terminal default

    def matches(self, other: 'Cell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg == other.fg and
            self.bg == other.bg
        )

    def reset(self):
        """Reset to empty state."""
        self.char = ' '
        self.fg = None
        self.bg = None


class DoubleBuffer:
    """
    Double-buffered terminal renderer.

    Writes to a back buffer, then swaps to front buffer,
    only updating cells that changed. No screen clears needed.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[Cell]] = []
        self.back: List[List[Cell]] = []
        self._init_buffers()
        self._normal = term.normal  # Cache reset sequence

    def _init_buffers(self):
        """Initialize both buffers with empty cells."""
        self.front = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]
        self.back = [
            [Cell() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def resize(self, width: int, height: int):
        """Handle terminal resize."""
        self.width = width
        self.height = height
        self._init_buffers()

    def clear_back(self):
        """Clear the back buffer by resetting cells in-place."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: str,
            fg: Optional[Color] = None, bg: Optional[Color] = None):
        """Put a character in the back buffer at exact position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg = fg
            cell.bg = bg

    def put_string(self, x: int, y: int, text: str,
                   fg: Optional[Color] = None, bg: Optional[Color] = None):
        """Put a string in the back buffer."""
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg, bg)

    def present(self) -> str:
        """
        Swap buffers and generate output for changed cells only.
        """
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                front_cell = self.front[y][x]

                if not back_cell.matches(front_cell):
                    output_parts.append(self.term.move_xy(x, y))
                    # Reset colors to prevent bleed
                    output_parts.append(normal)
                    if back_cell.bg is not None:
                        output_parts.append(self.term.on_color_rgb(*back_cell.bg))
                    if back_cell.fg is not None:
                        output_parts.append(self.term.color_rgb(*back_cell.fg))
                    output_parts.append(back_cell.char if back_cell.char else ' ')

        # Swap: back becomes the new front, old front becomes next back
        self.front, self.back = self.back, self.front

        return ''.join(output_parts)


@dataclass
class GameRenderer:
    """
    Lays the machine display out in the terminal with a HUD underneath.

    Two display rows share one terminal row through half-block
    characters, which keeps pixels roughly square.
    """
    term: Terminal
    buffer: DoubleBuffer = field(init=False)

    # FPS display
    show_fps: bool = False
    current_fps: float = 60.0

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def game_height(self) -> int:
        """Height of the playfield area (excluding HUD rows)."""
        return self.buffer.height - HUD_ROWS

    def field_origin(self, display: Display) -> Tuple[int, int]:
        """Top-left terminal cell of the display, centered in the game area."""
        rows = (display.height + 1) // 2
        return (
            max(0, (self.width - display.width) // 2),
            max(0, (self.game_height - rows) // 2),
        )

    def begin_frame(self):
        """Begin rendering a new frame."""
        self.buffer.clear_back()

    def end_frame(self) -> str:
        """Output only changed cells."""
        return self.buffer.present()

    def put(self, x: int, y: int, char: str,
            fg: Optional[Color] = None, bg: Optional[Color] = None):
        self.buffer.put(x, y, char, fg, bg)

    def put_string(self, x: int, y: int, text: str,
                   fg: Optional[Color] = None, bg: Optional[Color] = None):
        self.buffer.put_string(x, y, text, fg, bg)

    def resize(self, width: int, height: int):
        """Handle terminal resize."""
        self.buffer.resize(width, height)

    def render_display(self, display: Display, fg: Color, bg: Color):
        """Draw every display pixel in the palette colors."""
        ox, oy = self.field_origin(display)
        for row in range(0, display.height, 2):
            for x in range(display.width):
                top = display.get(x, row)
                bottom = row + 1 < display.height and display.get(x, row + 1)
                self.put(ox + x, oy + row // 2, HALF_BLOCK,
                         fg if top else bg,
                         fg if bottom else bg)

    def draw_box(self, x: int, y: int, w: int, h: int,
                 color: Color = GRAY_DARK, char: str = '#'):
        """Draw a rectangular border."""
        for i in range(w):
            self.put(x + i, y, char, color)
            self.put(x + i, y + h - 1, char, color)
        for j in range(1, h - 1):
            self.put(x, y + j, char, color)
            self.put(x + w - 1, y + j, char, color)
