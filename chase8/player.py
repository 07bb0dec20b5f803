"""
Player Module
==============
Player entity creation, keypad bindings and terminal input handling.
"""

from typing import Dict, Optional

from .components import PlayerEntity, Position
from .machine import Machine


# Keypad keys the game reads for movement
KEY_UP = 0x5
KEY_DOWN = 0x8
KEY_LEFT = 0x7
KEY_RIGHT = 0x9

# QWERTY layout onto the 4x4 keypad:
#   1 2 3 4      1 2 3 C
#   q w e r  ->  4 5 6 D
#   a s d f      7 8 9 E
#   z x c v      A 0 B F
QWERTY_KEYPAD: Dict[str, int] = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}

DEFAULT_START = (28, 13)


def create_player(x: int, y: int) -> PlayerEntity:
    """Create the player at (x, y) with no movement history."""
    return PlayerEntity(
        position=Position(x & 0xFF, y & 0xFF),
        previous_position=Position(x & 0xFF, y & 0xFF),
    )


class InputHandler:
    """
    Turns terminal keystrokes into keypad state and host actions.

    Terminals don't report key-up, so each keypad key stays pressed for
    hold_duration frames after its last keystroke. Auto-repeat keeps
    refreshing the timer while the key is physically held.
    """

    def __init__(self, hold_duration: int = 12):
        self.keys_held: Dict[int, int] = {}  # keypad id -> frames remaining
        self.hold_duration = hold_duration
        self.fast_forward_frames = 0

        # Actions triggered this frame (consumed on read)
        self._pause_triggered = False
        self._restart_triggered = False
        self._mute_triggered = False
        self._quit_triggered = False
        self._palette_step = 0
        self._speed_step = 0
        self._speed_reset = False

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return

        key_str = key.lower() if not key.is_sequence else ''

        if key.name == 'KEY_F10' or key_str == '\x03':
            self._quit_triggered = True
        elif key.name == 'KEY_ESCAPE':
            self._pause_triggered = True
        elif key.name == 'KEY_ENTER' or key_str in ('\n', '\r'):
            self._restart_triggered = True

        # Keypad - refresh hold timer
        elif key_str in QWERTY_KEYPAD:
            self.keys_held[QWERTY_KEYPAD[key_str]] = self.hold_duration

        elif key_str == ' ':
            self.fast_forward_frames = self.hold_duration
        elif key_str == 'm':
            self._mute_triggered = True
        elif key_str == ']':
            self._palette_step += 1
        elif key_str == '[':
            self._palette_step -= 1
        elif key_str == '0':
            self._speed_reset = True
        elif key_str in ('+', '='):
            self._speed_step += 1
        elif key_str == '-':
            self._speed_step -= 1

    def update(self) -> None:
        """Update key hold timers (call once per frame)."""
        expired = []
        for key_id, frames in self.keys_held.items():
            self.keys_held[key_id] = frames - 1
            if self.keys_held[key_id] <= 0:
                expired.append(key_id)
        for key_id in expired:
            del self.keys_held[key_id]

        if self.fast_forward_frames > 0:
            self.fast_forward_frames -= 1

    def apply(self, machine: Machine) -> None:
        """Copy the held keypad keys onto the machine."""
        for key_id in range(len(machine.buttons)):
            if key_id in self.keys_held:
                machine.press_key(key_id)
            else:
                machine.release_key(key_id)

    def release_all(self) -> None:
        self.keys_held.clear()
        self.fast_forward_frames = 0

    @property
    def fast_forward(self) -> bool:
        return self.fast_forward_frames > 0

    def consume_pause(self) -> bool:
        """Check and consume pause toggle trigger."""
        triggered = self._pause_triggered
        self._pause_triggered = False
        return triggered

    def consume_restart(self) -> bool:
        """Check and consume restart trigger."""
        triggered = self._restart_triggered
        self._restart_triggered = False
        return triggered

    def consume_mute(self) -> bool:
        """Check and consume mute toggle trigger."""
        triggered = self._mute_triggered
        self._mute_triggered = False
        return triggered

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit_triggered
        self._quit_triggered = False
        return triggered

    def consume_palette_step(self) -> int:
        """Net palette steps requested this frame (negative = previous)."""
        step = self._palette_step
        self._palette_step = 0
        return step

    def consume_speed_change(self) -> Optional[int]:
        """
        Speed request this frame: None for no change, 0 for reset,
        otherwise the net step.
        """
        if self._speed_reset:
            self._speed_reset = False
            self._speed_step = 0
            return 0
        step = self._speed_step
        self._speed_step = 0
        return step if step else None
