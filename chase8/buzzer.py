"""
Buzzer
=======
Tone output driven by the machine's sound timer.
"""

from typing import Callable
import logging
import sys


logger = logging.getLogger(__name__)

BELL = '\a'


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class Buzzer:
    """
    Terminal bell buzzer.

    A terminal can't hold a note, so the bell rings once when the
    tone starts and stays quiet until the tone has ended.
    """

    def __init__(self, write: Callable[[str], None] = _write_stdout):
        self._write = write
        self.muted = False
        self.playing = False

    def set_muted(self, state: bool) -> None:
        self.muted = state
        if state:
            self.set_playing(False)

    def toggle_mute(self) -> None:
        self.set_muted(not self.muted)
        logger.info('Sound %s', 'muted' if self.muted else 'unmuted')

    def set_playing(self, state: bool) -> None:
        # Nothing to do if the state hasn't changed
        if self.playing == state:
            return
        # Can't start while muted
        if state and self.muted:
            return

        self.playing = state
        if state:
            logger.debug('Tone on')
            self._write(BELL)
