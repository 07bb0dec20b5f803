"""
Command Line
=============
Argument parsing into a Config.
"""

from typing import List, Optional, Tuple
import argparse
import logging

from .config import (
    Config, ConfigError, VERSION, DEFAULT_SPEED, MAX_SPEED,
    parse_palettes, validate_speed
)


DESCRIPTION = 'CHASE8 - chase the target around a 64x32 one-bit screen.'

CONTROLS = """\
controls:
    W A S D       move (keypad 5 7 8 9)
    ESC           pause / unpause
    ENTER         restart (while paused)
    M             mute / unmute
    [ ]           previous / next palette
    0 - +         reset / decrease / increase speed
    SPACE         fast forward
    F10, Ctrl-C   quit

examples:
    chase8 --palettes '#fff,#000;#e0f8d0,#081820'
    chase8 --speed 2 --seed 1234 --log-file chase8.log
"""


def _palettes_arg(value: str):
    try:
        return parse_palettes(value)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e))


def _speed_arg(value: str) -> int:
    try:
        return validate_speed(int(value))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e) if isinstance(e, ConfigError)
                                         else f'invalid speed {value!r}')


def _start_arg(value: str) -> Tuple[int, int]:
    x, sep, y = value.partition(',')
    try:
        if not sep:
            raise ValueError
        return (int(x) & 0xFF, int(y) & 0xFF)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid start position {value!r}, expected X,Y')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='chase8',
        description=DESCRIPTION,
        epilog=CONTROLS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-p', '--palettes', type=_palettes_arg, default=None,
                        help="palette list '#fg,#bg;#fg,#bg;...'")
    parser.add_argument('-s', '--speed', type=_speed_arg, default=DEFAULT_SPEED,
                        help=f'ticks per frame, 1-{MAX_SPEED} (default {DEFAULT_SPEED})')
    parser.add_argument('--mute', action='store_true', help='start with sound muted')
    parser.add_argument('--fps', action='store_true', help='show frames per second in the HUD')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for target placement')
    parser.add_argument('--start', type=_start_arg, default=None,
                        help='player start position X,Y')
    parser.add_argument('--log-file', default=None,
                        help='write a log to this file')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='log level (default INFO)')
    parser.add_argument('-V', '--version', action='version',
                        version=f'%(prog)s {VERSION}')
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    kwargs = dict(speed=args.speed, muted=args.mute, show_fps=args.fps,
                  seed=args.seed, start=args.start)
    if args.palettes:
        kwargs['palettes'] = args.palettes
    return Config(**kwargs)


def setup_logging(log_file: Optional[str], level: str = 'INFO') -> None:
    """
    Log to a file if one is given. The terminal belongs to the game
    screen, so nothing is ever logged to it.
    """
    root = logging.getLogger('chase8')
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        ))
        root.addHandler(handler)
        root.setLevel(getattr(logging, level))
    else:
        root.addHandler(logging.NullHandler())
