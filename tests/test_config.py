import logging

import pytest

from chase8.cli import build_parser, config_from_args, parse_args, setup_logging
from chase8.config import (
    Config, ConfigError, DEFAULT_PALETTES, DEFAULT_SPEED, MAX_SPEED,
    parse_color, parse_palettes
)


@pytest.mark.parametrize('text, color', [
    ('#fff', (255, 255, 255)),
    ('#000', (0, 0, 0)),
    ('#d2b7ff', (0xd2, 0xb7, 0xff)),
    ('#0A0b0C', (10, 11, 12)),
])
def test_parse_color(text, color):
    assert parse_color(text) == color


@pytest.mark.parametrize('text', ['fff', '#ff', '#ffff', '#ggg', '#1234567', ''])
def test_parse_color_rejects(text):
    with pytest.raises(ConfigError):
        parse_color(text)


def test_parse_palettes():
    palettes = parse_palettes('#fff,#000;#e0f8d0,#081820')
    assert palettes == [
        ((255, 255, 255), (0, 0, 0)),
        ((0xe0, 0xf8, 0xd0), (0x08, 0x18, 0x20)),
    ]


@pytest.mark.parametrize('text', ['#fff', '#fff;#000', ';', '#fff,#zzz'])
def test_parse_palettes_rejects(text):
    with pytest.raises(ConfigError):
        parse_palettes(text)


def test_palette_cycling_wraps_both_ways():
    config = Config()
    assert config.palette == DEFAULT_PALETTES[0]
    config.prev_palette()
    assert config.palette_index == len(DEFAULT_PALETTES) - 1
    config.next_palette()
    assert config.palette_index == 0
    config.next_palette()
    assert config.fg == DEFAULT_PALETTES[1][0]
    assert config.bg == DEFAULT_PALETTES[1][1]


def test_set_speed_clamps():
    config = Config()
    config.set_speed(0)
    assert config.speed == 1
    config.set_speed(MAX_SPEED + 10)
    assert config.speed == MAX_SPEED


def test_invalid_config():
    with pytest.raises(ConfigError):
        Config(speed=0)
    with pytest.raises(ConfigError):
        Config(palettes=[])


def test_cli_defaults():
    config = config_from_args(parse_args([]))
    assert config.speed == DEFAULT_SPEED
    assert config.palettes == DEFAULT_PALETTES
    assert not config.muted
    assert config.seed is None
    assert config.start is None


def test_cli_options():
    config = config_from_args(parse_args([
        '--palettes', '#fff,#000', '--speed', '3', '--mute',
        '--seed', '42', '--start', '300,7', '--fps',
    ]))
    assert config.palettes == [((255, 255, 255), (0, 0, 0))]
    assert config.speed == 3
    assert config.muted
    assert config.seed == 42
    assert config.start == (300 & 0xFF, 7)
    assert config.show_fps


@pytest.mark.parametrize('argv', [
    ['--speed', '0'],
    ['--speed', 'fast'],
    ['--speed', str(MAX_SPEED + 1)],
    ['--palettes', '#fff'],
    ['--start', '12'],
    ['--bogus'],
])
def test_cli_rejects(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)
    assert exc.value.code == 2


def test_cli_version(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(['--version'])
    assert '0.1.0' in capsys.readouterr().out


def test_setup_logging_twice_closes_old_file(tmp_path):
    logger = logging.getLogger('chase8')
    setup_logging(str(tmp_path / 'first.log'))
    first = logger.handlers[0]

    setup_logging(str(tmp_path / 'second.log'), 'DEBUG')

    assert first.stream is None
    assert len(logger.handlers) == 1
    assert logger.handlers[0].baseFilename.endswith('second.log')

    setup_logging(None)
    assert isinstance(logger.handlers[0], logging.NullHandler)
