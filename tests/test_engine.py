from blessed.keyboard import Keystroke

from chase8.buzzer import BELL, Buzzer
from chase8.config import Config, DEFAULT_SPEED, SPEED_MSG_FRAMES
from chase8.engine import DoubleBuffer, GameRenderer, HALF_BLOCK
from chase8.machine import Display, Machine
from chase8.sprites import PLAYER_FRAME_B
from chase8.main import App

from conftest import ScriptedRng, StubTerminal, place


def make_app(**config):
    out = []
    term = StubTerminal()
    app = App(term, Config(seed=3, **config), buzzer=Buzzer(write=out.append))
    return app, term, out


def test_present_emits_only_changed_cells():
    buffer = DoubleBuffer(StubTerminal(10, 4))
    buffer.put(2, 1, 'x', (1, 2, 3))
    first = buffer.present()
    assert first.count('<2,1>') == 1
    assert '<fg 1,2,3>' in first

    buffer.clear_back()
    buffer.put(2, 1, 'x', (1, 2, 3))
    assert buffer.present() == ''


def test_put_outside_buffer_ignored():
    buffer = DoubleBuffer(StubTerminal(4, 2))
    buffer.put(-1, 0, 'x')
    buffer.put(4, 1, 'x')
    assert buffer.present() == ''


def test_render_display_packs_two_rows_per_cell():
    renderer = GameRenderer(StubTerminal(80, 24))
    display = Display()
    display.draw(0, 0, [0x80])
    fg, bg = (9, 9, 9), (1, 1, 1)

    renderer.render_display(display, fg, bg)

    ox, oy = renderer.field_origin(display)
    assert (ox, oy) == (8, 2)
    cell = renderer.buffer.back[oy][ox]
    assert (cell.char, cell.fg, cell.bg) == (HALF_BLOCK, fg, bg)
    other = renderer.buffer.back[oy][ox + 1]
    assert (other.fg, other.bg) == (bg, bg)


def test_update_runs_speed_ticks_per_frame():
    app, _, _ = make_app(speed=3)
    app.update()
    assert app.state.tick == 3


def test_pause_stops_ticks():
    app, term, _ = make_app()
    term.keys = [Keystroke('\x1b', code=1, name='KEY_ESCAPE')]
    app.handle_input()
    assert app.is_paused

    app.update()
    assert app.state.tick == 0


def test_restart_only_while_paused():
    app, term, _ = make_app()
    app.update()
    app.update()

    term.keys = [Keystroke('\n', code=2, name='KEY_ENTER')]
    app.handle_input()
    assert app.state.tick == 2

    term.keys = [Keystroke('\x1b', code=1, name='KEY_ESCAPE'),
                 Keystroke('\n', code=2, name='KEY_ENTER')]
    app.handle_input()
    assert not app.is_paused
    assert app.state.tick == 0


def test_speed_keys_show_message():
    app, term, _ = make_app()
    term.keys = [Keystroke('+'), Keystroke('+')]
    app.handle_input()
    assert app.config.speed == DEFAULT_SPEED + 2
    assert app.speed_msg_timer == SPEED_MSG_FRAMES

    term.keys = [Keystroke('0')]
    app.handle_input()
    assert app.config.speed == DEFAULT_SPEED


def test_fast_forward_doubles_ticks():
    app, term, _ = make_app(speed=2)
    term.keys = [Keystroke(' ')]
    app.handle_input()
    app.update()
    assert app.state.tick == 4


def test_mute_and_palette_keys():
    app, term, _ = make_app()
    term.keys = [Keystroke('m'), Keystroke('[')]
    app.handle_input()
    assert app.buzzer.muted
    assert app.config.palette_index == len(app.config.palettes) - 1


def test_movement_key_moves_player():
    app, term, _ = make_app(start=(5, 5))
    term.keys = [Keystroke('d')]
    app.handle_input()
    app.update()
    assert app.state.player.position.as_tuple() == (6, 5)


def test_collision_rings_bell():
    app, _, out = make_app()
    player = app.state.player.position
    target = app.state.target.position

    # Move the player sprite onto the target between ticks
    app.machine.draw_sprite(player.x, player.y, PLAYER_FRAME_B)
    player.x, player.y = target.x, target.y
    app.machine.draw_sprite(player.x, player.y, PLAYER_FRAME_B)

    app.update()
    assert out == [BELL]
    assert app.machine.sound_timer == 1


def overlapping_app(**config):
    app, term, out = make_app(**config)
    app.machine = Machine(rng=ScriptedRng([40, 20]))
    app.state = place(app.machine, (10, 10), (10, 10))
    return app, term, out


def test_collision_rings_bell_with_several_ticks_per_frame():
    app, _, out = overlapping_app(speed=2)

    app.update()

    assert app.state.target.position.as_tuple() == (40, 20)
    assert app.machine.sound_timer == 0
    assert out == [BELL]
    assert app.buzzer.playing


def test_collision_rings_bell_while_fast_forwarding():
    app, term, out = overlapping_app()
    term.keys = [Keystroke(' ')]
    app.handle_input()

    app.update()

    assert app.state.tick == 2
    assert app.state.target.position.as_tuple() == (40, 20)
    assert out == [BELL]

    # The tone is over by the next frame
    app.update()
    assert not app.buzzer.playing
    assert out == [BELL]


def test_quit_key_stops_app():
    app, term, _ = make_app()
    term.keys = [Keystroke('\x1b[21~', code=3, name='KEY_F10')]
    app.handle_input()
    assert not app.running


def test_render_writes_frame(capsys):
    app, _, _ = make_app()
    app.render()

    out = capsys.readouterr().out
    assert HALF_BLOCK in out
    hud = "".join(cell.char for cell in app.renderer.buffer.front[app.renderer.game_height])
    assert "CHASE8" in hud
