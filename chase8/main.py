#!/usr/bin/env python3
"""
CHASE8 - Terminal Chase Game
=============================
Chase the target around a 64x32 one-bit screen. Touch it and it jumps
somewhere else with a beep.

Controls:
    WASD    - Move
    ESC     - Pause (ENTER while paused restarts)
    M       - Mute
    [ ]     - Previous/next palette
    0 - +   - Reset/decrease/increase speed
    SPACE   - Fast forward
    F10     - Quit
"""

from typing import List, Optional
import logging
import sys
import time

from blessed import Terminal

from .buzzer import Buzzer
from .cli import parse_args, config_from_args, setup_logging
from .config import Config, FRAME_TIME, DEFAULT_SPEED, SPEED_MSG_FRAMES, VERSION
from .engine import GameRenderer, GRAY_DARK, GRAY_MED, WHITE, HUD_ROWS
from .machine import Machine, DISPLAY_WIDTH, DISPLAY_HEIGHT
from .player import InputHandler
from .systems import new_game, run_tick


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_WIDTH = DISPLAY_WIDTH + 2
MIN_HEIGHT = DISPLAY_HEIGHT // 2 + 2 + HUD_ROWS


# =============================================================================
# UI RENDERING
# =============================================================================

def render_ui(game: 'App'):
    """Render the HUD in the bottom 3 rows."""
    renderer = game.renderer
    config = game.config
    ui_y = renderer.game_height
    width = renderer.width

    sep = '=' * width
    renderer.put_string(0, ui_y, sep, GRAY_DARK)
    renderer.put_string(2, ui_y, ' CHASE8 ', config.fg)

    state = game.state
    status_text = f' TICK:{state.tick} '
    renderer.put_string(width - len(status_text) - 1, ui_y, status_text, GRAY_MED)

    # Row 1: positions + settings
    row1_y = ui_y + 1
    px, py = state.player.position.as_tuple()
    tx, ty = state.target.position.as_tuple()
    renderer.put_string(2, row1_y, f'YOU:{px:3d},{py:3d}  TARGET:{tx:3d},{ty:3d}', GRAY_MED)

    settings = (
        f'SPEED:{config.speed}  '
        f'PALETTE:{config.palette_index + 1}/{len(config.palettes)}  '
        f'SOUND:{"OFF" if game.buzzer.muted else "ON"}'
    )
    if renderer.show_fps:
        settings += f'  FPS:{renderer.current_fps:4.1f}'
    renderer.put_string(width - len(settings) - 1, row1_y, settings, GRAY_MED)

    # Row 2: overlays
    row2_y = ui_y + 2
    if game.is_paused:
        renderer.put_string(2, row2_y, 'PAUSED  ESC resume  ENTER restart', WHITE)
    elif game.speed_msg_timer > 0:
        renderer.put_string(2, row2_y, f'speed {config.speed}', WHITE)
    else:
        renderer.put_string(2, row2_y, 'WASD move  ESC pause  M mute  [ ] palette  F10 quit',
                            GRAY_DARK)

    if game.input_handler.fast_forward and not game.is_paused:
        renderer.put_string(width - 4, row2_y, '>>', WHITE)


def render_field_border(game: 'App'):
    """Frame the machine display."""
    display = game.machine.display
    ox, oy = game.renderer.field_origin(display)
    game.renderer.draw_box(ox - 1, oy - 1, display.width + 2,
                           (display.height + 1) // 2 + 2, GRAY_DARK, '#')


# =============================================================================
# GAME STATE
# =============================================================================

class App:
    """Terminal front end. Owns the clock and drives the game ticks."""

    def __init__(self, term: Terminal, config: Config, buzzer: Optional[Buzzer] = None):
        self.term = term
        self.config = config
        self.renderer = GameRenderer(term, show_fps=config.show_fps)
        self.input_handler = InputHandler()
        self.buzzer = buzzer if buzzer is not None else Buzzer()
        self.buzzer.set_muted(config.muted)

        self.machine = Machine(seed=config.seed)
        self.state = new_game(self.machine, config.start)

        self.running = True
        self.is_paused = False
        self.speed_msg_timer = 0

    def restart(self):
        """Start a fresh game on the same machine."""
        self.machine.sound_timer = 0
        self.state = new_game(self.machine, self.config.start)
        self.is_paused = False
        logger.info('Game restarted')

    def set_speed(self, speed: int):
        self.config.set_speed(speed)
        self.speed_msg_timer = SPEED_MSG_FRAMES
        logger.info('Speed set to %d', self.config.speed)

    def update(self):
        """Advance one frame: run this frame's ticks unless paused."""
        self.input_handler.apply(self.machine)

        if self.is_paused:
            self.buzzer.set_playing(False)
        else:
            ticks = self.config.speed
            if self.input_handler.fast_forward:
                ticks *= 2
            # A short tone can start and run out within one frame
            tone = False
            for _ in range(ticks):
                run_tick(self.state, self.machine)
                tone = tone or self.machine.tone_active
                self.machine.step_timers()
            self.buzzer.set_playing(tone)

        self.input_handler.update()
        if self.speed_msg_timer > 0:
            self.speed_msg_timer -= 1

    def render(self):
        """Render one frame."""
        if (self.term.width, self.term.height) != (self.renderer.width, self.renderer.height):
            self.renderer.resize(self.term.width, self.term.height)
            print(self.term.home + self.term.clear, end='', flush=True)

        self.renderer.begin_frame()
        render_field_border(self)
        self.renderer.render_display(self.machine.display, self.config.fg, self.config.bg)
        render_ui(self)
        output = self.renderer.end_frame()
        if output:
            print(output, end='', flush=True)

    def handle_input(self):
        """Drain all pending input from the terminal."""
        key = self.term.inkey(timeout=0)
        while key:
            self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)
        self.apply_actions()

    def apply_actions(self):
        """Act on the host controls pressed since the last frame."""
        handler = self.input_handler

        if handler.consume_quit():
            self.running = False

        if handler.consume_pause():
            self.is_paused = not self.is_paused
            logger.info('Paused' if self.is_paused else 'Resumed')

        if handler.consume_restart() and self.is_paused:
            handler.release_all()
            self.restart()

        if handler.consume_mute():
            self.buzzer.toggle_mute()

        step = handler.consume_palette_step()
        if step:
            for _ in range(abs(step)):
                if step > 0:
                    self.config.next_palette()
                else:
                    self.config.prev_palette()
            logger.info('Palette %d', self.config.palette_index)

        change = handler.consume_speed_change()
        if change == 0:
            self.set_speed(DEFAULT_SPEED)
        elif change is not None:
            self.set_speed(self.config.speed + change)


# =============================================================================
# MAIN LOOP
# =============================================================================

def run(term: Terminal, config: Config):
    """Run the 60 FPS frame loop until the player quits."""
    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        game = App(term, config)

        last_time = time.perf_counter()
        accumulator = 0.0
        fps_timer = 0.0
        fps_frame_count = 0

        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)

        try:
            while game.running:
                now = time.perf_counter()
                delta = now - last_time
                last_time = now

                # Clamp delta to prevent spiral of death
                delta = min(delta, FRAME_TIME * 5)

                accumulator += delta
                fps_timer += delta

                game.handle_input()

                # Fixed-timestep updates
                frames = 0
                while accumulator >= FRAME_TIME and frames < 4:
                    game.update()
                    accumulator -= FRAME_TIME
                    frames += 1
                    fps_frame_count += 1

                game.render()

                if fps_timer >= 0.5:
                    game.renderer.current_fps = fps_frame_count / fps_timer
                    fps_frame_count = 0
                    fps_timer = 0.0

                elapsed = time.perf_counter() - now
                sleep_time = FRAME_TIME - elapsed
                if sleep_time > 0.001:
                    time.sleep(sleep_time * 0.9)
        except KeyboardInterrupt:
            logger.info('Interrupted')

        # Restore terminal
        print(term.normal, end='', flush=True)


def main(argv: Optional[List[str]] = None):
    """Entry point. Parses options, checks the terminal and runs the game."""
    args = parse_args(argv)
    setup_logging(args.log_file, args.log_level)
    config = config_from_args(args)

    term = Terminal()
    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    logger.info('CHASE8 %s starting: speed=%d palettes=%d muted=%s seed=%s',
                VERSION, config.speed, len(config.palettes), config.muted, config.seed)
    run(term, config)


if __name__ == '__main__':
    main()
