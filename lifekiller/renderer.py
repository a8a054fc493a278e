"""A window showing the board, where clicking toggles tiles."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pygame

from .board import Position, TileState
from .frame import RenderFrame
from .sleeper import Sleeper
from .ticker import State

BACKGROUND = (10, 10, 10, 255)
ALIVE_COLOR = (255, 255, 255, 255)
DEAD_COLOR = (0, 0, 0, 255)
HALF_TILE_MARGIN = 1


@dataclass
class RendererState:
    """What the renderer remembers between frames and input events."""

    global_state: State
    mouse_tile_pos: Position | None = None
    mouse_pressed: bool = False
    width: int = 0
    height: int = 0


@dataclass
class RendererWindowConfig:
    """Window settings and the callbacks that draw frames and receive events."""

    title: str
    width: int
    height: int
    target_fps: int
    draw_callback: Callable[[RenderFrame], None]
    event_callback: Callable[[Any], None] | None = None


class Renderer:
    """Runs a pygame window that redraws at the target frame rate."""

    def __init__(self, config: RendererWindowConfig) -> None:
        self.config = config
        self._sleeper = Sleeper((1_000_000 // config.target_fps) / 1_000_000)

    def run(self) -> None:
        """Show the window until it is closed."""
        config = self.config
        pygame.init()
        try:
            pygame.display.set_mode((config.width, config.height), pygame.RESIZABLE)
            pygame.display.set_caption(config.title)
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    if config.event_callback is not None:
                        config.event_callback(event)
                if not running:
                    break

                surface = pygame.display.get_surface()
                width, height = surface.get_size()
                if width and height:
                    frame = RenderFrame(width, height)
                    config.draw_callback(frame)
                    image = pygame.image.frombuffer(bytes(frame.buffer), (width, height), "RGBA")
                    surface.blit(image, (0, 0))
                    pygame.display.flip()
                self._sleeper.sleep()
        finally:
            pygame.quit()


def draw(state: RendererState, frame: RenderFrame) -> None:
    """Paint the board onto `frame`, one square per tile."""
    state.width = frame.width
    state.height = frame.height
    frame.fill(BACKGROUND)

    global_state = state.global_state
    with global_state.lock:
        board = global_state.game.board
        if board.width == 0 or board.height == 0:
            return
        tile_width = frame.width // board.width
        tile_height = frame.height // board.height
        inner_width = max(0, tile_width - HALF_TILE_MARGIN * 2)
        inner_height = max(0, tile_height - HALF_TILE_MARGIN * 2)

        for pos, tile in board.enumerate_tiles():
            color = ALIVE_COLOR if tile is TileState.ALIVE else DEAD_COLOR
            frame.draw_square(
                pos.x * tile_width + HALF_TILE_MARGIN,
                pos.y * tile_height + HALF_TILE_MARGIN,
                inner_width,
                inner_height,
                color,
            )


def _click(state: RendererState) -> Position | None:
    pos = state.mouse_tile_pos
    if pos is None:
        return None
    global_state = state.global_state
    with global_state.lock:
        board = global_state.game.board
        tile = board.get(pos)
        if tile is None:
            return None
        board[pos] = TileState.DEAD if tile is TileState.ALIVE else TileState.ALIVE
    return pos


def on_mouse_button(state: RendererState, pressed: bool) -> Position | None:
    """Handle the left button; a press toggles the tile under the cursor, which is returned."""
    state.mouse_pressed = pressed
    return _click(state) if pressed else None


def on_cursor_moved(state: RendererState, x: float, y: float) -> Position | None:
    """Track the tile under the cursor; dragging onto a new tile toggles it, which is returned."""
    if state.width == 0 or state.height == 0:
        return None
    mouse_x, mouse_y = max(0, int(x)), max(0, int(y))
    global_state = state.global_state
    with global_state.lock:
        board = global_state.game.board
        tile_pos = Position(
            mouse_x * board.width // state.width,
            mouse_y * board.height // state.height,
        )

    previous = state.mouse_tile_pos
    state.mouse_tile_pos = tile_pos
    if state.mouse_pressed and previous != tile_pos:
        return _click(state)
    return None


def run(state: State) -> None:
    """Open the board window and block until it is closed."""
    renderer_state = RendererState(state)

    def on_event(event: Any) -> None:
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if event.button == 1:
                on_mouse_button(renderer_state, event.type == pygame.MOUSEBUTTONDOWN)
        elif event.type == pygame.MOUSEMOTION:
            on_cursor_moved(renderer_state, *event.pos)

    Renderer(
        RendererWindowConfig(
            title="ml-life-killer",
            width=480,
            height=480,
            target_fps=30,
            draw_callback=lambda frame: draw(renderer_state, frame),
            event_callback=on_event,
        )
    ).run()