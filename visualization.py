# visualization.py
"""
Handles drawing the balls and Voronoi cells using Pygame.
"""
import logging
import pygame
from typing import Callable, List, Optional, Tuple
from particle import ParticleSystem
from palette import color_for_cell
from voronoi import VoronoiDiagram
from constants import (
    BACKGROUND_COLOR, BALL_COLOR, CELL_STROKE_COLOR, CELL_STROKE_WIDTH,
    DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, FPS, FULLSCREEN
)


# --- Data Contracts ---
#
# class Renderer:
#   - __init__(self, surface: pygame.Surface, fill_cells: bool = True,
#              surface_factory: Optional[Callable] = None):
#     - Inputs:
#       - surface: The drawing surface, sized to the viewport.
#       - fill_cells: Whether cells are filled from the palette or only stroked.
#       - surface_factory: Called with (width, height) on resize to obtain the
#         new drawing surface. Defaults to an off-screen pygame.Surface.
#
#   - clear(self) -> None: fills the surface with the background color.
#   - draw_balls(self, particles: ParticleSystem) -> None
#   - draw_cells(self, diagram: VoronoiDiagram, palette: List[pygame.Color]) -> None
#     - Side Effects: Cell i is filled with palette[i % len(palette)].
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None, caption: str = ..., resizable: bool = True):
#     - Side Effects: Initializes Pygame and creates the display, resizable
#       unless `resizable` is False or the display is fullscreen.
#     - Raises: RuntimeError (logged at CRITICAL) if pygame cannot create a
#       display surface.
#   - poll_events(self) -> list: drains the pygame event queue.
#   - present(self) -> None: flips the display.


class Renderer:
    """
    Immediate-mode drawing of balls and cells onto one surface.
    """
    def __init__(self, surface: pygame.Surface, fill_cells: bool = True,
                 surface_factory: Optional[Callable[[int, int], pygame.Surface]] = None):
        self.surface = surface
        self.fill_cells = fill_cells
        self._surface_factory = surface_factory or (lambda w, h: pygame.Surface((w, h)))
        self._ball_sprite: Optional[pygame.Surface] = None
        self._ball_sprite_radius = None
        self._stroke_layer = self._create_stroke_layer()

    @property
    def viewport_size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def _create_stroke_layer(self) -> pygame.Surface:
        # Semi-transparent outlines are drawn onto one alpha layer per frame
        # and blitted once, since pygame.draw does not blend on opaque surfaces.
        return pygame.Surface(self.viewport_size, pygame.SRCALPHA)

    def _get_ball_sprite(self, radius: float) -> pygame.Surface:
        """
        Pre-renders the semi-transparent ball so each frame only blits it.
        """
        if self._ball_sprite is None or self._ball_sprite_radius != radius:
            size = int(radius * 2) + 1
            sprite = pygame.Surface((size, size), pygame.SRCALPHA)
            pygame.draw.circle(sprite, BALL_COLOR, (size // 2, size // 2), int(radius))
            self._ball_sprite = sprite
            self._ball_sprite_radius = radius
            logging.debug(f"Pre-rendered ball sprite of radius {radius}.")
        return self._ball_sprite

    def resize(self, width: int, height: int) -> None:
        self.surface = self._surface_factory(width, height)
        if self.surface is None:
            raise RuntimeError("No drawing surface available after resize.")
        self._stroke_layer = self._create_stroke_layer()

    def clear(self) -> None:
        self.surface.fill(BACKGROUND_COLOR)

    def draw_balls(self, particles: ParticleSystem) -> None:
        sprite = self._get_ball_sprite(particles.radius)
        offset = sprite.get_width() // 2
        self.surface.blits(
            [(sprite, (int(x) - offset, int(y) - offset)) for x, y in particles.positions],
            doreturn=False
        )

    def draw_cells(self, diagram: VoronoiDiagram, palette: List[pygame.Color]) -> None:
        self._stroke_layer.fill((0, 0, 0, 0))
        for i in range(len(diagram)):
            polygon = diagram.cell_polygon(i)
            if len(polygon) < 3:
                continue
            outline = [(float(x), float(y)) for x, y in polygon]
            if self.fill_cells:
                pygame.draw.polygon(self.surface, color_for_cell(palette, i), outline)
            pygame.draw.polygon(self._stroke_layer, CELL_STROKE_COLOR, outline, CELL_STROKE_WIDTH)
        self.surface.blit(self._stroke_layer, (0, 0))


class Visualizer:
    """
    Owns the Pygame window and hands out its renderer.
    """
    def __init__(self, vis_params: Optional[dict] = None, caption: str = "Voronoi Balls",
                 resizable: bool = True):
        """
        Initializes Pygame and the display window.

        Args:
            vis_params (Optional[dict]): Visualization parameters from config.
            caption (str): Window title.
            resizable (bool): Whether the user may resize a windowed display.

        Raises:
            RuntimeError: If no display surface can be created.
        """
        vis_params = vis_params if vis_params is not None else {}
        pygame.init()

        self.fps = vis_params.get('fps', FPS)
        fill_cells = vis_params.get('fill_cells', True)

        try:
            if vis_params.get('fullscreen', FULLSCREEN):
                display_info = pygame.display.Info()
                width, height = display_info.current_w, display_info.current_h
                self.display_flags = pygame.FULLSCREEN
            else:
                width = vis_params.get('window_width', DEFAULT_WINDOW_WIDTH)
                height = vis_params.get('window_height', DEFAULT_WINDOW_HEIGHT)
                self.display_flags = pygame.RESIZABLE if resizable else 0
            screen = pygame.display.set_mode((width, height), self.display_flags)
        except pygame.error as e:
            msg = f"Could not obtain a display surface: {e}. Check the video driver setup."
            logging.critical(msg)
            raise RuntimeError(msg) from e

        pygame.display.set_caption(caption)
        # With a resizable window pygame resizes the display surface itself,
        # the renderer only has to pick up the new one.
        self.renderer = Renderer(
            screen,
            fill_cells=fill_cells,
            surface_factory=lambda w, h: pygame.display.get_surface()
        )

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    @property
    def size(self) -> Tuple[int, int]:
        return self.renderer.viewport_size

    def poll_events(self) -> list:
        return pygame.event.get()

    def present(self) -> None:
        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
