"""Tests for the immediate-mode renderer on an off-screen surface."""

import numpy as np
import pytest
import pygame

from constants import BACKGROUND_COLOR
from palette import default_palette
from particle import ParticleSystem
from visualization import Renderer, Visualizer
from voronoi import build_voronoi


class TestRenderer:

    def test_clear(self, surface):
        renderer = Renderer(surface)
        surface.fill((1, 2, 3))
        renderer.clear()
        assert tuple(surface.get_at((10, 10)))[:3] == BACKGROUND_COLOR

    def test_cells_filled_by_index(self, surface):
        renderer = Renderer(surface)
        palette = default_palette()
        diagram = build_voronoi([[50, 75], [150, 75]], (0, 0, 200, 150))
        renderer.clear()
        renderer.draw_cells(diagram, palette)
        assert tuple(surface.get_at((20, 75)))[:3] == tuple(palette[0])[:3]
        assert tuple(surface.get_at((180, 75)))[:3] == tuple(palette[1])[:3]

    def test_stroke_only_leaves_background(self, surface):
        renderer = Renderer(surface, fill_cells=False)
        diagram = build_voronoi([[50, 75], [150, 75]], (0, 0, 200, 150))
        renderer.clear()
        renderer.draw_cells(diagram, default_palette())
        assert tuple(surface.get_at((20, 75)))[:3] == BACKGROUND_COLOR
        # The shared edge at x = 100 is stroked with translucent black
        assert tuple(surface.get_at((100, 75)))[:3] != BACKGROUND_COLOR

    def test_empty_cells_are_skipped(self, surface):
        renderer = Renderer(surface)
        palette = default_palette()
        diagram = build_voronoi([[50, 75], [5000, 75]], (0, 0, 200, 150))
        renderer.clear()
        renderer.draw_cells(diagram, palette)
        # The in-bounds seed owns the whole surface, the outside seed draws nothing
        for x, y in [(20, 20), (100, 75), (180, 130)]:
            assert tuple(surface.get_at((x, y)))[:3] == tuple(palette[0])[:3]
        assert tuple(surface.get_at((199, 75)))[:3] != tuple(palette[1])[:3]

    def test_draw_balls(self, surface):
        renderer = Renderer(surface)
        particles = ParticleSystem(1, 200, 150, np.random.default_rng(0))
        particles.positions[0] = (60, 40)
        renderer.clear()
        renderer.draw_balls(particles)
        center = tuple(surface.get_at((60, 40)))[:3]
        assert all(0 < channel < 255 for channel in center)
        assert tuple(surface.get_at((100, 100)))[:3] == BACKGROUND_COLOR

    def test_resize_uses_factory(self, surface):
        made = []

        def factory(width, height):
            made.append((width, height))
            return pygame.Surface((width, height))

        renderer = Renderer(surface, surface_factory=factory)
        renderer.resize(320, 240)
        assert made == [(320, 240)]
        assert renderer.viewport_size == (320, 240)


@pytest.fixture
def display_driver(monkeypatch):
    """Yields a setter for SDL_VIDEODRIVER and shuts pygame down afterwards."""
    pygame.display.quit()

    def use(driver):
        monkeypatch.setenv("SDL_VIDEODRIVER", driver)

    yield use
    pygame.quit()


class TestVisualizer:

    def test_missing_display_raises_runtime_error(self, display_driver, caplog):
        display_driver("no_such_driver")
        with pytest.raises(RuntimeError, match="display surface"):
            Visualizer({})
        assert any(record.levelname == "CRITICAL" for record in caplog.records)

    def test_windowed_display_is_resizable_by_default(self, display_driver):
        display_driver("dummy")
        visualizer = Visualizer({'window_width': 120, 'window_height': 80})
        assert visualizer.display_flags & pygame.RESIZABLE
        assert visualizer.size == (120, 80)

    def test_fixed_size_window(self, display_driver):
        display_driver("dummy")
        visualizer = Visualizer({'window_width': 120, 'window_height': 80}, resizable=False)
        assert not visualizer.display_flags & pygame.RESIZABLE
        assert visualizer.size == (120, 80)
