# palette.py
"""
Color palettes for the Voronoi cells.

Cells are colored by index modulo the palette length, so a palette is just
an ordered list of pygame.Color values.
"""
import logging
import numpy as np
import pygame
from typing import List
from constants import (
    DEFAULT_COLOR_PALETTE, PALETTE_SIZE, PALETTE_LIGHTNESS_MIN, PALETTE_LIGHTNESS_MAX
)


def default_palette() -> List[pygame.Color]:
    """Returns a fresh copy of the fixed ten-color default palette."""
    return [pygame.Color(hex_color) for hex_color in DEFAULT_COLOR_PALETTE]


def random_palette(rng: np.random.Generator, size: int = PALETTE_SIZE) -> List[pygame.Color]:
    """
    Generates a palette of random HSL colors.

    Hue covers the full circle and saturation the full range, while lightness
    stays inside [PALETTE_LIGHTNESS_MIN, PALETTE_LIGHTNESS_MAX].
    """
    hues = rng.uniform(0.0, 360.0, size=size)
    saturations = rng.uniform(0.0, 100.0, size=size)
    lightnesses = rng.uniform(PALETTE_LIGHTNESS_MIN, PALETTE_LIGHTNESS_MAX, size=size)

    palette = []
    for h, s, l in zip(hues, saturations, lightnesses):
        color = pygame.Color(0, 0, 0)
        color.hsla = (float(h), float(s), float(l), 100.0)
        palette.append(color)

    logging.debug(f"Generated random palette: {[tuple(c) for c in palette]}")
    return palette


def color_for_cell(palette: List[pygame.Color], index: int) -> pygame.Color:
    return palette[index % len(palette)]
