# scene.py
"""
A small retained-mode vector scene.

The jitter variant describes each frame as a list of path and circle
elements instead of drawing immediately. The scene can then be rasterized
onto a pygame surface or serialized as an SVG document.
"""
import pygame
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

Color = Tuple[int, int, int]


def _svg_color(color: Optional[Color]) -> str:
    if color is None:
        return 'none'
    r, g, b = color[:3]
    return f'#{r:02x}{g:02x}{b:02x}'


@dataclass
class PathElement:
    """A closed polygon, the equivalent of an SVG `M...L...Z` path."""
    points: np.ndarray
    stroke: Optional[Color] = (0, 0, 0)
    fill: Optional[Color] = None
    stroke_width: int = 1

    @property
    def d(self) -> str:
        return 'M' + 'L'.join(f'{x:g},{y:g}' for x, y in self.points) + 'Z'


@dataclass
class CircleElement:
    cx: float
    cy: float
    r: float
    fill: Color = (255, 0, 0)


Element = Union[PathElement, CircleElement]


class VectorScene:
    """
    An ordered list of vector elements sized to a viewport.
    """
    def __init__(self, width: int, height: int, background: Color = (255, 255, 255)):
        self.width = width
        self.height = height
        self.background = background
        self.elements: List[Element] = []

    def __len__(self) -> int:
        return len(self.elements)

    def clear(self) -> None:
        self.elements.clear()

    def add_path(self, points: np.ndarray, stroke: Optional[Color] = (0, 0, 0),
                 fill: Optional[Color] = None) -> PathElement:
        element = PathElement(np.asarray(points, dtype=np.float64), stroke, fill)
        self.elements.append(element)
        return element

    def add_circle(self, cx: float, cy: float, r: float, fill: Color = (255, 0, 0)) -> CircleElement:
        element = CircleElement(float(cx), float(cy), float(r), fill)
        self.elements.append(element)
        return element

    def render(self, surface: pygame.Surface) -> None:
        """Rasterizes every element onto `surface`, in insertion order."""
        surface.fill(self.background)
        for element in self.elements:
            if isinstance(element, CircleElement):
                pygame.draw.circle(surface, element.fill, (element.cx, element.cy), element.r)
                continue
            if len(element.points) < 3:
                continue
            outline = [tuple(p) for p in element.points]
            if element.fill is not None:
                pygame.draw.polygon(surface, element.fill, outline)
            if element.stroke is not None:
                pygame.draw.polygon(surface, element.stroke, outline, element.stroke_width)

    def to_svg(self) -> str:
        """Serializes the scene as a standalone SVG document."""
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}">',
            f'<rect width="100%" height="100%" fill="{_svg_color(self.background)}"/>',
        ]
        for element in self.elements:
            if isinstance(element, CircleElement):
                lines.append(
                    f'<circle cx="{element.cx:g}" cy="{element.cy:g}" r="{element.r:g}" '
                    f'fill="{_svg_color(element.fill)}"/>'
                )
            elif len(element.points) >= 3:
                lines.append(
                    f'<path d="{element.d}" stroke="{_svg_color(element.stroke)}" '
                    f'stroke-width="{element.stroke_width}" fill="{_svg_color(element.fill)}"/>'
                )
        lines.append('</svg>')
        return '\n'.join(lines)
