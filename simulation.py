# simulation.py
"""
Holds the mutable state of the Voronoi balls animation.

This module defines the Simulation class, the single owner of the balls,
the color palette and the draw-order flag. Everything that changes between
frames goes through its methods, so the frame loop and the input handlers
share one explicit object instead of captured variables.
"""
import logging
import numpy as np
from typing import Any, Dict, Optional
from particle import ParticleSystem
from palette import default_palette, random_palette
from voronoi import VoronoiDiagram, build_voronoi
from constants import BALL_RADIUS, MAX_BALL_SPEED

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, width: int, height: int, params: Optional[Dict[str, Any]] = None):
#     - Inputs:
#       - width, height: the viewport size.
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": Optional[int]
#         - "ball_radius": float
#         - "max_speed": float
#     - Side Effects: Creates the RNG and the initial ParticleSystem. The
#       palette starts as the fixed default palette.
#
#   - step(self) -> None: advances every ball by one frame.
#   - tessellate(self) -> VoronoiDiagram: builds the cells over the current
#     ball positions, clipped to [0, 0, width, height].
#   - resize(self, width, height) -> None: replaces the ParticleSystem with a
#     new one sized for the new viewport. Old ball state is discarded.
#   - toggle_draw_order(self) -> bool: flips balls_on_top, returns the new value.
#   - regenerate_palette(self) -> None: replaces color_palette with random colors.


class Simulation:
    """
    The explicit state of the animation, owned by the frame loop.
    """
    def __init__(self, width: int, height: int, params: Optional[Dict[str, Any]] = None):
        """
        Initializes the simulation state.

        Args:
            width (int): The width of the viewport.
            height (int): The height of the viewport.
            params (Optional[Dict[str, Any]]): Simulation parameters from config.
        """
        params = params if params is not None else {}
        self.seed = params.get('seed')
        self.ball_radius = float(params.get('ball_radius', BALL_RADIUS))
        self.max_speed = float(params.get('max_speed', MAX_BALL_SPEED))

        # All randomness in the simulation comes from this generator.
        self.rng = np.random.default_rng(self.seed)

        self.width = width
        self.height = height
        self.balls_on_top = True
        self.color_palette = default_palette()
        self.frame = 0
        self.particles = self._create_particles()

        logging.info(f"Simulation initialized for a {width}x{height} viewport (seed={self.seed}).")

    def _create_particles(self) -> ParticleSystem:
        return ParticleSystem.for_viewport(
            self.width, self.height, self.rng,
            radius=self.ball_radius, max_speed=self.max_speed
        )

    def step(self) -> None:
        """
        Executes one frame of ball motion.
        """
        self.particles.update(self.width, self.height)
        self.frame += 1

    def tessellate(self) -> VoronoiDiagram:
        return build_voronoi(self.particles.points, (0, 0, self.width, self.height))

    def resize(self, width: int, height: int) -> None:
        """
        Adopts a new viewport size and reinitializes every ball.

        The ball count is recomputed from the new dimensions rather than
        scaled from the old count.
        """
        old_count = self.particles.particle_count
        self.width = width
        self.height = height
        self.particles = self._create_particles()
        logging.info(
            f"Viewport resized to {width}x{height}. "
            f"Balls reinitialized: {old_count} -> {self.particles.particle_count}."
        )

    def toggle_draw_order(self) -> bool:
        self.balls_on_top = not self.balls_on_top
        logging.info(f"Draw order toggled. Balls on top: {self.balls_on_top}.")
        return self.balls_on_top

    def regenerate_palette(self) -> None:
        """
        Replaces the current color palette with freshly randomized colors.
        """
        self.color_palette = random_palette(self.rng, len(self.color_palette))
        logging.info("Color palette regenerated by user.")
