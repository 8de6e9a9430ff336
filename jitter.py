# jitter.py
"""
The jitter variant: Voronoi cells over randomly drifting points.

A fixed set of points is nudged by bounded uniform noise on every timer
tick and wrapped around the viewport edges (toroidal topology). After each
nudge the vector scene is rebuilt from scratch. The timer stops once the
elapsed time exceeds interval * point count.
"""
import logging
import numpy as np
from typing import Callable, Optional
from voronoi import build_voronoi
from scene import VectorScene
from scheduler import IntervalTimer
from constants import (
    JITTER_AMPLITUDE, JITTER_POINT_RADIUS, JITTER_POINT_COLOR, JITTER_STROKE_COLOR
)

# --- Data Contracts ---
#
# wrap_points(points: (N, 2), offsets: (N, 2), width, height) -> (N, 2):
#   - Outputs: (points + offsets) mod (width, height), every coordinate in
#     [0, dimension).
#
# class JitterField:
#   - perturb(self) -> None:
#     - Side Effects: Adds independent U(-amplitude, amplitude) noise to every
#       coordinate, then wraps. The point count never changes.
#
# class JitterAnimation:
#   - start(self, now_ms: float) -> None: draws the initial scene, starts the timer.
#   - stop(self) -> None: stops the timer.
#   - duration_budget_ms: interval_ms * num_points.


def generate_random_points(num_points: int, width: float, height: float,
                           rng: np.random.Generator) -> np.ndarray:
    return rng.uniform(low=[0, 0], high=[width, height], size=(num_points, 2))


def wrap_points(points: np.ndarray, offsets: np.ndarray, width: float, height: float) -> np.ndarray:
    """
    Moves points by offsets and wraps them into [0, width) x [0, height).
    """
    dims = np.array([width, height], dtype=np.float64)
    wrapped = np.mod(np.asarray(points, dtype=np.float64) + offsets, dims)
    # np.mod of a tiny negative number can round up to exactly the modulus
    wrapped = np.where(wrapped >= dims, wrapped - dims, wrapped)
    return wrapped


class JitterField:
    """
    A fixed-size point set drifting under bounded random noise.
    """
    def __init__(self, num_points: int, width: float, height: float,
                 rng: np.random.Generator, amplitude: float = JITTER_AMPLITUDE):
        self.width = width
        self.height = height
        self.rng = rng
        self.amplitude = float(amplitude)
        self.points = generate_random_points(num_points, width, height, rng)
        logging.info(f"JitterField initialized with {num_points} points, amplitude {self.amplitude}.")

    @property
    def num_points(self) -> int:
        return self.points.shape[0]

    def perturb(self) -> None:
        offsets = self.rng.uniform(-self.amplitude, self.amplitude, size=self.points.shape)
        self.points = wrap_points(self.points, offsets, self.width, self.height)


class JitterAnimation:
    """
    Rebuilds the Voronoi scene of a JitterField on every timer tick.
    """
    def __init__(self, field: JitterField, scene: VectorScene, timer: IntervalTimer,
                 present: Optional[Callable[[VectorScene], None]] = None):
        self.field = field
        self.scene = scene
        self.timer = timer
        self.present = present
        self.duration_budget_ms = timer.interval_ms * field.num_points

    @property
    def active(self) -> bool:
        return self.timer.active

    def build_scene(self) -> None:
        """Replaces the scene contents with the current cells and points."""
        self.scene.clear()
        diagram = build_voronoi(self.field.points, (0, 0, self.field.width, self.field.height))
        for polygon in diagram.cell_polygons():
            self.scene.add_path(polygon, stroke=JITTER_STROKE_COLOR, fill=None)
        for x, y in self.field.points:
            self.scene.add_circle(x, y, JITTER_POINT_RADIUS, fill=JITTER_POINT_COLOR)
        if self.present is not None:
            self.present(self.scene)

    def start(self, now_ms: float) -> None:
        self.build_scene()
        self.timer.start(self._on_tick, now_ms)
        logging.info(
            f"Jitter animation started: {self.field.num_points} points, "
            f"budget {self.duration_budget_ms:.0f} ms."
        )

    def stop(self) -> None:
        self.timer.stop()

    def _on_tick(self, elapsed_ms: float) -> None:
        self.field.perturb()
        self.build_scene()
        if elapsed_ms > self.duration_budget_ms:
            self.timer.stop()
            logging.info(f"Jitter animation finished after {elapsed_ms:.0f} ms ({self.timer.ticks} ticks).")
