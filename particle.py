# particle.py
"""
Manages the state of all balls in the animation.

This module defines the ball density model and the ParticleSystem class,
which is responsible for initializing and storing ball data (position and
velocity) in NumPy arrays and for advancing it with reflective walls.
"""
import logging
import numpy as np
from constants import BALL_RADIUS, BALLS_PER_AREA, MIN_EXTRA_BALLS, MAX_BALL_SPEED

# --- Data Contracts ---
#
# get_num_balls(width: float, height: float) -> int:
#   - Outputs: round_half_up(width * height * BALLS_PER_AREA) + MIN_EXTRA_BALLS.
#   - Invariants: positive, non-decreasing in width * height.
#
# class ParticleSystem:
#   - __init__(self, count: int, width: float, height: float, rng: np.random.Generator,
#              radius: float = BALL_RADIUS, max_speed: float = MAX_BALL_SPEED):
#     - Side Effects: Creates fresh position and velocity arrays. Nothing is
#       shared with any previous ParticleSystem.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64,
#         each row inside [radius, dimension - radius].
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64,
#         each component inside [-max_speed, max_speed].
#
#   - update(self, width: float, height: float) -> None:
#     - Side Effects: Flips the velocity component of every axis whose
#       radius-inflated extent crosses a wall, then integrates positions.
#     - Invariants: Particle count remains constant. A ball may overshoot a
#       wall by at most one step before travelling back.


def get_num_balls(width: float, height: float) -> int:
    """
    Returns the number of balls for a viewport, proportional to its area.

    Rounds half up so that the count matches the reference calibration.
    """
    return int(np.floor(width * height * BALLS_PER_AREA + 0.5)) + MIN_EXTRA_BALLS


class ParticleSystem:
    """
    A container for all balls, managing their state via NumPy arrays.
    """
    def __init__(self, count: int, width: float, height: float, rng: np.random.Generator,
                 radius: float = BALL_RADIUS, max_speed: float = MAX_BALL_SPEED):
        """
        Initializes the particle system.

        Args:
            count (int): Number of balls to create.
            width (float): The width of the viewport.
            height (float): The height of the viewport.
            rng (np.random.Generator): Source of all randomness.
            radius (float): Radius shared by every ball.
            max_speed (float): Bound of each velocity component.
        """
        self.particle_count = count
        self.radius = float(radius)
        self.max_speed = float(max_speed)

        # Positions are inset by the radius so that every ball starts fully
        # inside the viewport. A viewport narrower than one ball collapses
        # the inset range to its center line.
        low = np.array([self.radius, self.radius])
        high = np.array([width - self.radius, height - self.radius])
        too_small = high < low
        if np.any(too_small):
            logging.warning(
                f"Viewport {width}x{height} is smaller than a ball diameter. "
                f"Balls will start on the center line."
            )
            center = np.array([width / 2, height / 2])
            low = np.where(too_small, center, low)
            high = np.where(too_small, center, high)

        self.positions = rng.uniform(low=low, high=high, size=(count, 2))
        self.velocities = rng.uniform(
            low=-self.max_speed,
            high=self.max_speed,
            size=(count, 2)
        )

        logging.info(f"ParticleSystem initialized with {count} balls for a {width}x{height} viewport.")
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}"
        )

    @classmethod
    def for_viewport(cls, width: float, height: float, rng: np.random.Generator, **kwargs) -> "ParticleSystem":
        """Creates a particle system sized by the ball density model."""
        return cls(get_num_balls(width, height), width, height, rng, **kwargs)

    @property
    def points(self) -> np.ndarray:
        """The (N, 2) array of ball centers."""
        return self.positions

    def update(self, width: float, height: float) -> None:
        """
        Advances every ball by one frame.

        Each axis is checked independently: if the ball's extent crosses
        either wall the velocity on that axis is negated before the position
        is integrated. This is a reflection, not a clamp.
        """
        bounds = np.array([width, height], dtype=np.float64)
        hit_wall = (self.positions + self.radius > bounds) | (self.positions - self.radius < 0)
        self.velocities[hit_wall] *= -1.0
        self.positions += self.velocities
