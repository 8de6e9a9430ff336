"""Tests for the ball density model and reflective ball physics."""

import math

import numpy as np
import pytest

from constants import BALL_RADIUS, BALLS_PER_AREA, MIN_EXTRA_BALLS
from particle import ParticleSystem, get_num_balls


class TestGetNumBalls:
    """Test the area-proportional ball count."""

    def test_reference_viewport(self):
        """892x1500 yields the 100 reference balls plus the fixed five."""
        assert get_num_balls(892, 1500) == 105

    @pytest.mark.parametrize("width,height", [(1, 1), (10, 10), (320, 240), (800, 600), (1920, 1080)])
    def test_matches_formula(self, width, height):
        expected = math.floor(width * height * BALLS_PER_AREA + 0.5) + MIN_EXTRA_BALLS
        assert get_num_balls(width, height) == expected

    def test_positive_on_tiny_viewport(self):
        assert get_num_balls(1, 1) == MIN_EXTRA_BALLS

    def test_monotonic_in_area(self):
        """Count never decreases as the viewport grows."""
        counts = [get_num_balls(side, side) for side in range(1, 2000, 37)]
        assert all(a <= b for a, b in zip(counts, counts[1:]))

    def test_returns_int(self):
        assert isinstance(get_num_balls(640.5, 480.25), int)


class TestParticleSystemInit:
    """Test particle initialization."""

    def test_shapes(self, rng):
        particles = ParticleSystem(30, 400, 300, rng)
        assert particles.positions.shape == (30, 2)
        assert particles.velocities.shape == (30, 2)
        assert particles.particle_count == 30

    def test_positions_inset_by_radius(self, rng):
        particles = ParticleSystem(500, 400, 300, rng)
        r = BALL_RADIUS
        assert np.all(particles.positions[:, 0] >= r)
        assert np.all(particles.positions[:, 0] <= 400 - r)
        assert np.all(particles.positions[:, 1] >= r)
        assert np.all(particles.positions[:, 1] <= 300 - r)

    def test_velocity_range(self, rng):
        particles = ParticleSystem(500, 400, 300, rng, max_speed=1.0)
        assert np.all(np.abs(particles.velocities) <= 1.0)

    def test_for_viewport_uses_density_model(self, rng):
        particles = ParticleSystem.for_viewport(892, 1500, rng)
        assert particles.particle_count == 105

    def test_viewport_smaller_than_ball(self, rng):
        """A viewport narrower than a ball does not raise."""
        particles = ParticleSystem(3, 4, 300, rng)
        assert np.allclose(particles.positions[:, 0], 2.0)

    def test_same_seed_same_state(self):
        a = ParticleSystem(10, 400, 300, np.random.default_rng(7))
        b = ParticleSystem(10, 400, 300, np.random.default_rng(7))
        np.testing.assert_array_equal(a.positions, b.positions)
        np.testing.assert_array_equal(a.velocities, b.velocities)


class TestParticleUpdate:
    """Test the reflective boundary update."""

    def _single(self, rng, x, y, dx, dy):
        particles = ParticleSystem(1, 100, 100, rng)
        particles.positions[0] = (x, y)
        particles.velocities[0] = (dx, dy)
        return particles

    def test_moves_by_velocity(self, rng):
        particles = self._single(rng, 50, 50, 0.5, -0.25)
        particles.update(100, 100)
        np.testing.assert_allclose(particles.positions[0], (50.5, 49.75))

    def test_reflects_off_right_wall(self, rng):
        """x + radius > width flips dx before integrating."""
        particles = self._single(rng, 96, 50, 0.8, 0.1)
        particles.update(100, 100)
        assert particles.velocities[0, 0] == pytest.approx(-0.8)
        assert particles.velocities[0, 1] == pytest.approx(0.1)
        assert particles.positions[0, 0] == pytest.approx(95.2)

    def test_reflects_off_top_wall(self, rng):
        particles = self._single(rng, 50, 4, 0.0, -0.5)
        particles.update(100, 100)
        assert particles.velocities[0, 1] == pytest.approx(0.5)

    def test_axes_are_independent(self, rng):
        particles = self._single(rng, 2, 50, -1.0, 1.0)
        particles.update(100, 100)
        assert particles.velocities[0, 0] == pytest.approx(1.0)
        assert particles.velocities[0, 1] == pytest.approx(1.0)

    def test_reflection_is_not_a_clamp(self, rng):
        """A ball far outside still only has its velocity flipped once per step."""
        particles = self._single(rng, 150, 50, 1.0, 0.0)
        particles.update(100, 100)
        assert particles.positions[0, 0] == pytest.approx(149.0)

    def test_stays_near_bounds_over_many_frames(self, rng):
        """Balls never drift further than one step past a wall."""
        width, height = 320, 240
        particles = ParticleSystem(200, width, height, rng)
        eps = particles.max_speed
        for _ in range(2000):
            particles.update(width, height)
            assert np.all(particles.positions[:, 0] >= -eps)
            assert np.all(particles.positions[:, 0] <= width + eps)
            assert np.all(particles.positions[:, 1] >= -eps)
            assert np.all(particles.positions[:, 1] <= height + eps)
