"""Tests for the jitter variant."""

import numpy as np
import pytest

from jitter import JitterAnimation, JitterField, generate_random_points, wrap_points
from scene import CircleElement, PathElement, VectorScene
from scheduler import IntervalTimer


class TestWrapPoints:
    """Test toroidal wraparound."""

    def test_wraps_past_right_edge(self):
        width, height = 200, 100
        wrapped = wrap_points(np.array([[width - 1, 10.0]]), np.array([[5.0, 0.0]]), width, height)
        np.testing.assert_allclose(wrapped, [[(width - 1 + 5) % width, 10.0]])
        assert wrapped[0, 0] == pytest.approx(4.0)

    def test_wraps_past_left_and_top_edges(self):
        wrapped = wrap_points(np.array([[2.0, 1.0]]), np.array([[-5.0, -3.0]]), 200, 100)
        np.testing.assert_allclose(wrapped, [[197.0, 98.0]])

    def test_interior_points_unchanged_apart_from_offset(self):
        wrapped = wrap_points(np.array([[50.0, 50.0]]), np.array([[3.0, -4.0]]), 200, 100)
        np.testing.assert_allclose(wrapped, [[53.0, 46.0]])

    def test_tiny_negative_stays_below_dimension(self):
        wrapped = wrap_points(np.array([[0.0, 0.0]]), np.array([[-1e-18, -1e-18]]), 200, 100)
        assert np.all(wrapped >= 0)
        assert wrapped[0, 0] < 200 and wrapped[0, 1] < 100


class TestJitterField:

    def test_generate_random_points_in_bounds(self, rng):
        points = generate_random_points(100, 200, 100, rng)
        assert points.shape == (100, 2)
        assert np.all(points >= 0)
        assert np.all(points < [200, 100])

    def test_perturb_keeps_count_and_bounds(self, rng):
        field = JitterField(40, 200, 100, rng, amplitude=10)
        for _ in range(50):
            field.perturb()
        assert field.num_points == 40
        assert np.all(field.points >= 0)
        assert np.all(field.points < [200, 100])

    def test_perturb_is_bounded(self, rng):
        field = JitterField(40, 200, 100, rng, amplitude=10)
        before = field.points.copy()
        field.perturb()
        delta = np.abs(field.points - before)
        # Either a direct move of at most the amplitude, or a wrap across an edge
        toroidal = np.minimum(delta, np.array([200, 100]) - delta)
        assert np.all(toroidal <= 10 + 1e-9)


class TestJitterAnimation:

    def _animation(self, rng, num_points=5, interval=100):
        field = JitterField(num_points, 200, 100, rng)
        scene = VectorScene(200, 100)
        timer = IntervalTimer(interval)
        presented = []
        animation = JitterAnimation(field, scene, timer, present=presented.append)
        return animation, presented

    def test_duration_budget(self, rng):
        animation, _ = self._animation(rng, num_points=5, interval=100)
        assert animation.duration_budget_ms == 500

    def test_start_draws_initial_scene(self, rng):
        animation, presented = self._animation(rng)
        animation.start(now_ms=0)
        scene = animation.scene
        paths = [e for e in scene.elements if isinstance(e, PathElement)]
        circles = [e for e in scene.elements if isinstance(e, CircleElement)]
        assert len(paths) == 5
        assert len(circles) == 5
        assert presented == [scene]
        assert animation.active

    def test_each_tick_moves_points_and_redraws(self, rng):
        animation, presented = self._animation(rng)
        animation.start(now_ms=0)
        before = animation.field.points.copy()
        assert animation.timer.poll(100) == 1
        assert not np.array_equal(before, animation.field.points)
        assert len(presented) == 2
        assert len(animation.scene) == 10

    def test_stops_after_budget(self, rng):
        animation, _ = self._animation(rng, num_points=5, interval=100)
        animation.start(now_ms=0)
        now = 0
        while animation.active and now < 10_000:
            now += 100
            animation.timer.poll(now)
        # Ticks at 100..600 ms; the one at 600 ms is the first past the budget
        assert now == 600
        assert animation.timer.ticks == 6
        assert animation.timer.poll(700) == 0

    def test_stop(self, rng):
        animation, _ = self._animation(rng)
        animation.start(now_ms=0)
        animation.stop()
        assert not animation.active
