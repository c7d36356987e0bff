"""
LidarTrack Tracking Test Suite

Tests for motion estimation, trajectory fitting, identity matching and the
visible object lifecycle.

Test ID | Description                    | Reference                       | Tolerance
--------|--------------------------------|---------------------------------|------------
1       | Smoothing factor               | max(0.1+0.005d, 0.2-0.005d)     | 1e-12
2       | Velocity smoothing convergence | Constant (Δx, Δy) input         | 1e-3 m
3       | Least-squares line fit         | y = 2x + 1                      | 1e-9
4       | Degenerate fit                 | Zero x-variance                 | Raises
5       | Confidence monotonicity        | +0.01 per update, ≤ 1.0         | Exact
6       | Matcher asymmetry              | d·1.0 ≥ 0.3 > d·0.01            | Exact
7       | Concrete scenario              | 10°/-10° then 12°/-8°           | 1e-9
"""

import math
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lidartrack.exceptions import DegenerateFitError
from lidartrack.geometry import Angle, LidarRay, Point2D
from lidartrack.tracking import (
    MotionEstimator,
    ObjectState,
    TrajectoryFitter,
    VisibleObject,
    find_match,
    fit_line,
    is_same_object,
    smoothing_factor,
)
from lidartrack.tracking.constants import HISTORY_SIZE, UNCERTAINTY_RATIO


def rays_at(point: Point2D):
    """Boundary triple whose centerpoint is (approximately) point."""
    angle = Angle(math.atan2(point.x, point.y))
    dist = math.hypot(point.x, point.y)
    ray = LidarRay(angle, dist)
    return ray, ray, dist


def object_at(point: Point2D) -> VisibleObject:
    return VisibleObject(*rays_at(point))


# =============================================================================
# TEST 1: Smoothing Factor
# =============================================================================


class TestSmoothingFactor:
    """Piecewise-max adaptive smoothing factor."""

    def test_concrete_value(self):
        """dist=5.1 → max(0.1255, 0.1745) = 0.1745"""
        assert smoothing_factor(5.1) == pytest.approx(0.1745, abs=1e-12)

    def test_crossover_at_ten_meters(self):
        assert smoothing_factor(10.0) == pytest.approx(0.15)

    def test_far_branch(self):
        assert smoothing_factor(40.0) == pytest.approx(0.3)

    def test_minimum_at_crossover(self):
        assert smoothing_factor(10.0) <= smoothing_factor(5.0)
        assert smoothing_factor(10.0) <= smoothing_factor(15.0)


# =============================================================================
# TEST 2: Motion Estimator
# =============================================================================


class TestMotionEstimator:
    """Exponential moving average of per-frame displacement."""

    def test_first_update_is_alpha_scaled(self):
        est = MotionEstimator()
        vx, vy = est.update(Point2D(0.0, 10.0), Point2D(0.5, 10.2), 10.0)

        assert vx == pytest.approx(0.15 * 0.5)
        assert vy == pytest.approx(0.15 * 0.2)

    def test_first_update_bounded_by_raw_delta(self):
        est = MotionEstimator()
        est.update(Point2D(0.0, 5.0), Point2D(0.3, 5.4), 5.0)
        assert est.speed <= math.hypot(0.3, 0.4)

    def test_converges_to_constant_velocity(self):
        est = MotionEstimator()
        delta = (0.1, 0.1)
        point = Point2D(1.0, 10.0)

        for _ in range(80):
            new_point = Point2D(point.x + delta[0], point.y + delta[1])
            est.update(point, new_point, math.hypot(new_point.x, new_point.y))
            point = new_point

        assert est.vx == pytest.approx(delta[0], abs=1e-3)
        assert est.vy == pytest.approx(delta[1], abs=1e-3)

    def test_projection(self):
        est = MotionEstimator(vx=0.5, vy=-1.0)
        projected = est.project(Point2D(1.0, 10.0), 4)

        assert projected.x == pytest.approx(3.0)
        assert projected.y == pytest.approx(6.0)

    def test_estimate_next_is_one_step(self):
        est = MotionEstimator(vx=0.2, vy=0.3)
        center = Point2D(1.0, 1.0)
        assert est.estimate_next(center) == est.project(center, 1)

    def test_heading(self):
        est = MotionEstimator(vx=0.0, vy=1.0)
        assert est.heading_rad == pytest.approx(0.0)


# =============================================================================
# TEST 3-4: Trajectory Fitter
# =============================================================================


class TestTrajectoryFit:
    """Closed-form least-squares line fit."""

    def test_exact_line(self):
        points = [Point2D(x, 2.0 * x + 1.0) for x in range(4)]
        slope, intercept = fit_line(points, Point2D(4.0, 9.0))

        assert slope == pytest.approx(2.0)
        assert intercept == pytest.approx(1.0)

    def test_includes_new_point(self):
        slope, intercept = fit_line([Point2D(0.0, 0.0)], Point2D(1.0, 3.0))

        assert slope == pytest.approx(3.0)
        assert intercept == pytest.approx(0.0)

    def test_degenerate_raises(self):
        """All x-values identical → DegenerateFitError, not inf/NaN"""
        points = [Point2D(1.0, 0.0), Point2D(1.0, 1.0)]
        with pytest.raises(DegenerateFitError):
            fit_line(points, Point2D(1.0, 2.0))

    def test_degenerate_single_point_window(self):
        with pytest.raises(DegenerateFitError):
            fit_line([], Point2D(1.0, 2.0))

    def test_fitter_retains_previous_fit(self):
        fitter = TrajectoryFitter(Point2D(0.0, 0.0), history_size=1)

        assert fitter.update(Point2D(1.0, 1.0)) is True
        assert fitter.slope == pytest.approx(1.0)

        assert fitter.update(Point2D(1.0, 3.0)) is False
        assert fitter.slope == pytest.approx(1.0)
        assert fitter.intercept == pytest.approx(0.0)
        assert fitter.history == (Point2D(1.0, 3.0),)

    def test_no_fit_before_first_update(self):
        fitter = TrajectoryFitter(Point2D(0.0, 0.0))
        assert not fitter.has_fit()
        assert fitter.slope is None

    def test_window_bound(self):
        """History never exceeds 16 points"""
        fitter = TrajectoryFitter(Point2D(0.0, 0.0))
        for i in range(1, 30):
            fitter.update(Point2D(float(i), float(i)))
            assert len(fitter.history) <= HISTORY_SIZE

        assert len(fitter.history) == HISTORY_SIZE
        assert fitter.history[0] == Point2D(14.0, 14.0)
        assert fitter.history[-1] == Point2D(29.0, 29.0)


# =============================================================================
# TEST 5: Visible Object Lifecycle
# =============================================================================


class TestVisibleObject:
    """Create/update state machine."""

    @pytest.fixture
    def obj(self):
        return object_at(Point2D(0.0, 5.0))

    def test_new_object_state(self, obj):
        assert obj.state == ObjectState.NEW
        assert obj.confidence == pytest.approx(0.01)
        assert obj.estimated_velocity == (0.0, 0.0)
        assert obj.tracking is False
        assert len(obj.history) == 1
        assert obj.line_slope is None

    def test_update_transitions_to_tracked(self, obj):
        obj.update(*rays_at(Point2D(0.1, 5.1)))

        assert obj.state == ObjectState.TRACKED
        assert obj.confidence == pytest.approx(0.02)
        assert obj.centerpoint.x == pytest.approx(0.1)
        assert obj.centerpoint.y == pytest.approx(5.1)
        assert obj.line_slope is not None

    def test_confidence_monotonic_and_clamped(self, obj):
        previous = obj.confidence
        for i in range(100):
            obj.update(*rays_at(Point2D(0.01 * i, 5.0)))
            assert obj.confidence >= previous
            assert obj.confidence <= 1.0
            previous = obj.confidence

        assert obj.confidence == 1.0

    def test_history_bounded(self, obj):
        for i in range(1, 25):
            obj.update(*rays_at(Point2D(0.05 * i, 5.0 + 0.1 * i)))

        assert len(obj.history) == HISTORY_SIZE
        assert obj.history[-1] == obj.centerpoint

    def test_vertical_trajectory_keeps_previous_fit(self, obj):
        """Straight-ahead motion has zero x-variance; updates still succeed"""
        for i in range(1, 6):
            obj.update(*rays_at(Point2D(0.0, 5.0 - 0.1 * i)))

        assert obj.line_slope is None
        assert obj.estimated_velocity[1] < 0.0

    def test_update_replaces_detection(self, obj):
        left, right, dist = rays_at(Point2D(1.0, 6.0))
        obj.update(left, right, dist)

        assert obj.left == left
        assert obj.right == right
        assert obj.dist == dist

    def test_update_from_candidate(self):
        a = object_at(Point2D(0.0, 5.0))
        b = object_at(Point2D(0.0, 5.0))
        candidate = object_at(Point2D(0.2, 5.3))

        a.update_from(candidate)
        b.update(candidate.left, candidate.right, candidate.dist)

        assert a.centerpoint == b.centerpoint
        assert a.estimated_velocity == b.estimated_velocity
        assert a.confidence == b.confidence

    def test_set_tracking_has_no_side_effects(self, obj):
        obj.update(*rays_at(Point2D(0.1, 5.1)))
        velocity = obj.estimated_velocity

        obj.set_tracking(True)

        assert obj.tracking is True
        assert obj.estimated_velocity == velocity

    def test_projected_position(self, obj):
        obj.update(*rays_at(Point2D(0.0, 5.2)))
        vx, vy = obj.estimated_velocity

        projected = obj.get_projected_position(3)

        assert projected.x == pytest.approx(obj.centerpoint.x + 3 * vx)
        assert projected.y == pytest.approx(obj.centerpoint.y + 3 * vy)

    def test_estimated_direction(self):
        left = LidarRay(Angle.from_degrees(20.0), 4.0)
        right = LidarRay(Angle.from_degrees(10.0), 4.0)
        obj = VisibleObject(left, right, 4.0)

        assert obj.estimated_direction.degrees == pytest.approx(15.0)


# =============================================================================
# TEST 6: Identity Matcher
# =============================================================================


class TestIdentityMatcher:
    """Confidence-scaled proximity test."""

    def test_asymmetry(self):
        """At d = 1 m a new object matches, a long-tracked one does not"""
        new_obj = object_at(Point2D(0.0, 5.0))
        old_obj = object_at(Point2D(0.0, 5.0))
        for _ in range(100):
            old_obj.update(*rays_at(Point2D(0.0, 5.0)))

        candidate = object_at(Point2D(0.0, 6.0))

        assert old_obj.confidence == 1.0
        assert new_obj.confidence == pytest.approx(0.01)
        assert is_same_object(new_obj, candidate)
        assert not is_same_object(old_obj, candidate)

    def test_uses_predicted_position(self):
        """A moving object matches a candidate at its predicted position"""
        obj = object_at(Point2D(0.0, 5.0))
        for i in range(1, 60):
            obj.update(*rays_at(Point2D(0.0, 5.0 + 0.2 * i)))

        candidate = VisibleObject(*rays_at(obj.estimate_update()))

        assert obj.is_same_object(candidate)

    def test_threshold_is_strict(self):
        obj = object_at(Point2D(0.0, 5.0))
        candidate = object_at(Point2D(0.0, 5.0 + UNCERTAINTY_RATIO / obj.confidence + 1.0))
        assert not is_same_object(obj, candidate)

    def test_find_match_picks_nearest(self):
        near = object_at(Point2D(0.0, 5.0))
        near.object_id = 1
        far = object_at(Point2D(1.0, 5.0))
        far.object_id = 2
        candidate = object_at(Point2D(0.1, 5.0))

        assert find_match([far, near], candidate) is near

    def test_find_match_none(self):
        obj = object_at(Point2D(0.0, 5.0))
        for _ in range(100):
            obj.update(*rays_at(Point2D(0.0, 5.0)))

        assert find_match([obj], object_at(Point2D(3.0, 8.0))) is None
        assert find_match([], object_at(Point2D(3.0, 8.0))) is None


# =============================================================================
# TEST 7: Concrete Scenario
# =============================================================================


class TestConcreteScenario:
    """left=(10°, 5.0), right=(-10°, 5.0), dist=5.0, then (12°, -8°, 5.1)."""

    def test_two_frame_update(self):
        obj = VisibleObject(
            LidarRay(Angle.from_degrees(10.0), 5.0),
            LidarRay(Angle.from_degrees(-10.0), 5.0),
            5.0,
        )
        assert obj.centerpoint.x == pytest.approx(0.0, abs=1e-12)
        assert obj.centerpoint.y == pytest.approx(5.0)

        obj.update(
            LidarRay(Angle.from_degrees(12.0), 5.1),
            LidarRay(Angle.from_degrees(-8.0), 5.1),
            5.1,
        )

        alpha = 0.1745
        mid = math.radians(2.0)
        expected_vx = alpha * 5.1 * math.sin(mid)
        expected_vy = alpha * (5.1 * math.cos(mid) - 5.0)

        vx, vy = obj.estimated_velocity
        assert vx != 0.0
        assert vx == pytest.approx(expected_vx, abs=1e-9)
        assert vy == pytest.approx(expected_vy, abs=1e-9)
        assert obj.confidence == pytest.approx(0.02)
