"""
LidarTrack Geometry Test Suite

Tests for angle arithmetic, ray projection and centerpoint estimation.

Test ID | Description                    | Reference                 | Tolerance
--------|--------------------------------|---------------------------|------------
1       | Angle normalization/wraparound | (-π, π] canonical range   | 1e-9 rad
2       | Minor-arc average and distance | 179° / -179° → 180°       | 1e-9 rad
3       | Ray polar → Cartesian          | x = r sin θ, y = r cos θ  | 1e-9 m
4       | Centerpoint symmetry           | Equal edge angles         | Exact
"""

import math
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lidartrack.geometry import NO_RETURN, Angle, LidarRay, Point2D, compute_centerpoint, normalize

# =============================================================================
# TEST 1: Angle Normalization
# =============================================================================


class TestAngleNormalization:
    """Angles are always stored in (-π, π]."""

    @pytest.mark.parametrize("radians", [-3.0, -1.0, 0.0, 0.5, 2.9, 3.1, 10.0, -12.5])
    def test_full_turn_is_identity(self, radians):
        """normalize(a + 2π) == normalize(a)"""
        assert normalize(radians + 2 * math.pi) == pytest.approx(normalize(radians), abs=1e-9)

    @pytest.mark.parametrize("radians", [-20.0, -4.0, -math.pi, 0.0, math.pi, 4.0, 20.0])
    def test_range(self, radians):
        value = normalize(radians)
        assert -math.pi < value <= math.pi

    def test_minus_pi_maps_to_pi(self):
        assert Angle(-math.pi).radians == math.pi

    def test_constructor_normalizes(self):
        assert Angle(3 * math.pi / 2).radians == pytest.approx(-math.pi / 2)

    def test_degrees_round_trip(self):
        assert Angle.from_degrees(45.0).degrees == pytest.approx(45.0)

    def test_addition_wraps(self):
        """170° + 20° = -170°"""
        result = Angle.from_degrees(170.0) + Angle.from_degrees(20.0)
        assert result.degrees == pytest.approx(-170.0)

    def test_subtraction_wraps(self):
        """-170° - 20° = 170°"""
        result = Angle.from_degrees(-170.0) - Angle.from_degrees(20.0)
        assert result.degrees == pytest.approx(170.0)

    def test_negation(self):
        assert (-Angle(0.4)).radians == pytest.approx(-0.4)

    def test_is_immutable(self):
        angle = Angle(0.1)
        with pytest.raises(AttributeError):
            angle.radians = 0.2


# =============================================================================
# TEST 2: Average and Distance
# =============================================================================


class TestAngleAverage:
    """Average and distance follow the minor arc."""

    def test_average_across_wraparound(self):
        """average(179°, -179°) ≈ 180°, not 0°"""
        avg = Angle.from_degrees(179.0).average(Angle.from_degrees(-179.0))
        assert avg.distance_to(Angle(math.pi)) < 1e-9

    def test_average_is_symmetric_across_wraparound(self):
        avg = Angle.from_degrees(-179.0).average(Angle.from_degrees(179.0))
        assert avg.distance_to(Angle(math.pi)) < 1e-9

    def test_average_simple(self):
        avg = Angle.from_degrees(10.0).average(Angle.from_degrees(-10.0))
        assert avg.radians == pytest.approx(0.0, abs=1e-12)

    def test_average_of_equal_angles(self):
        angle = Angle(0.3)
        assert angle.average(angle) == angle

    def test_distance_minor_arc(self):
        d = Angle.from_degrees(170.0).distance_to(Angle.from_degrees(-170.0))
        assert d == pytest.approx(math.radians(20.0))

    def test_distance_non_negative_and_symmetric(self):
        a = Angle(-2.5)
        b = Angle(1.0)
        assert a.distance_to(b) >= 0.0
        assert a.distance_to(b) == pytest.approx(b.distance_to(a))

    def test_distance_at_most_pi(self):
        assert Angle(0.0).distance_to(Angle(math.pi)) == pytest.approx(math.pi)

    def test_front_facing(self):
        assert Angle.from_degrees(30.0).is_front_facing()
        assert not Angle.from_degrees(120.0).is_front_facing()


# =============================================================================
# TEST 3: Ray Projection
# =============================================================================


class TestLidarRay:
    """Lateral = r sin θ, longitudinal = r cos θ."""

    def test_projection_30_degrees(self):
        ray = LidarRay(Angle.from_degrees(30.0), 2.0)
        assert ray.lateral_dist == pytest.approx(1.0)
        assert ray.longitudinal_dist == pytest.approx(math.sqrt(3.0))

    def test_straight_ahead(self):
        ray = LidarRay.from_polar(0.0, 7.5)
        assert ray.to_point() == Point2D(0.0, 7.5)

    def test_negative_angle_is_negative_lateral(self):
        ray = LidarRay.from_polar(-0.5, 3.0)
        assert ray.lateral_dist < 0.0

    def test_validity(self):
        assert LidarRay.from_polar(0.0, 0.0).is_valid()
        assert not LidarRay.from_polar(0.0, NO_RETURN).is_valid()
        assert not LidarRay.from_polar(0.0, float("nan")).is_valid()
        assert not LidarRay.from_polar(0.0, -1.0).is_valid()

    def test_point_distance(self):
        assert Point2D(0.0, 0.0).distance_to(Point2D(3.0, 4.0)) == pytest.approx(5.0)

    def test_point_bearing(self):
        """Bearing inverts the ray projection"""
        point = LidarRay(Angle.from_degrees(-25.0), 4.0).to_point()
        assert point.bearing().degrees == pytest.approx(-25.0)

    def test_point_bearing_front_facing(self):
        assert Point2D(1.0, 4.0).bearing().is_front_facing()
        assert not Point2D(0.5, -2.0).bearing().is_front_facing()
        assert not Point2D(3.0, 0.0).bearing().is_front_facing()


# =============================================================================
# TEST 4: Centerpoint
# =============================================================================


class TestCenterpoint:
    """Centerpoint = projection of (mid angle, measured distance)."""

    def test_symmetry_equal_angles(self):
        """Equal edge angles give exactly the projection of (θ, dist)"""
        theta = Angle(0.3)
        left = LidarRay(theta, 6.0)
        right = LidarRay(theta, 8.0)

        center = compute_centerpoint(left, right, 7.0)

        assert center == LidarRay(theta, 7.0).to_point()

    def test_concrete_scenario(self):
        """left=(10°, 5.0), right=(-10°, 5.0), dist=5.0 → (0.0, 5.0)"""
        left = LidarRay(Angle.from_degrees(10.0), 5.0)
        right = LidarRay(Angle.from_degrees(-10.0), 5.0)

        center = compute_centerpoint(left, right, 5.0)

        assert center.x == pytest.approx(0.0, abs=1e-12)
        assert center.y == pytest.approx(5.0)

    def test_uses_measured_distance(self):
        """Unequal edge ranges do not bias the centerpoint"""
        left = LidarRay(Angle.from_degrees(10.0), 4.0)
        right = LidarRay(Angle.from_degrees(-10.0), 6.0)

        center = compute_centerpoint(left, right, 4.0)

        assert center.y == pytest.approx(4.0)

    def test_behind_sensor_wraparound(self):
        """Edges at ±179° give a centerpoint straight behind"""
        left = LidarRay(Angle.from_degrees(179.0), 3.0)
        right = LidarRay(Angle.from_degrees(-179.0), 3.0)

        center = compute_centerpoint(left, right, 3.0)

        assert center.x == pytest.approx(0.0, abs=1e-9)
        assert center.y == pytest.approx(-3.0)
