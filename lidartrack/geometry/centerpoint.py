"""
Centerpoint Geometry

Derives the Cartesian centerpoint of an obstruction from its left/right
boundary rays and a single representative range reading.

The angular midpoint is combined with the measured distance rather than
averaging the two edge returns, so unequal edge ranges do not bias the
estimate.
"""

from .lidar_ray import LidarRay, Point2D


def compute_centerpoint(left: LidarRay, right: LidarRay, dist: float) -> Point2D:
    """
    Compute the centerpoint of a detected obstruction.

    Args:
        left: Left boundary ray
        right: Right boundary ray
        dist: Representative range of the obstruction [m]

    Returns:
        Centerpoint (lateral, longitudinal) in the sensor frame
    """
    mid_angle = left.angle.average(right.angle)
    return LidarRay(mid_angle, dist).to_point()
