"""
LidarTrack API Examples

Usage examples demonstrating the LIDAR object tracking API.
"""

import math
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def example_visible_object():
    """
    Example 1: Single Visible Object

    Build an object from its boundary rays and feed it a few frames of an
    approaching obstruction.
    """
    from lidartrack import Angle, LidarRay, VisibleObject

    left = LidarRay(Angle.from_degrees(10.0), 5.0)
    right = LidarRay(Angle.from_degrees(-10.0), 5.0)
    obj = VisibleObject(left, right, 5.0)

    for step in range(1, 6):
        dist = 5.0 - 0.2 * step
        obj.update(
            LidarRay(Angle.from_degrees(10.0), dist),
            LidarRay(Angle.from_degrees(-10.0), dist),
            dist,
        )

    vx, vy = obj.estimated_velocity
    projected = obj.get_projected_position(10)

    print("=== Visible Object Example ===")
    print(f"Centerpoint: ({obj.centerpoint.x:.2f}, {obj.centerpoint.y:.2f}) m")
    print(f"Velocity: ({vx:.3f}, {vy:.3f}) m/frame")
    print(f"Confidence: {obj.confidence:.2f}")
    print(f"Position in 10 frames: ({projected.x:.2f}, {projected.y:.2f}) m")


def example_angle_wraparound():
    """
    Example 2: Angle Arithmetic

    Averages and distances follow the minor arc across ±180°.
    """
    from lidartrack import Angle

    a = Angle.from_degrees(179.0)
    b = Angle.from_degrees(-179.0)

    print("\n=== Angle Wraparound Example ===")
    print(f"179° + 2° = {(a + Angle.from_degrees(2.0)).degrees:.1f}°")
    print(f"average(179°, -179°) = {abs(a.average(b).degrees):.1f}°")
    print(f"distance(179°, -179°) = {math.degrees(a.distance_to(b)):.1f}°")


def example_sensor_pipeline():
    """
    Example 3: Sensor Registry and Tracker

    Store LIDAR sweeps and run them through the frame-by-frame tracker.
    """
    from lidartrack import LidarPosition, ObjectTracker, SensorData

    inf = float("inf")
    data = SensorData(range_jump=0.5, min_cluster_size=2)
    data.init_lidar(LidarPosition.FRONT, math.radians(-4.0), math.radians(1.0), 9)
    tracker = ObjectTracker(max_misses=3)

    for dist in (6.0, 5.8, 5.6, 5.4):
        data.update_lidar(LidarPosition.FRONT, [inf, inf, dist, dist, dist, inf, inf, inf, inf])
        tracker.ingest_frame(data)

    nearest = tracker.update_tracking_flag()

    print("\n=== Sensor Pipeline Example ===")
    print(f"Sweeps received: {data.get_last_update(LidarPosition.FRONT)}")
    print(f"Objects tracked: {len(tracker.objects)}")
    if nearest is not None:
        print(f"Tracking object {nearest.object_id}: {nearest!r}")


def example_scenario_run():
    """
    Example 4: Scenario Simulation

    Load a YAML scenario and run it headless.
    """
    from lidartrack.io import ScenarioLoader

    path = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        "scenarios",
        "two_vehicles.yaml",
    )
    result = ScenarioLoader(path).create_runner().run()

    print("\n=== Scenario Run Example ===")
    print(f"Scenario: {result.config.name}")
    print(f"Objects created: {result.objects_created}")
    for snap in result.final_objects:
        print(f"  #{snap.object_id}: ({snap.x_m:.1f}, {snap.y_m:.1f}) m, conf={snap.confidence:.2f}")


if __name__ == "__main__":
    print("LidarTrack API Examples")
    print("=" * 60)

    example_visible_object()
    example_angle_wraparound()
    example_sensor_pipeline()
    example_scenario_run()

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
