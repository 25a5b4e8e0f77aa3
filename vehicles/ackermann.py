# vehicles/ackermann.py
import math
from dataclasses import replace
from typing import NamedTuple, Optional

from geom.polygons import local_to_world, oriented_box
from vehicles.base import Pose, VehicleConfig, deg_to_rad

# Below this steering magnitude motion is a straight line and no turn center is
# reported: R = L / tan(steer) grows without bound near zero.
MIN_TURN_STEER_RAD = deg_to_rad(0.5)


class WheelPositions(NamedTuple):
    rear_left: tuple
    rear_right: tuple
    front_left: tuple
    front_right: tuple


class TurningRadii(NamedTuple):
    radius: float   # signed, negative = turning right
    inner: float
    outer: float


class Ackermann:
    """Bicycle-model kinematics and body/wheel geometry for a car-like vehicle."""

    def __init__(self, config: Optional[VehicleConfig] = None):
        self.config = config if config is not None else VehicleConfig()

    @property
    def max_steer(self) -> float:
        return deg_to_rad(self.config.max_steer_deg)

    @property
    def L(self) -> float:
        return self.config.wheelbase

    def clamp_steer(self, steer: float) -> float:
        return max(-self.max_steer, min(self.max_steer, steer))

    def set_steer(self, pose: Pose, steer: float) -> Pose:
        return replace(pose, steer=self.clamp_steer(steer))

    def move(self, pose: Pose, distance: float) -> Pose:
        """
        Advance the rear axle by a signed arc length along the current steering.
        The arc is integrated exactly about the instantaneous center of
        curvature (ICC), so any distance stays on the same circle.
        """
        th = pose.heading
        if abs(pose.steer) < MIN_TURN_STEER_RAD:
            return replace(pose,
                           x=pose.x + math.cos(th) * distance,
                           y=pose.y + math.sin(th) * distance)

        R = self.L / math.tan(pose.steer)
        dth = distance / R
        icc_x = pose.x - R * math.sin(th)
        icc_y = pose.y + R * math.cos(th)
        nth = th + dth
        return replace(pose,
                       x=icc_x + R * math.sin(nth),
                       y=icc_y - R * math.cos(nth),
                       heading=nth)

    def to_world(self, pose: Pose, local_x: float, local_y: float):
        return local_to_world(pose.x, pose.y, pose.heading, local_x, local_y)

    def wheel_positions(self, pose: Pose) -> WheelPositions:
        half_track = self.config.track / 2.0
        return WheelPositions(
            rear_left=self.to_world(pose, 0.0, half_track),
            rear_right=self.to_world(pose, 0.0, -half_track),
            front_left=self.to_world(pose, self.L, half_track),
            front_right=self.to_world(pose, self.L, -half_track),
        )

    def wheel_polygons(self, pose: Pose):
        """Wheel rectangles keyed like wheel_positions; front wheels turned by steer."""
        cfg = self.config
        out = {}
        for name, center in self.wheel_positions(pose)._asdict().items():
            theta = pose.heading + (pose.steer if name.startswith("front") else 0.0)
            out[name] = oriented_box(center, cfg.wheel_length, cfg.wheel_width, theta)
        return out

    def body_polygon(self, pose: Pose):
        """Oriented body rectangle: rear-left, front-left, front-right, rear-right."""
        cfg = self.config
        half_w = cfg.body_width / 2.0
        rear = -cfg.rear_overhang
        front = rear + cfg.body_length
        return [
            self.to_world(pose, rear, half_w),
            self.to_world(pose, front, half_w),
            self.to_world(pose, front, -half_w),
            self.to_world(pose, rear, -half_w),
        ]

    def center_of_body(self, pose: Pose):
        cfg = self.config
        return self.to_world(pose, -cfg.rear_overhang + cfg.body_length / 2.0, 0.0)

    def turning_radii(self, pose: Pose) -> Optional[TurningRadii]:
        if abs(pose.steer) < MIN_TURN_STEER_RAD:
            return None
        R = self.L / math.tan(pose.steer)
        half_track = self.config.track / 2.0
        return TurningRadii(radius=R, inner=abs(R) - half_track, outer=abs(R) + half_track)
