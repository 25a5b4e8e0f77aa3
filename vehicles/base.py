# vehicles/base.py
import math
from dataclasses import dataclass, fields
from typing import Mapping, Optional


def deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


def rad_to_deg(rad: float) -> float:
    return rad * 180.0 / math.pi


@dataclass(frozen=True)
class Pose:
    """Vehicle pose: rear-axle position, heading [rad], steering angle [rad]."""
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0
    steer: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping]) -> "Pose":
        data = data or {}
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            heading=float(data.get("heading", 0.0)),
            steer=float(data.get("steer", 0.0)),
        )

    def as_tuple(self):
        return (self.x, self.y, self.heading, self.steer)


# camelCase option names accepted from scenario/config data
_CONFIG_ALIASES = {
    "bodyLength": "body_length",
    "bodyWidth": "body_width",
    "frontOverhang": "front_overhang",
    "rearOverhang": "rear_overhang",
    "wheelLength": "wheel_length",
    "wheelWidth": "wheel_width",
    "maxSteerDeg": "max_steer_deg",
}


@dataclass(frozen=True)
class VehicleConfig:
    """
    Fixed vehicle dimensions (scene length unit) and steering limit [deg].
    Defaults describe a mid-size passenger car in inches; the body spans
    rear_overhang + wheelbase + front_overhang.
    """
    wheelbase: float = 106.3
    track: float = 60.6
    body_length: float = 184.8
    body_width: float = 73.5
    front_overhang: float = 37.2
    rear_overhang: float = 41.3
    wheel_length: float = 27.0
    wheel_width: float = 9.2
    max_steer_deg: float = 32.5

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not value > 0:
                raise ValueError(f"VehicleConfig.{f.name} must be > 0, got {value!r}")

    @classmethod
    def from_dict(cls, options: Optional[Mapping]) -> "VehicleConfig":
        """Override the defaults from a plain mapping; unspecified fields keep their default."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (options or {}).items():
            name = _CONFIG_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown vehicle option: {key!r}")
            kwargs[name] = float(value)
        return cls(**kwargs)
