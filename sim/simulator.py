# sim/simulator.py
import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

import numpy as np

from geom.collision import detect_collision
from sim.commands import Move, SetSteer, as_command
from vehicles.ackermann import Ackermann
from vehicles.base import Pose, VehicleConfig, deg_to_rad

log = logging.getLogger("simulator")


@dataclass(frozen=True)
class CollisionPolicy:
    """Damage amount bounds and the contact hysteresis radius."""
    min_amount: int = 800
    max_amount: int = 3000
    proximity: float = 1.0      # contacts closer than this are the same ongoing hit
    car_kind: str = "car"
    car_multiplier: int = 2


@dataclass(frozen=True)
class CollisionRecord:
    x: float
    y: float
    kind: str
    amount: int


def collision_amount(rng: np.random.Generator, policy: CollisionPolicy, kind: str) -> int:
    """Squared uniform draw, biased toward min_amount; scaled up for parked cars."""
    r = rng.random()
    span = policy.max_amount - policy.min_amount + 1
    amount = math.floor(policy.min_amount + r * r * span)
    if kind == policy.car_kind:
        amount *= policy.car_multiplier
    return amount


def _make_model(config) -> Ackermann:
    if config is None or isinstance(config, VehicleConfig):
        return Ackermann(config)
    if isinstance(config, Mapping):
        return Ackermann(VehicleConfig.from_dict(config))
    raise TypeError(f"config must be VehicleConfig, mapping or None, got {type(config).__name__}")


class Simulator:
    """
    Owns the live pose of one vehicle.

    Poses are immutable values: every step produces a new Pose, so tentative
    and preview poses can never alias the live one.
    """

    def __init__(self, config=None, *, rng=None, policy: Optional[CollisionPolicy] = None):
        self._model = _make_model(config)
        self._pose = Pose()
        self._last_collision: Optional[CollisionRecord] = None
        self.rng = np.random.default_rng(rng)
        self.policy = policy if policy is not None else CollisionPolicy()

    @property
    def model(self) -> Ackermann:
        return self._model

    @property
    def pose(self) -> Pose:
        return self._pose

    @property
    def last_collision(self) -> Optional[CollisionRecord]:
        return self._last_collision

    def reset(self, pose: Optional[Pose] = None) -> Pose:
        if pose is None:
            pose = Pose()
        elif isinstance(pose, Mapping):
            pose = Pose.from_dict(pose)
        self._pose = pose
        log.debug("reset to %s", pose)
        return pose

    def set_steer_deg(self, deg: float):
        self.set_steer_rad(deg_to_rad(deg))

    def set_steer_rad(self, rad: float):
        self._pose = self._model.set_steer(self._pose, rad)

    def move(self, distance: float) -> Pose:
        self._pose = self._model.move(self._pose, distance)
        return self._pose

    def move_with_collision(self, distance: float, world) -> bool:
        """
        Advance only if the body at the next pose is clear of every solid obstacle.
        On contact the live pose is kept and last_collision describes the hit.
        """
        nxt = self._model.move(self._pose, distance)
        hit = detect_collision(nxt, self._model, world)
        if hit is None:
            self._pose = nxt
            self._last_collision = None
            return True

        prev = self._last_collision
        if prev is not None and math.hypot(prev.x - hit.x, prev.y - hit.y) < self.policy.proximity:
            amount = prev.amount
            log.debug("contact at (%.3f, %.3f) kind=%s continues, amount=%d",
                      hit.x, hit.y, hit.kind, amount)
        else:
            amount = collision_amount(self.rng, self.policy, hit.kind)
            log.debug("new contact at (%.3f, %.3f) kind=%s, amount=%d",
                      hit.x, hit.y, hit.kind, amount)
        self._last_collision = CollisionRecord(hit.x, hit.y, hit.kind, amount)
        return False

    def apply_command(self, cmd):
        cmd = as_command(cmd)
        if isinstance(cmd, SetSteer):
            self.set_steer_deg(cmd.deg)
        elif isinstance(cmd, Move):
            self.move(cmd.distance)

    def apply_playbook(self, commands: Sequence, upto: Optional[int] = None) -> Pose:
        """
        Pose reached after the first `upto` commands, starting from the live pose.
        The live pose is left exactly as it was.
        """
        if upto is None:
            upto = len(commands)
        if not 0 <= upto <= len(commands):
            raise ValueError(f"upto must be in [0, {len(commands)}], got {upto}")

        snapshot = self._pose
        try:
            for cmd in commands[:upto]:
                self.apply_command(cmd)
            result = self._pose
        finally:
            self._pose = snapshot
        log.debug("playbook preview %d/%d -> %s", upto, len(commands), result)
        return result

    def playbook_trace(self, commands: Sequence) -> np.ndarray:
        """(n+1, 4) array of (x, y, heading, steer) after each step index 0..n."""
        snapshot = self._pose
        rows = [snapshot.as_tuple()]
        try:
            for cmd in commands:
                self.apply_command(cmd)
                rows.append(self._pose.as_tuple())
        finally:
            self._pose = snapshot
        return np.array(rows, dtype=float)
