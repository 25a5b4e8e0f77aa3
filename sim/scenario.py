# sim/scenario.py
from dataclasses import dataclass, field
from typing import List

from sim.commands import Command, build_playbook
from utils.metrics import path_length
from vehicles.base import Pose


@dataclass(frozen=True)
class Scenario:
    """Named start pose plus the scripted maneuver driven from it."""
    name: str
    start_pose: Pose
    playbook: List[Command] = field(default_factory=list)

    def preview(self, simulator, step=None) -> Pose:
        """Reset `simulator` to the start pose and return the pose after `step` commands."""
        simulator.reset(self.start_pose)
        return simulator.apply_playbook(self.playbook, step)

    def driven_length(self, simulator) -> float:
        """Distance the rear axle covers over the whole playbook from the start pose."""
        simulator.reset(self.start_pose)
        return path_length(simulator.playbook_trace(self.playbook))


PARALLEL_PARKING_SCENARIO = Scenario(
    name="Parallel Parking",
    start_pose=Pose(x=-2.5, y=-1.2, heading=0.0, steer=0.0),
    playbook=build_playbook([
        {"type": "setSteer", "deg": -30},
        {"type": "move", "distance": -2.6},
        {"type": "setSteer", "deg": 30},
        {"type": "move", "distance": -2.2},
        {"type": "setSteer", "deg": 0},
        {"type": "move", "distance": 0.6},
    ]),
)
