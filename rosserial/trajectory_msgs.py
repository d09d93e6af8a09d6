"""Trajectory messages."""

from __future__ import annotations

from dataclasses import dataclass, field

from .message import Message, RosTime


@dataclass
class JointTrajectoryPoint(Message):
    """Joint positions, velocities, accelerations and efforts at one instant.

    The float lists travel as 64-bit floats; ``time_from_start`` is a
    duration relative to the trajectory's start.
    """

    type_name = "trajectory_msgs/JointTrajectoryPoint"
    md5 = "f3cd1e1c4d320c79d6985c904ae5dcd3"
    _layout = (
        ("positions", ("float64", None)),
        ("velocities", ("float64", None)),
        ("accelerations", ("float64", None)),
        ("effort", ("float64", None)),
        ("time_from_start", "duration"),
    )

    positions: list[float] = field(default_factory=list)
    velocities: list[float] = field(default_factory=list)
    accelerations: list[float] = field(default_factory=list)
    effort: list[float] = field(default_factory=list)
    time_from_start: RosTime = field(default_factory=RosTime)