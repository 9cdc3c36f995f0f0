"""Publishes the robot's odometry from its torso position and velocity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import BaseConverter, Header, MessageAction
from .imu import Quaternion, Vector3, quaternion_from_rpy

FRAME_WORLD = 1


@dataclass
class Odometry:
    """Pose and velocity of the robot in the odometry frame."""

    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    position: Vector3 = field(default_factory=Vector3)
    orientation: Quaternion = field(default_factory=Quaternion)
    linear: Vector3 = field(default_factory=Vector3)
    angular: Vector3 = field(default_factory=Vector3)


class OdomConverter(BaseConverter):
    """Asks ALMotion for the torso pose and robot velocity."""

    def __init__(self, name: str, frequency: float, session: Any, **options: Any) -> None:
        super().__init__(name, frequency, session, **options)
        self.motion = session.service("ALMotion")
        self.message = Odometry()

    def call_all(self, actions: Iterable[MessageAction]) -> None:
        """Read pose and velocity and pass the odometry message to each action."""
        position = [float(v) for v in self.motion.call("getPosition", "Torso", FRAME_WORLD, True)]
        stamp = self.now()
        speed = [float(v) for v in self.motion.call("getRobotVelocity")]

        x, y, z, wx, wy, wz = position[:6]
        dx, dy, dwz = speed[:3]

        msg = self.message
        msg.header.frame_id = "odom"
        msg.child_frame_id = "base_link"
        msg.header.stamp = stamp
        msg.orientation = quaternion_from_rpy(wx, wy, wz)
        msg.position = Vector3(x, y, z)
        msg.linear = Vector3(dx, dy, 0.0)
        msg.angular = Vector3(0.0, 0.0, dwz)

        self._dispatch(actions, msg)