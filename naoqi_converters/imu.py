"""Publishes the inertial measurements of the robot's torso or base."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import BaseConverter, Header, MessageAction

logger = logging.getLogger(__name__)

_AXES = ("X", "Y", "Z")
_VALUES_NEEDED = 10


@dataclass
class Quaternion:
    """A rotation as a unit quaternion."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass
class Vector3:
    """A three-dimensional vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


def _covariance() -> list[float]:
    return [0.0] * 9


@dataclass
class Imu:
    """Orientation, angular velocity and linear acceleration at one instant."""

    header: Header = field(default_factory=Header)
    orientation: Quaternion = field(default_factory=Quaternion)
    orientation_covariance: list[float] = field(default_factory=_covariance)
    angular_velocity: Vector3 = field(default_factory=Vector3)
    angular_velocity_covariance: list[float] = field(default_factory=_covariance)
    linear_acceleration: Vector3 = field(default_factory=Vector3)
    linear_acceleration_covariance: list[float] = field(default_factory=_covariance)


class ImuLocation(enum.Enum):
    """Where the inertial unit sits on the robot."""

    TORSO = "torso"
    BASE = "base"


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> Quaternion:
    """Quaternion for rotations about fixed X, Y and Z axes (roll, pitch, yaw)."""
    half_roll, half_pitch, half_yaw = roll * 0.5, pitch * 0.5, yaw * 0.5
    cr, sr = math.cos(half_roll), math.sin(half_roll)
    cp, sp = math.cos(half_pitch), math.sin(half_pitch)
    cy, sy = math.cos(half_yaw), math.sin(half_yaw)
    return Quaternion(
        x=sr * cp * cy - cr * sp * sy,
        y=cr * sp * cy + sr * cp * sy,
        z=cr * cp * sy - sr * sp * cy,
        w=cr * cp * cy + sr * sp * sy,
    )


def _sensor_keys(device: str) -> list[str]:
    keys = ["DCM/Time"]
    for quantity in ("Angle", "Gyroscope", "Accelerometer"):
        keys.extend(
            f"Device/SubDeviceList/{device}/{quantity}{axis}/Sensor/Value" for axis in _AXES
        )
    return keys


_LAYOUTS = {
    ImuLocation.TORSO: ("base_link", "InertialSensor"),
    ImuLocation.BASE: ("base_footprint", "InertialSensorBase"),
}


class ImuConverter(BaseConverter):
    """Reads one inertial unit from ALMemory and passes an Imu message on."""

    def __init__(
        self,
        name: str,
        location: ImuLocation,
        frequency: float,
        session: Any,
        **options: Any,
    ) -> None:
        super().__init__(name, frequency, session, **options)
        self.memory = session.service("ALMemory")
        self.location = ImuLocation(location)
        frame_id, device = _LAYOUTS[self.location]
        self.data_names: list[str] = _sensor_keys(device)
        self.message = Imu(header=Header(frame_id=frame_id))

    def call_all(self, actions: Iterable[MessageAction]) -> None:
        """Read the sensor values and pass the updated message to each action."""
        try:
            values = [float(v) for v in self.memory.call("getListData", self.data_names)]
        except Exception as exc:
            logger.error("Exception caught in ImuConverter: %s", exc)
            return
        if len(values) < _VALUES_NEEDED:
            logger.error(
                "Exception caught in ImuConverter: expected %d values, got %d",
                _VALUES_NEEDED, len(values),
            )
            return

        # values: time, angle (X, Y, Z), gyroscope (X, Y, Z), accelerometer (X, Y, Z)
        msg = self.message
        msg.header.stamp = self.now()
        msg.orientation = quaternion_from_rpy(values[1], values[2], values[3])
        msg.angular_velocity = Vector3(values[4], values[5], values[6])
        msg.linear_acceleration = Vector3(values[7], values[8], values[9])

        # Covariances are unknown.
        msg.orientation_covariance[0] = -1.0
        msg.angular_velocity_covariance[0] = -1.0
        msg.linear_acceleration_covariance[0] = -1.0

        self._dispatch(actions, msg)