"""Publishes the readings of the robot's ultrasound sensors."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import BaseConverter, Header, MessageAction, Robot

logger = logging.getLogger(__name__)

_SUBSCRIBER = "ROS"

_LAYOUTS = {
    Robot.PEPPER: (
        ("Device/SubDeviceList/Platform/Front/Sonar/Sensor/Value", "SonarFront_frame"),
        ("Device/SubDeviceList/Platform/Back/Sonar/Sensor/Value", "SonarBack_frame"),
    ),
    Robot.NAO: (
        ("Device/SubDeviceList/US/Left/Sensor/Value", "LSonar_frame"),
        ("Device/SubDeviceList/US/Right/Sensor/Value", "RSonar_frame"),
    ),
}


class RadiationType(enum.IntEnum):
    """Kind of signal a range sensor emits."""

    ULTRASOUND = 0
    INFRARED = 1


@dataclass
class Range:
    """One distance reading of a range sensor."""

    header: Header = field(default_factory=Header)
    radiation_type: RadiationType = RadiationType.ULTRASOUND
    field_of_view: float = 0.0
    min_range: float = 0.0
    max_range: float = 0.0
    range: float = 0.0


class SonarConverter(BaseConverter):
    """Reads every sonar of the robot and passes the readings to the callbacks."""

    def __init__(self, name: str, frequency: float, session: Any, **options: Any) -> None:
        super().__init__(name, frequency, session, **options)
        self.memory = session.service("ALMemory")
        self.sonar = None
        # Older software needs an explicit subscription to the sonar module.
        if self._needs_subscription:
            self.sonar = session.service("ALSonar")
        self.is_subscribed = False

        layout = _LAYOUTS.get(self.robot, ())
        self.keys: list[str] = [key for key, _ in layout]
        self.frames: list[str] = [frame for _, frame in layout]
        self.messages: list[Range] = [
            Range(
                header=Header(frame_id=frame),
                radiation_type=RadiationType.ULTRASOUND,
                field_of_view=0.523598776,
                min_range=0.25,
                max_range=2.55,
            )
            for frame in self.frames
        ]

    @property
    def _needs_subscription(self) -> bool:
        return self.naoqi_version.is_lesser(2, 9)

    def call_all(self, actions: Iterable[MessageAction]) -> None:
        """Read the sonars and pass the list of readings to each action."""
        if not self.is_subscribed and self._needs_subscription:
            self.sonar.call("subscribe", _SUBSCRIBER)
            self.is_subscribed = True

        try:
            values = [float(v) for v in self.memory.call("getListData", self.keys)]
        except Exception as exc:
            logger.error("Exception caught in SonarConverter: %s", exc)
            return
        if len(values) < len(self.messages):
            logger.error(
                "Exception caught in SonarConverter: expected %d values, got %d",
                len(self.messages), len(values),
            )
            return

        stamp = self.now()
        for message, value in zip(self.messages, values):
            message.header.stamp = stamp
            message.range = value
        self._dispatch(actions, self.messages)

    def reset(self) -> None:
        """Drop the subscription to the sonar module, if any."""
        if self.is_subscribed and self._needs_subscription:
            self.sonar.call("unsubscribe", _SUBSCRIBER)
            self.is_subscribed = False

    def close(self) -> None:
        """Release the sonar module when the converter is no longer used."""
        self.reset()

    def __enter__(self) -> "SonarConverter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()