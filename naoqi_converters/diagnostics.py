"""Builds diagnostic reports on joints, battery and computer from robot memory."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import BaseConverter, Header, MessageAction, Robot

logger = logging.getLogger(__name__)

_NAN_LIMITS = (math.nan, math.nan, math.nan, math.nan)


class DiagnosticLevel(enum.IntEnum):
    """Severity of a diagnostic status."""

    OK = 0
    WARN = 1
    ERROR = 2
    STALE = 3


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


@dataclass
class DiagnosticStatus:
    """State of one component, with named values rendered as text."""

    name: str = ""
    hardware_id: str = ""
    level: DiagnosticLevel = DiagnosticLevel.OK
    message: str = ""
    values: list[tuple[str, str]] = field(default_factory=list)

    def add(self, key: str, value: Any) -> None:
        """Append ``key`` with ``value`` rendered as text."""
        self.values.append((key, _format_value(value)))


@dataclass
class DiagnosticArray:
    """A set of diagnostic statuses taken at the same time."""

    header: Header = field(default_factory=Header)
    status: list[DiagnosticStatus] = field(default_factory=list)


_LEVEL_MESSAGES = {
    DiagnosticLevel.OK: "OK",
    DiagnosticLevel.WARN: "WARN",
}


def _message_for_level(level: DiagnosticLevel) -> str:
    return _LEVEL_MESSAGES.get(level, "ERROR")


class DiagnosticsConverter(BaseConverter):
    """Reads joint temperatures, stiffness and battery state into one report."""

    temperature_warn_level = 68.0
    temperature_error_level = 74.0
    battery_status_keys = ("Charging", "Fully Charged")

    def __init__(self, name: str, frequency: float, session: Any, **options: Any) -> None:
        super().__init__(name, frequency, session, **options)
        self.memory = session.service("ALMemory")
        self.body_temperature = None
        if self.robot in (Robot.PEPPER, Robot.NAO):
            self.body_temperature = session.service("ALBodyTemperature")
            if self.naoqi_version.is_lesser(2, 8):
                self.body_temperature.call("setEnableNotifications", True)

        self.motion = session.service("ALMotion")
        self.joint_names: list[str] = list(self.motion.call("getBodyNames", "JointActuators"))
        self.all_keys: list[str] = []
        self.joint_limits: dict[str, tuple[float, float, float, float]] = {}

        for joint in self.joint_names:
            self.all_keys.append(f"Device/SubDeviceList/{joint}/Temperature/Sensor/Value")
            self.all_keys.append(f"Device/SubDeviceList/{joint}/Hardness/Actuator/Value")
            try:
                raw_limits = self.motion.call("getLimits", joint)
            except Exception as exc:
                logger.error("Exception caught in DiagnosticsConverter: %s", exc)
                continue
            try:
                first = [float(v) for v in raw_limits[0]]
                self.joint_limits[joint] = (first[0], first[1], first[2], first[3])
            except Exception as exc:
                logger.error(
                    "Error while converting the qi value corresponding to the joint's limits : %s",
                    exc,
                )
                continue

        self.all_keys.extend(
            [
                "BatteryChargeChanged",
                "BatteryPowerPluggedChanged",
                "BatteryFullChargedFlagChanged",
                "Device/SubDeviceList/Battery/Current/Sensor/Value",
            ]
        )

    def _read_values(self) -> list[float] | None:
        try:
            values = [float(v) for v in self.memory.call("getListData", self.all_keys)]
        except Exception as exc:
            logger.error("Exception caught in DiagnosticsConverter: %s", exc)
            return None
        if len(values) < len(self.all_keys):
            logger.error(
                "Exception caught in DiagnosticsConverter: expected %d values, got %d",
                len(self.all_keys), len(values),
            )
            return None
        return values

    def _joint_statuses(self, values, msg: DiagnosticArray) -> DiagnosticLevel:
        max_temperature = 0.0
        max_stiffness = 0.0
        min_stiffness = 1.0
        min_stiffness_wo_hands = 1.0
        hot_joints = []
        max_level = DiagnosticLevel.OK

        for joint in self.joint_names:
            temperature = next(values)
            stiffness = next(values)
            limits = self.joint_limits.get(joint, _NAN_LIMITS)

            status = DiagnosticStatus(name=f"naoqi_driver_joints:{joint}", hardware_id=joint)
            status.add("Temperature", temperature)
            status.add("Stiffness", stiffness)
            status.add("minAngle", limits[0])
            status.add("maxAngle", limits[1])
            status.add("maxVelocity", limits[2])
            status.add("maxTorque", limits[3])

            if temperature < self.temperature_warn_level:
                status.level, status.message = DiagnosticLevel.OK, "OK"
            elif temperature < self.temperature_error_level:
                status.level, status.message = DiagnosticLevel.WARN, "Hot"
            else:
                status.level, status.message = DiagnosticLevel.ERROR, "Too hot"
            msg.status.append(status)

            max_level = max(max_level, status.level)
            max_temperature = max(max_temperature, temperature)
            max_stiffness = max(max_stiffness, stiffness)
            min_stiffness = min(min_stiffness, stiffness)
            if "Hand" not in joint:
                min_stiffness_wo_hands = min(min_stiffness_wo_hands, stiffness)
            if status.level >= DiagnosticLevel.WARN:
                hot_joints.append(f"\n{joint}: {temperature:g}°C")

        summary = DiagnosticStatus(
            name="naoqi_driver_joints:Status",
            hardware_id="joints",
            level=max_level,
            message=_message_for_level(max_level),
        )
        summary.add("Highest Temperature", max_temperature)
        summary.add("Highest Stiffness", max_stiffness)
        summary.add("Lowest Stiffness", min_stiffness)
        summary.add("Lowest Stiffness without Hands", min_stiffness_wo_hands)
        summary.add("Hot Joints", "".join(hot_joints))
        msg.status.append(summary)
        return max_level

    def _battery_status(self, values, msg: DiagnosticArray) -> DiagnosticLevel:
        percentage = int(next(values))
        status = DiagnosticStatus(name="naoqi_driver_battery:Status", hardware_id="battery")
        status.add("Percentage", percentage)
        text = ""
        for index, key in enumerate(self.battery_status_keys):
            flag = bool(next(values))
            status.add(key, flag)
            if index == 0:
                if flag:
                    status.level = DiagnosticLevel.OK
                    text = f"Charging ({percentage:>4}%)"
                elif percentage > 60:
                    status.level = DiagnosticLevel.OK
                    text = f"Battery OK ({percentage:>4}% left)"
                elif percentage > 30:
                    status.level = DiagnosticLevel.WARN
                    text = f"Battery discharging ({percentage:>4}% left)"
                else:
                    status.level = DiagnosticLevel.ERROR
                    text = f"Battery almost empty ({percentage:>4}% left)"
            elif index == 1 and flag:
                status.level = DiagnosticLevel.OK
                status.message = "Battery fully charged"
        if text:
            status.message = text
        msg.status.append(status)
        return status.level

    def call_all(self, actions: Iterable[MessageAction]) -> None:
        """Read memory, build the diagnostic report and pass it to each action."""
        msg = DiagnosticArray(header=Header(stamp=self.now()))
        read = self._read_values()
        if read is None:
            return
        values = iter(read)

        self._joint_statuses(values, msg)
        battery_level = self._battery_status(values, msg)

        current = next(values)
        current_status = DiagnosticStatus(
            name="naoqi_driver_battery:Current",
            hardware_id="battery",
            level=battery_level,
        )
        current_status.add("Current", current)
        direction = "charging" if current > 0 else "discharging"
        current_status.message = f"Total Current: {current:>5g} Ampere ({direction})"
        msg.status.append(current_status)

        cpu = DiagnosticStatus(name="naoqi_driver_computer:CPU", level=DiagnosticLevel.OK)
        # The CPU temperature key is unknown; report -1 until it is found.
        cpu.add("Temperature", -1.0)
        msg.status.append(cpu)

        self._dispatch(actions, msg)