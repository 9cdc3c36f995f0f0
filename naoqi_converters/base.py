"""Shared pieces of every converter: robot identity, message actions and callbacks."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional


class Robot(enum.Enum):
    """The kind of robot a session is connected to."""

    UNIDENTIFIED = "unidentified"
    NAO = "nao"
    PEPPER = "pepper"
    ROMEO = "romeo"


@dataclass(frozen=True, order=True)
class NaoqiVersion:
    """Version of the software running on the robot."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0
    text: str = field(default="", compare=False)

    def is_lesser(self, major: int, minor: int) -> bool:
        """Return True when this version is strictly older than ``major.minor``."""
        return (self.major, self.minor) < (major, minor)


class MessageAction(enum.Enum):
    """What a consumer does with a converted message."""

    PUBLISH = "publish"
    RECORD = "record"
    LOG = "log"


@dataclass
class Header:
    """Time stamp and reference frame of a message."""

    stamp: float = 0.0
    frame_id: str = ""


class MissingCallbackError(KeyError):
    """Raised when an action is requested that has no registered callback."""


class BaseConverter:
    """Common state of a converter: its name, rate, session and callbacks."""

    def __init__(
        self,
        name: str,
        frequency: float,
        session: Any,
        robot: Robot = Robot.UNIDENTIFIED,
        naoqi_version: Optional[NaoqiVersion] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.name = name
        # Informative only: the rate at which the converter is expected to run.
        self.frequency = float(frequency)
        self.session = session
        self.robot = robot
        self.naoqi_version = naoqi_version if naoqi_version is not None else NaoqiVersion()
        self.record_enabled = False
        self._clock = clock if clock is not None else time.time
        self._callbacks: dict[MessageAction, Callable[..., Any]] = {}

    @property
    def registered_actions(self) -> frozenset[MessageAction]:
        """The actions that currently have a callback."""
        return frozenset(self._callbacks)

    def register_callback(self, action: MessageAction, callback: Callable[..., Any]) -> None:
        """Set the callback run for ``action``, replacing any previous one."""
        self._callbacks[action] = callback

    def unregister_callback(self, action: MessageAction) -> None:
        """Forget the callback for ``action``; unknown actions are ignored."""
        self._callbacks.pop(action, None)

    def reset(self) -> None:
        """Prepare the converter for a fresh run."""

    def now(self) -> float:
        """Current time in seconds from the converter's clock."""
        return float(self._clock())

    def _dispatch(self, actions: Iterable[MessageAction], *payload: Any) -> None:
        for action in actions:
            try:
                callback = self._callbacks[action]
            except KeyError:
                raise MissingCallbackError(
                    f"{self.name}: no callback registered for {action.name}"
                ) from None
            callback(*payload)