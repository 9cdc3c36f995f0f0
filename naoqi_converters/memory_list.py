"""Reads a list of memory keys and sorts the values by type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Sequence, TypeVar

from .base import BaseConverter, Header, MessageAction

V = TypeVar("V")


@dataclass
class MemoryPair(Generic[V]):
    """One memory key and the value read for it."""

    memory_key: str
    data: V


@dataclass
class MemoryList:
    """Values of several memory keys, grouped by their type."""

    header: Header = field(default_factory=Header)
    ints: list[MemoryPair[int]] = field(default_factory=list)
    floats: list[MemoryPair[float]] = field(default_factory=list)
    strings: list[MemoryPair[str]] = field(default_factory=list)


class MemoryListConverter(BaseConverter):
    """Fetches a fixed list of keys from ALMemory in one request."""

    def __init__(
        self,
        key_list: Sequence[str],
        name: str,
        frequency: float,
        session: Any,
        **options: Any,
    ) -> None:
        super().__init__(name, frequency, session, **options)
        self.memory = session.service("ALMemory")
        self.key_list = list(key_list)
        self.message = MemoryList()

    def _build(self, values: Iterable[Any]) -> MemoryList:
        message = MemoryList(header=Header(stamp=self.now()))
        for key, value in zip(self.key_list, values):
            # Booleans are integers on the robot side.
            if isinstance(value, (bool, int)):
                message.ints.append(MemoryPair(key, int(value)))
            elif isinstance(value, float):
                message.floats.append(MemoryPair(key, value))
            elif isinstance(value, str):
                message.strings.append(MemoryPair(key, value))
        return message

    def call_all(self, actions: Iterable[MessageAction]) -> None:
        """Read every key, build a fresh message and pass it to each action."""
        values = self.memory.call("getListData", self.key_list)
        self.message = self._build(values)
        self._dispatch(actions, self.message)