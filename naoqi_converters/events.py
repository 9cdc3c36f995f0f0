"""Converters that forward messages produced by robot events."""

from __future__ import annotations

import copy
from typing import Any, Generic, Iterable, Optional, TypeVar

from .base import BaseConverter, MessageAction

T = TypeVar("T")


class AudioEventConverter(BaseConverter):
    """Hands audio buffers received from the robot to the registered callbacks."""

    def __init__(self, name: str, frequency: float, session: Any, **options: Any) -> None:
        super().__init__(name, frequency, session, **options)
        self.message: Optional[Any] = None

    def call_all(self, actions: Iterable[MessageAction], msg: Any) -> None:
        """Keep a copy of ``msg`` and pass it to the callback of every action."""
        self.message = copy.deepcopy(msg)
        self._dispatch(actions, self.message)


class TouchEventConverter(BaseConverter, Generic[T]):
    """Hands touch messages (bumpers, hands, head) to the registered callbacks."""

    def __init__(self, name: str, frequency: float, session: Any, **options: Any) -> None:
        super().__init__(name, frequency, session, **options)
        self.message: Optional[T] = None

    def call_all(self, actions: Iterable[MessageAction], msg: T) -> None:
        """Keep a copy of ``msg`` and pass it to the callback of every action."""
        self.message = copy.deepcopy(msg)
        self._dispatch(actions, self.message)