"""Trigger control with an in-flight guard."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Literal

from firefly_image_api.core.errors import ControlBusyError


ControlState = Literal["busy", "idle"]
ControlListener = Callable[[ControlState, "TriggerControl"], None]

BUSY_LABEL = "Working..."


class TriggerControl:
    def __init__(self, label: str = "Generate") -> None:
        self.label = label
        self.enabled = True
        self._guard = threading.Lock()
        self._listeners: List[ControlListener] = []

    def add_listener(self, listener: ControlListener) -> None:
        self._listeners.append(listener)

    @property
    def in_flight(self) -> bool:
        return self._guard.locked()

    def _notify(self, state: ControlState) -> None:
        for listener in list(self._listeners):
            listener(state, self)

    @contextmanager
    def busy(self) -> Iterator["TriggerControl"]:
        if not self._guard.acquire(blocking=False):
            raise ControlBusyError(f"'{self.label}' already has a request in progress.")
        original_label = self.label
        try:
            self.enabled = False
            self.label = BUSY_LABEL
            self._notify("busy")
            yield self
        finally:
            self.label = original_label
            self.enabled = True
            self._guard.release()
            self._notify("idle")
