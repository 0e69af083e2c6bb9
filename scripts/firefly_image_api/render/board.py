"""Results container and alert region."""

from __future__ import annotations

from typing import List

from firefly_image_api.core.contracts import Alert, RenderedElement


class ResultBoard:
    def __init__(self) -> None:
        self.results: List[RenderedElement] = []
        self.alerts: List[Alert] = []

    def clear(self) -> None:
        self.results.clear()
        self.alerts.clear()

    def append_result(self, element: RenderedElement) -> None:
        self.results.append(element)

    def append_alert(self, alert: Alert) -> None:
        self.alerts.append(alert)

    @property
    def is_empty(self) -> bool:
        return not self.results and not self.alerts
