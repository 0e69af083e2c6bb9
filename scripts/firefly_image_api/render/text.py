"""Plain-text rendering of a ``ResultBoard`` for the terminal."""

from __future__ import annotations

from typing import List

from firefly_image_api.core.contracts import ImageCard
from .board import ResultBoard

_SEVERITY_CODES = {
    "danger": "31",
    "warning": "33",
    "success": "32",
    "info": "36",
}

_MAX_SRC = 72


def _style(text: str, code: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"\033[{code}m{text}\033[0m"


def _shorten(value: str, limit: int = _MAX_SRC) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 3] + "..."


def format_board(board: ResultBoard, color: bool = False) -> List[str]:
    lines: List[str] = []
    for alert in board.alerts:
        tag = _style(f"[{alert.severity}]", _SEVERITY_CODES.get(alert.severity, "0"), color)
        lines.append(f"{tag} {alert.message}")
    for element in board.results:
        if isinstance(element, ImageCard):
            line = f"- {element.text}"
            if element.width and element.height:
                line += f" ({element.width}x{element.height})"
            lines.append(line)
            if element.src:
                lines.append(f"  {_shorten(element.src)}")
        else:
            lines.append(_style(element.text, "1", color))
    return lines
