"""Result rendering: board, cards, trigger control and page output."""

from .board import ResultBoard
from .cards import render_image_card, render_reference_id, render_results, show_alert
from .controls import TriggerControl

__all__ = [
    "ResultBoard",
    "TriggerControl",
    "render_image_card",
    "render_reference_id",
    "render_results",
    "show_alert",
]
