"""Turn result items into cards and alerts on a ``ResultBoard``."""

from __future__ import annotations

import logging
from typing import Literal, Sequence

from firefly_image_api.core.contracts import (
    Alert,
    ImageCard,
    ReferenceDisplay,
    RenderType,
    ResultItem,
    Severity,
)
from firefly_image_api.core.utils import decode_image_size
from .board import ResultBoard

logger = logging.getLogger(__name__)

CardKind = Literal["url", "inline"]


def inline_image_src(encoded: str) -> str:
    return f"data:image/png;base64,{encoded}"


def render_image_card(item: ResultItem, kind: CardKind = "url") -> ImageCard:
    if kind == "url":
        image = item.image
        asset_id = image.id if image else None
        src = image.presigned_url if image and image.presigned_url else ""
        return ImageCard(src=src, text=f"ACP Asset ID: {asset_id}")
    if kind == "inline":
        encoded = item.base64 or ""
        size = decode_image_size(encoded)
        return ImageCard(
            src=inline_image_src(encoded),
            text=f"Seed: {item.seed}",
            width=size[0] if size else None,
            height=size[1] if size else None,
        )
    raise ValueError(f"Unknown card kind: {kind}")


def render_reference_id(item: ResultItem) -> ReferenceDisplay:
    return ReferenceDisplay(text=f"Image ID: {item.id}")


def render_results(items: Sequence[ResultItem], render_type: RenderType, board: ResultBoard) -> int:
    """Append one element per item to ``board`` and return how many were added."""
    if render_type not in {"image", "base64", "reference"}:
        raise ValueError(f"Unknown render type: {render_type}")
    for item in items:
        if render_type == "image":
            board.append_result(render_image_card(item))
        elif render_type == "base64":
            board.append_result(render_image_card(item, "inline"))
        else:
            board.append_result(render_reference_id(item))
    return len(items)


def show_alert(board: ResultBoard, message: str, severity: Severity = "danger") -> Alert:
    alert = Alert(message=message, severity=severity)
    board.append_alert(alert)
    if severity == "danger":
        logger.error(message)
    elif severity == "warning":
        logger.warning(message)
    else:
        logger.info(message)
    return alert
