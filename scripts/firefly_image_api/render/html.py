"""Render a ``ResultBoard`` as a Bootstrap page."""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import List

from firefly_image_api.core.contracts import Alert, ImageCard, RenderedElement
from .board import ResultBoard

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css"
BOOTSTRAP_JS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/js/bootstrap.bundle.min.js"


def render_alert(alert: Alert) -> str:
    return "".join(
        [
            f'<div class="alert alert-{escape(alert.severity)} alert-dismissible" role="alert">',
            f"   <div>{escape(alert.message)}</div>",
            '   <button type="button" class="btn-close" data-bs-dismiss="alert" aria-label="Close"></button>',
            "</div>",
        ]
    )


def render_element(element: RenderedElement) -> str:
    if isinstance(element, ImageCard):
        size = ""
        if element.width and element.height:
            size = f'<p class="card-text"><small class="text-body-secondary">{element.width} x {element.height}</small></p>'
        return (
            '<div class="col"><div class="card">'
            f'<img class="card-img-top" src="{escape(element.src, quote=True)}">'
            f'<div class="card-body"><p class="card-text">{escape(element.text)}</p>{size}</div>'
            "</div></div>"
        )
    return f'<div class="col"><h1 class="display-6">{escape(element.text)}</h1></div>'


def render_page(board: ResultBoard, title: str = "Firefly Forge") -> str:
    lines: List[str] = [
        "<!doctype html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1">',
        f"<title>{escape(title)}</title>",
        f'<link rel="stylesheet" href="{BOOTSTRAP_CSS}">',
        "</head>",
        "<body>",
        '<main class="container py-4">',
        f"<h1>{escape(title)}</h1>",
        '<div id="alert-anchor">',
    ]
    lines.extend(f"<div>{render_alert(alert)}</div>" for alert in board.alerts)
    lines.append("</div>")
    lines.append('<div id="results" class="row row-cols-1 row-cols-md-2 g-4">')
    lines.extend(render_element(element) for element in board.results)
    lines.extend(
        [
            "</div>",
            "</main>",
            f'<script src="{BOOTSTRAP_JS}"></script>',
            "</body>",
            "</html>",
        ]
    )
    return "\n".join(lines) + "\n"


def write_page(path: Path, board: ResultBoard, title: str = "Firefly Forge") -> Path:
    path = Path(path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_page(board, title=title), encoding="utf-8")
    return path
