"""Action handlers for the Firefly operations."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from firefly_image_api.client.dispatcher import RequestBody, RequestDispatcher
from firefly_image_api.core.contracts import ApiOutcome, FormState, Operation
from firefly_image_api.core.payloads import (
    GENERATIVE_EXPAND,
    GENERATIVE_FILL,
    GENERATIVE_MATCH,
    TEXT_TO_IMAGE,
    UPLOAD_IMAGE,
    generative_expand_payload,
    generative_fill_payload,
    generative_match_payload,
    get_operation,
    text_to_image_payload,
)
from firefly_image_api.core.responses import classify_response
from firefly_image_api.core.utils import is_blank
from firefly_image_api.render.board import ResultBoard
from firefly_image_api.render.cards import render_results, show_alert
from firefly_image_api.render.controls import TriggerControl

logger = logging.getLogger(__name__)


def _dispatch(
    operation: Operation,
    body: RequestBody,
    *,
    dispatcher: RequestDispatcher,
    board: ResultBoard,
    control: Optional[TriggerControl],
) -> Optional[ApiOutcome]:
    payload = dispatcher.request(operation.endpoint, body, operation.mode, control=control)
    if payload is None:
        return None
    outcome = classify_response(payload, operation)
    if outcome.ok:
        count = render_results(outcome.items, operation.render_type, board)
        logger.info("%s rendered %d result(s)", operation.label, count)
    elif outcome.kind == "api_error":
        show_alert(board, f"{operation.label} ERROR - {outcome.error_code}: {outcome.message}", "danger")
    else:
        # Unrecognised bodies are logged only; nothing is rendered.
        logger.warning("%s returned an unrecognised response: %r", operation.label, outcome.raw)
    return outcome


def text_to_image(
    form: FormState,
    *,
    dispatcher: RequestDispatcher,
    board: ResultBoard,
    control: Optional[TriggerControl] = None,
) -> Optional[ApiOutcome]:
    if is_blank(form.prompt):
        show_alert(board, "PROMPT ERROR: You must provide a prompt", "danger")
        return None
    body = text_to_image_payload(form.prompt)
    return _dispatch(TEXT_TO_IMAGE, body, dispatcher=dispatcher, board=board, control=control)


def generative_match(
    form: FormState,
    *,
    dispatcher: RequestDispatcher,
    board: ResultBoard,
    control: Optional[TriggerControl] = None,
    seed_source: Optional[Callable[[], float]] = None,
) -> Optional[ApiOutcome]:
    if is_blank(form.image_id) or is_blank(form.prompt):
        show_alert(board, "GENERATIVE MATCH ERROR: You must provide an asset ID and a prompt!", "danger")
        return None
    body = generative_match_payload(form.prompt, form.image_id, seed_source=seed_source)
    return _dispatch(GENERATIVE_MATCH, body, dispatcher=dispatcher, board=board, control=control)


def generative_expand(
    form: FormState,
    *,
    dispatcher: RequestDispatcher,
    board: ResultBoard,
    control: Optional[TriggerControl] = None,
) -> Optional[ApiOutcome]:
    if is_blank(form.image_id) or is_blank(form.prompt):
        show_alert(board, "GENERATIVE EXPAND ERROR: You must provide an asset ID and a prompt!", "danger")
        return None
    body = generative_expand_payload(form.prompt, form.image_id)
    return _dispatch(GENERATIVE_EXPAND, body, dispatcher=dispatcher, board=board, control=control)


def generative_fill(
    form: FormState,
    *,
    dispatcher: RequestDispatcher,
    board: ResultBoard,
    control: Optional[TriggerControl] = None,
) -> Optional[ApiOutcome]:
    if is_blank(form.mask_id) or is_blank(form.image_id) or is_blank(form.prompt):
        show_alert(board, "GENERATIVE FILL ERROR: You must provide a mask ID, asset ID and a prompt!", "danger")
        return None
    body = generative_fill_payload(form.prompt, form.image_id, form.mask_id)
    return _dispatch(GENERATIVE_FILL, body, dispatcher=dispatcher, board=board, control=control)


def upload_image(
    form: FormState,
    *,
    dispatcher: RequestDispatcher,
    board: ResultBoard,
    control: Optional[TriggerControl] = None,
) -> Optional[ApiOutcome]:
    if form.file is None:
        show_alert(board, "FILE UPLOAD ERROR: select a file to upload", "danger")
        return None
    return _dispatch(UPLOAD_IMAGE, form.file, dispatcher=dispatcher, board=board, control=control)


HANDLERS: Dict[str, Callable[..., Optional[ApiOutcome]]] = {
    TEXT_TO_IMAGE.name: text_to_image,
    GENERATIVE_MATCH.name: generative_match,
    GENERATIVE_EXPAND.name: generative_expand,
    GENERATIVE_FILL.name: generative_fill,
    UPLOAD_IMAGE.name: upload_image,
}


def run_operation(name: str, form: FormState, **kwargs: Any) -> Optional[ApiOutcome]:
    operation = get_operation(name)
    return HANDLERS[operation.name](form, **kwargs)
