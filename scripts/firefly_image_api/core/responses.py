"""Classify parsed Firefly responses into tagged outcomes."""

from __future__ import annotations

from typing import Any, Mapping

from .contracts import ApiOutcome, Operation, ResultItem


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def classify_response(payload: Any, operation: Operation) -> ApiOutcome:
    """Turn a parsed JSON body into an ``ApiOutcome`` for ``operation``.

    The result list lives under ``operation.result_field``. Uploads report
    ``reference`` because their items only carry the new asset id. A body with
    ``error_code`` or ``message`` and no result list is an ``api_error``;
    anything else is ``malformed``.
    """
    if not isinstance(payload, Mapping):
        return ApiOutcome(kind="malformed", raw=payload)

    results = payload.get(operation.result_field)
    if isinstance(results, list) and all(isinstance(item, Mapping) for item in results):
        items = tuple(ResultItem.from_payload(item) for item in results)
        if operation.render_type == "reference":
            kind = "reference"
        else:
            kind = operation.result_field
        return ApiOutcome(kind=kind, items=items, raw=payload)

    if "error_code" in payload or "message" in payload:
        return ApiOutcome(
            kind="api_error",
            error_code=_as_text(payload.get("error_code")),
            message=_as_text(payload.get("message")),
            raw=payload,
        )

    return ApiOutcome(kind="malformed", raw=payload)
