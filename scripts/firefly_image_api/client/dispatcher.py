"""Outbound request dispatcher for the Firefly API."""

from __future__ import annotations

import contextlib
import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

import requests

from firefly_image_api.core.config import FireflyConfig
from firefly_image_api.core.contracts import RequestMode, UploadFile
from firefly_image_api.core.errors import ControlBusyError, TokenError
from firefly_image_api.render.board import ResultBoard
from firefly_image_api.render.cards import show_alert
from firefly_image_api.render.controls import TriggerControl
from .tokens import TokenClient

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
BASE64_ACCEPT = "application/json+base64"
BASE64_MIMETYPE = "image/png"

RequestBody = Union[Mapping[str, Any], UploadFile]


class RequestDispatcher:
    def __init__(
        self,
        config: FireflyConfig,
        board: ResultBoard,
        session: Optional[Any] = None,
        tokens: Optional[TokenClient] = None,
    ) -> None:
        self.config = config
        self.board = board
        self.session = session or requests.Session()
        self.tokens = tokens or TokenClient(
            config.token_service_url,
            session=self.session,
            timeout=config.request_timeout,
        )

    def build_headers(self, mode: RequestMode, body: Optional[RequestBody] = None) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.tokens.fetch()}",
            "x-api-key": self.config.api_key,
            "Content-Type": JSON_CONTENT_TYPE,
        }
        if mode == "file":
            if not isinstance(body, UploadFile):
                raise ValueError("file mode requires an UploadFile body")
            headers["Content-Type"] = body.media_type
        elif mode == "base64":
            headers["Accept"] = BASE64_ACCEPT
            headers["x-accept-mimetype"] = BASE64_MIMETYPE
        elif mode != "reference":
            raise ValueError(f"Unsupported request mode: {mode}")
        return headers

    @staticmethod
    def _encode_body(mode: RequestMode, body: RequestBody) -> Union[bytes, str]:
        if mode == "file":
            if not isinstance(body, UploadFile):
                raise ValueError("file mode requires an UploadFile body")
            return body.data
        return json.dumps(body)

    def request(
        self,
        endpoint: str,
        body: RequestBody,
        mode: RequestMode = "reference",
        control: Optional[TriggerControl] = None,
    ) -> Optional[Any]:
        """POST ``body`` to ``endpoint`` and return the parsed JSON payload.

        Results and alerts on the board are cleared first. Token and transport
        failures are reported as alerts and return ``None``. The control, when
        given, stays busy for the duration of the call only.
        """
        if mode not in {"reference", "file", "base64"}:
            raise ValueError(f"Unsupported request mode: {mode}")
        self.board.clear()
        guard = control.busy() if control is not None else contextlib.nullcontext()
        try:
            with guard:
                return self._send(endpoint, body, mode)
        except ControlBusyError as exc:
            show_alert(self.board, f"API REQUEST ERROR: a request is already in progress ({exc})", "danger")
            return None

    def _send(self, endpoint: str, body: RequestBody, mode: RequestMode) -> Optional[Any]:
        try:
            headers = self.build_headers(mode, body)
        except TokenError as exc:
            show_alert(self.board, f"GET TOKEN ERROR: Error while requesting the API token, {exc}", "danger")
            return None

        url = self.config.url_for(endpoint)
        logger.debug("POST %s (mode=%s)", url, mode)
        try:
            response = self.session.post(
                url,
                headers=headers,
                data=self._encode_body(mode, body),
                timeout=self.config.request_timeout,
            )
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            show_alert(self.board, f"API REQUEST ERROR: Unable to execute API call, {exc}", "danger")
            return None
        logger.debug("Response %s from %s", getattr(response, "status_code", "?"), url)
        return payload
