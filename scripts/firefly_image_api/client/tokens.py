"""Access-token client for the token-issuing service."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from firefly_image_api.core.config import DEFAULT_REQUEST_TIMEOUT
from firefly_image_api.core.errors import TokenError

logger = logging.getLogger(__name__)


class TokenClient:
    """Fetch a fresh access token per call; tokens are never cached."""

    def __init__(
        self,
        url: str,
        session: Optional[Any] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self) -> str:
        if not self.url:
            raise TokenError("token service URL is not configured")
        logger.debug("Requesting access token from %s", self.url)
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            payload = response.json()
        except requests.RequestException as exc:
            raise TokenError(str(exc)) from exc
        except ValueError as exc:
            raise TokenError(f"token service returned a non-JSON body ({exc})") from exc
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise TokenError("token service response has no access_token")
        return str(token)
