import pathlib
import sys
from typing import Any, List, Optional

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT / "scripts") not in sys.path:
    sys.path.insert(0, str(ROOT / "scripts"))

import requests

from firefly_image_api.core.config import FireflyConfig


TEST_CONFIG = FireflyConfig(
    base_url="https://firefly.test",
    token_service_url="https://tokens.test/token",
    api_key="test-api-key",
    request_timeout=5.0,
)

# 1x1 transparent PNG.
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.error = error

    def json(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.payload


class FakeSession:
    """In-memory stand-in for ``requests.Session``."""

    def __init__(
        self,
        post_response: Any = None,
        token: Optional[str] = "token-123",
        get_error: Optional[Exception] = None,
        post_error: Optional[Exception] = None,
    ) -> None:
        self.post_response = post_response if isinstance(post_response, FakeResponse) else FakeResponse(post_response)
        self.token = token
        self.get_error = get_error
        self.post_error = post_error
        self.gets: List[dict] = []
        self.posts: List[dict] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.gets.append({"url": url, **kwargs})
        if self.get_error is not None:
            raise self.get_error
        if self.token is None:
            return FakeResponse({})
        return FakeResponse({"access_token": self.token})

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        if self.post_error is not None:
            raise self.post_error
        return self.post_response


def connection_error(message: str = "connection refused") -> Exception:
    return requests.ConnectionError(message)
