"""Runtime configuration for Firefly Forge."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError


DEFAULT_BASE_URL = "https://firefly-api.adobe.io"
DEFAULT_REQUEST_TIMEOUT = 60.0

ENV_BASE_URL = "FIREFLY_BASE_URL"
ENV_TOKEN_SERVICE_URL = "FIREFLY_TOKEN_SERVICE_URL"
ENV_API_KEY = "FIREFLY_API_KEY"
ENV_REQUEST_TIMEOUT = "FIREFLY_REQUEST_TIMEOUT"
REQUIRED_ENV = (ENV_API_KEY, ENV_TOKEN_SERVICE_URL)


@dataclass(frozen=True)
class FireflyConfig:
    base_url: str
    token_service_url: str
    api_key: str
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FireflyConfig":
        env = os.environ if environ is None else environ
        missing = [key for key in REQUIRED_ENV if not (env.get(key) or "").strip()]
        if missing:
            raise ConfigError(f"{', '.join(missing)} must be set for Firefly.")
        raw_timeout = (env.get(ENV_REQUEST_TIMEOUT) or "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError as exc:
            raise ConfigError(f"{ENV_REQUEST_TIMEOUT} must be a number, got {raw_timeout!r}") from exc
        return cls(
            base_url=(env.get(ENV_BASE_URL) or DEFAULT_BASE_URL).strip(),
            token_service_url=env[ENV_TOKEN_SERVICE_URL].strip(),
            api_key=env[ENV_API_KEY].strip(),
            request_timeout=timeout,
        )


def find_dotenv_path(start: Optional[Path] = None) -> Optional[Path]:
    current = (start or Path(__file__)).resolve()
    for parent in (current, *current.parents):
        dotenv_path = parent / ".env"
        if dotenv_path.is_file():
            return dotenv_path
    return None


def load_dotenv_file(start: Optional[Path] = None) -> Optional[Path]:
    dotenv_path = find_dotenv_path(start)
    if dotenv_path is not None:
        load_dotenv(dotenv_path=dotenv_path, override=False)
    return dotenv_path


def load_config(start: Optional[Path] = None) -> FireflyConfig:
    load_dotenv_file(start)
    return FireflyConfig.from_env()
