"""Core contracts and helpers."""

from .config import FireflyConfig, load_config
from .contracts import (
    Alert,
    ApiOutcome,
    FormState,
    ImageCard,
    ImageReference,
    Operation,
    ReferenceDisplay,
    ResultItem,
    UploadFile,
)
from .errors import ConfigError, ControlBusyError, FireflyError, TokenError

__all__ = [
    "Alert",
    "ApiOutcome",
    "ConfigError",
    "ControlBusyError",
    "FireflyConfig",
    "FireflyError",
    "FormState",
    "ImageCard",
    "ImageReference",
    "Operation",
    "ReferenceDisplay",
    "ResultItem",
    "TokenError",
    "UploadFile",
    "load_config",
]
