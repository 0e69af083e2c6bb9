"""Firefly Forge public surface."""

from .api import generative_expand, generative_fill, generative_match, run_operation, text_to_image, upload_image
from .client import RequestDispatcher, TokenClient
from .core import ApiOutcome, FireflyConfig, FormState, UploadFile, load_config
from .render import ResultBoard, TriggerControl

__all__ = [
    "ApiOutcome",
    "FireflyConfig",
    "FormState",
    "RequestDispatcher",
    "ResultBoard",
    "TokenClient",
    "TriggerControl",
    "UploadFile",
    "generative_expand",
    "generative_fill",
    "generative_match",
    "load_config",
    "run_operation",
    "text_to_image",
    "upload_image",
]
