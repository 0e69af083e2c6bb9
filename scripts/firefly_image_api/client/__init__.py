"""HTTP client: token fetch and request dispatch."""

from .dispatcher import RequestDispatcher
from .tokens import TokenClient

__all__ = ["RequestDispatcher", "TokenClient"]
