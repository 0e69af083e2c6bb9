"""Exception types raised by Firefly Forge."""

from __future__ import annotations


class FireflyError(RuntimeError):
    pass


class ConfigError(FireflyError):
    pass


class TokenError(FireflyError):
    pass


class ControlBusyError(FireflyError):
    """Raised when a trigger control is entered while a call is still in flight."""
