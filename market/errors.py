"""
Error types raised by the market analysis core.
"""

from __future__ import annotations


class MarketError(Exception):
    """Base class for errors raised by the market package."""


class ConfigurationError(MarketError, ValueError):
    """Invalid construction input: empty phase list, bad durations, bad intervals or taxonomy."""


class PreconditionError(MarketError, RuntimeError):
    """An operation was called before the object was ready for it."""


__all__ = ["MarketError", "ConfigurationError", "PreconditionError"]
