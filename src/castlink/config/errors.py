"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A ``CASTLINK_*`` setting holds a value castlink cannot use."""
