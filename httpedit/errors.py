"""Exception hierarchy shared across the editor, dispatcher and config layers."""

from __future__ import annotations


class HttpEditError(Exception):
    """Base class for errors raised by httpedit."""


class RequestParseError(HttpEditError):
    """Raised when the request buffer cannot be read as ``METHOD URL``."""


class DispatchError(HttpEditError):
    """Raised by a request dispatcher when the HTTP call fails."""


class ConfigError(HttpEditError):
    """Raised when a configuration value cannot be parsed."""
