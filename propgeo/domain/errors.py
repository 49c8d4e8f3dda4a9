"""Typed domain errors for the geocoding service.

Only ValidationError reaches HTTP callers (as a 400). Upstream and parse
failures are raised by the adapters and absorbed by the services into
fallback results.

All errors inherit from PropGeoError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PropGeoError(Exception):
    """Base error for the geocoding domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ValidationError(PropGeoError):
    """Missing or malformed request parameters.

    Attributes:
        parameter: Name of the offending query parameter, if known
    """

    parameter: str = ""


@dataclass
class UpstreamError(PropGeoError):
    """The geocoding service failed or answered with a non-success status.

    Attributes:
        status_code: HTTP status returned upstream, None for transport errors
        query: The query that was being resolved
    """

    status_code: Optional[int] = None
    query: str = ""


@dataclass
class ParseError(PropGeoError):
    """The geocoding service answered with a payload we cannot read."""

    query: str = ""


@dataclass
class ConfigurationError(PropGeoError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
