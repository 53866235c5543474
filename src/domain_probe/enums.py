"""
Enumeration types for the domain probe system.

These enums provide type-safe constants for probe methods, probe execution
states, error codes, and logging levels.
"""

from enum import Enum


class ProbeMethod(Enum):
    """The three independent availability signals."""

    DNS = "dns"
    WHOIS = "whois"
    HTTP = "http"


class ProbeState(Enum):
    """Execution state of a single probe."""

    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"
    ERRORED = "errored"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}


class RequestErrorCode(Enum):
    """Error codes for rejected check requests."""

    INVALID_BODY = "invalid_body"
    MISSING_DOMAINS = "missing_domains"
    INVALID_DOMAINS = "invalid_domains"


class ConfigErrorCode(Enum):
    """Error codes for configuration problems."""

    INVALID_TIMEOUT = "invalid_timeout"
    INVALID_PORT = "invalid_port"
    INVALID_LOG_LEVEL = "invalid_log_level"
    INVALID_LOG_FORMAT = "invalid_log_format"
