"""
Error types for Sentinel

Configuration and OpenAPI load errors stop a scan before it starts.
Transport errors abort a running scan; nothing catches them below the CLI.
"""

from typing import Iterable, List, Optional


class SentinelError(Exception):
    """Base class for all Sentinel errors."""


class ConfigError(SentinelError):
    """Invalid or incomplete configuration.

    Carries every violation so the operator can fix them in one pass.
    """

    def __init__(self, issues: Iterable[str], header: str = "Invalid config:"):
        self.issues: List[str] = list(issues)
        message = header + "".join(f"\n- {issue}" for issue in self.issues)
        super().__init__(message)


class MissingEnvVarError(ConfigError):
    """A ``${VAR}`` placeholder referenced an unset environment variable."""

    def __init__(self, name: str):
        self.name = name
        SentinelError.__init__(self, f"Missing required environment variable: {name}")
        self.issues = [str(self)]


class SpecLoadError(SentinelError):
    """OpenAPI document could not be fetched, parsed or dereferenced."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class TransportError(SentinelError):
    """Network-level failure (timeout, DNS, refused connection) on a probe."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(message)
        self.method = method
        self.url = url
