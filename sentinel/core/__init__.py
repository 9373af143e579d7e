"""
Sentinel Core Components
Endpoint selection, HTTP sending, scan orchestration and shared models
"""

from .endpoints import select_endpoints
from .engine import SuiteContext, run_scan
from .errors import ConfigError, SentinelError, SpecLoadError, TransportError
from .http_client import HTTPClient, Response
from .model import Endpoint, Finding, LoadedApiSpec, RunMeta, RunResult, Severity

__all__ = [
    "select_endpoints",
    "run_scan",
    "SuiteContext",
    "HTTPClient",
    "Response",
    "Endpoint",
    "Finding",
    "LoadedApiSpec",
    "RunMeta",
    "RunResult",
    "Severity",
    "SentinelError",
    "ConfigError",
    "SpecLoadError",
    "TransportError",
]
