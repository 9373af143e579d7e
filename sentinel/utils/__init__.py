"""
Sentinel Utilities
Logging, OpenAPI loading and report rendering
"""

from .logger import setup_logger
from .report import JsonReporter, MarkdownReporter, Reporter, build_reporters

__all__ = [
    "setup_logger",
    "Reporter",
    "JsonReporter",
    "MarkdownReporter",
    "build_reporters",
]
