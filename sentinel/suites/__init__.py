"""
Sentinel security suites
Each suite is an independent, stateless check run once per scan
"""

from .auth import AuthSuite
from .base import Suite
from .cors import CorsSuite
from .headers import HeadersSuite
from .ratelimit import RateLimitSuite

__all__ = [
    "Suite",
    "HeadersSuite",
    "CorsSuite",
    "AuthSuite",
    "RateLimitSuite",
]
