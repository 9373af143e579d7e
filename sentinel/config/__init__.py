"""
Sentinel configuration: schema, env interpolation and layered loading
"""

from .env import expand_env_placeholders
from .load import LoadedConfig, load_config
from .schema import SentinelConfig, sanitize_config

__all__ = [
    "SentinelConfig",
    "LoadedConfig",
    "load_config",
    "expand_env_placeholders",
    "sanitize_config",
]
