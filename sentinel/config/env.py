"""
Environment placeholder expansion for config values.

Only whole-string placeholders are expanded: "${API_TOKEN}" becomes the value
of API_TOKEN, while "token=${API_TOKEN}" is left untouched.
"""

import re
from typing import Any, Mapping

from sentinel.core.errors import MissingEnvVarError

ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}", re.IGNORECASE)


def expand_env_placeholders(value: Any, env: Mapping[str, str]) -> Any:
    """Recursively substitute ``${VAR}`` strings using the given environment mapping."""
    if isinstance(value, str):
        match = ENV_PATTERN.fullmatch(value)
        if not match:
            return value
        name = match.group(1)
        if name not in env:
            raise MissingEnvVarError(name)
        return env[name]

    if isinstance(value, list):
        return [expand_env_placeholders(item, env) for item in value]

    if isinstance(value, dict):
        return {key: expand_env_placeholders(item, env) for key, item in value.items()}

    return value
