"""
Layered configuration loading: defaults < config file < CLI overrides.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from sentinel.config.env import expand_env_placeholders
from sentinel.config.schema import SentinelConfig, sanitize_config
from sentinel.core.errors import ConfigError

DEFAULT_CONFIG_FILE = "sentinel.config.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedConfig:
    config: SentinelConfig
    sanitized: Dict[str, Any]


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a JSON or YAML config file; a missing file yields an empty mapping."""
    if not path.exists():
        logger.debug(f"Config file not found, using defaults: {path}")
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError([f"{path}: {e}"], header="Unreadable config file:") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError([f"{path}: top-level value must be an object"])
    return data


def apply_overrides(file_data: Dict[str, Any],
                    base_url: Optional[str] = None,
                    openapi: Optional[str] = None,
                    verbose: Optional[bool] = None) -> Dict[str, Any]:
    """Merge CLI overrides on top of file data without mutating it."""
    merged = dict(file_data)
    raw_target = file_data.get("target")
    target = dict(raw_target) if isinstance(raw_target, dict) else {}

    if base_url:
        target.pop("base_url", None)
        target["baseUrl"] = base_url
    if openapi:
        target["openapi"] = openapi

    merged["target"] = target
    if verbose is not None:
        merged["verbose"] = verbose
    return merged


def format_validation_issues(exc: ValidationError) -> list:
    issues = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        issues.append(f"{location}: {error['msg']}")
    return issues


def load_config(config_path: Optional[str] = None,
                base_url: Optional[str] = None,
                openapi: Optional[str] = None,
                verbose: Optional[bool] = None,
                env: Optional[Mapping[str, str]] = None,
                cwd: Optional[Path] = None) -> LoadedConfig:
    """Load, interpolate and validate configuration.

    Args:
        config_path: Config file path, relative to `cwd`. Defaults to sentinel.config.json
        base_url: CLI override for target.baseUrl
        openapi: CLI override for target.openapi
        verbose: CLI override for verbose
        env: Environment used for ${VAR} placeholders. Defaults to os.environ
        cwd: Directory relative paths are resolved against. Defaults to the process cwd

    Returns:
        LoadedConfig with the typed config and a redacted snapshot for reports

    Raises:
        ConfigError: listing every validation issue, or naming a missing env variable
    """
    base_dir = cwd or Path.cwd()
    path = base_dir / (config_path or DEFAULT_CONFIG_FILE)
    environment = os.environ if env is None else env

    file_data = expand_env_placeholders(read_config_file(path), environment)
    merged = apply_overrides(file_data, base_url=base_url, openapi=openapi, verbose=verbose)

    try:
        config = SentinelConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(format_validation_issues(e)) from e

    return LoadedConfig(config=config, sanitized=sanitize_config(config))
