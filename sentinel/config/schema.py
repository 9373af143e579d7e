"""
Configuration schema for Sentinel

Every section is fully defaulted so a validated SentinelConfig never has
missing fields. Keys are accepted in camelCase (as written in
sentinel.config.json) or snake_case.
"""

import re
from typing import Any, Dict, List, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

AuthType = Literal["none", "bearer", "basic", "apiKey"]
HttpMethod = Literal["get", "head", "post", "put", "patch", "delete", "options"]

REDACTED = "***"
SECRET_AUTH_FIELDS = ("bearer_token", "basic_pass", "api_key_value")


class _Section(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TargetConfig(_Section):
    base_url: str
    openapi: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("must be an absolute http(s) URL")
        return value


class AuthConfig(_Section):
    type: AuthType = "none"
    bearer_token: Optional[str] = None
    basic_user: Optional[str] = None
    basic_pass: Optional[str] = None
    api_key_header: Optional[str] = None
    api_key_value: Optional[str] = None
    # Should point at an endpoint that requires auth; "/" is often public
    probe_path: str = "/"
    compare_unauthed: bool = True


class SuitesConfig(_Section):
    headers: bool = True
    cors: bool = True
    auth: bool = True
    ratelimit: bool = True
    injection: bool = False


class ScopeConfig(_Section):
    enabled: bool = True
    methods: List[HttpMethod] = Field(default_factory=lambda: ["get", "head"])
    max_endpoints: int = Field(10, ge=1, le=500)
    include_paths: List[str] = Field(default_factory=list)
    exclude_paths: List[str] = Field(default_factory=list)
    prefer: List[str] = Field(default_factory=list)
    # Reserved for randomized sampling; selection is a deterministic sort
    seed: int = 0

    @field_validator("methods", mode="before")
    @classmethod
    def _lowercase_methods(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [m.lower() if isinstance(m, str) else m for m in value]
        return value

    @field_validator("include_paths", "exclude_paths", "prefer")
    @classmethod
    def _compilable(cls, patterns: List[str]) -> List[str]:
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid regular expression {pattern!r}: {e}")
        return patterns


class ActiveConfig(_Section):
    enabled: bool = True
    max_requests_per_suite: int = Field(40, ge=1, le=500)
    timeout_ms: int = Field(8000, ge=100, le=60000)


class OutputConfig(_Section):
    dir: str = "./sentinel-out"
    write_json: bool = Field(True, alias="json")
    write_markdown: bool = Field(True, alias="markdown")


class SentinelConfig(_Section):
    target: TargetConfig
    auth: AuthConfig = Field(default_factory=AuthConfig)
    suites: SuitesConfig = Field(default_factory=SuitesConfig)
    scope: ScopeConfig = Field(default_factory=ScopeConfig)
    active: ActiveConfig = Field(default_factory=ActiveConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    verbose: bool = False


def sanitize_config(config: SentinelConfig) -> Dict[str, Any]:
    """Return a JSON-ready snapshot of the config with credentials redacted."""
    data = config.model_dump(mode="json")
    auth = data.get("auth", {})
    for key in SECRET_AUTH_FIELDS:
        if auth.get(key):
            auth[key] = REDACTED
    return data
