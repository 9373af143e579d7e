"""
Test suite for configuration loading
"""

import json

import pytest

from sentinel.config import expand_env_placeholders, load_config
from sentinel.config.load import apply_overrides
from sentinel.config.schema import REDACTED, ScopeConfig, SentinelConfig
from sentinel.core.errors import ConfigError, MissingEnvVarError


def write_config(tmp_path, data, name="sentinel.config.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestEnvExpansion:

    def test_replaces_whole_string_placeholders_recursively(self):
        raw = {"auth": {"bearerToken": "${API_TOKEN}"}, "list": ["${HOST}", "plain"]}
        env = {"API_TOKEN": "abc", "HOST": "h"}

        expanded = expand_env_placeholders(raw, env)

        assert expanded == {"auth": {"bearerToken": "abc"}, "list": ["h", "plain"]}
        assert raw["auth"]["bearerToken"] == "${API_TOKEN}"

    def test_partial_placeholders_untouched(self):
        assert expand_env_placeholders("token=${API_TOKEN}", {}) == "token=${API_TOKEN}"

    def test_non_strings_pass_through(self):
        assert expand_env_placeholders({"n": 3, "b": True, "x": None}, {}) == {"n": 3, "b": True, "x": None}

    def test_missing_variable(self):
        with pytest.raises(MissingEnvVarError) as exc_info:
            expand_env_placeholders({"a": "${NOPE}"}, {})
        assert str(exc_info.value) == "Missing required environment variable: NOPE"


class TestLoadConfig:

    def test_defaults_without_file(self, tmp_path):
        loaded = load_config(base_url="https://api.example.com", env={}, cwd=tmp_path)
        config = loaded.config

        assert config.target.base_url == "https://api.example.com"
        assert config.auth.type == "none"
        assert config.auth.probe_path == "/"
        assert config.suites.headers and config.suites.cors and config.suites.auth
        assert config.suites.injection is False
        assert config.scope.methods == ["get", "head"]
        assert config.scope.max_endpoints == 10
        assert config.active.max_requests_per_suite == 40
        assert config.active.timeout_ms == 8000
        assert config.output.dir == "./sentinel-out"
        assert config.output.write_json and config.output.write_markdown

    def test_cli_url_overrides_file(self, tmp_path):
        write_config(tmp_path, {"target": {"baseUrl": "https://file.example.com"}})
        loaded = load_config(base_url="https://cli.example.com", env={}, cwd=tmp_path)
        assert loaded.config.target.base_url == "https://cli.example.com"

    def test_file_values_and_env(self, tmp_path):
        write_config(tmp_path, {
            "target": {"baseUrl": "https://api.example.com"},
            "auth": {"type": "bearer", "bearerToken": "${API_TOKEN}"},
            "scope": {"methods": ["GET"], "maxEndpoints": 3, "prefer": ["^/health"]},
            "output": {"dir": "./out", "markdown": False},
        })

        loaded = load_config(env={"API_TOKEN": "s3cret"}, cwd=tmp_path)
        config = loaded.config

        assert config.auth.bearer_token == "s3cret"
        assert config.scope.methods == ["get"]
        assert config.scope.max_endpoints == 3
        assert config.output.write_markdown is False
        assert loaded.sanitized["auth"]["bearer_token"] == REDACTED
        assert "s3cret" not in json.dumps(loaded.sanitized)

    def test_yaml_config(self, tmp_path):
        (tmp_path / "sentinel.yaml").write_text(
            "target:\n  baseUrl: https://api.example.com\nsuites:\n  cors: false\n",
            encoding="utf-8",
        )
        loaded = load_config(config_path="sentinel.yaml", env={}, cwd=tmp_path)
        assert loaded.config.suites.cors is False

    def test_invalid_url(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(base_url="not-a-url", env={}, cwd=tmp_path)
        assert "Invalid config" in str(exc_info.value)
        assert any("base_url" in issue or "baseUrl" in issue for issue in exc_info.value.issues)

    def test_missing_base_url(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(env={}, cwd=tmp_path)

    def test_all_issues_reported(self, tmp_path):
        write_config(tmp_path, {
            "target": {"baseUrl": "https://api.example.com"},
            "auth": {"type": "digest"},
            "scope": {"maxEndpoints": 0},
        })
        with pytest.raises(ConfigError) as exc_info:
            load_config(env={}, cwd=tmp_path)
        assert len(exc_info.value.issues) == 2

    def test_missing_env_var_in_file(self, tmp_path):
        write_config(tmp_path, {"target": {"baseUrl": "${TARGET_URL}"}})
        with pytest.raises(MissingEnvVarError):
            load_config(env={}, cwd=tmp_path)

    def test_unreadable_file(self, tmp_path):
        (tmp_path / "sentinel.config.json").write_text("{ not json", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(base_url="https://api.example.com", env={}, cwd=tmp_path)
        assert "Unreadable config file" in str(exc_info.value)

    def test_non_utf8_file(self, tmp_path):
        (tmp_path / "sentinel.config.json").write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ConfigError) as exc_info:
            load_config(base_url="https://api.example.com", env={}, cwd=tmp_path)
        assert "Unreadable config file" in str(exc_info.value)


class TestSchema:

    def test_invalid_regex_rejected(self):
        with pytest.raises(ValueError):
            ScopeConfig(prefer=["(unclosed"])

    def test_unknown_method_rejected(self):
        with pytest.raises(ValueError):
            ScopeConfig(methods=["fetch"])

    def test_snake_case_keys_accepted(self):
        config = SentinelConfig.model_validate({"target": {"base_url": "http://localhost:8080"}})
        assert config.target.base_url == "http://localhost:8080"

    def test_apply_overrides_does_not_mutate(self):
        file_data = {"target": {"base_url": "https://a.example.com"}}
        merged = apply_overrides(file_data, base_url="https://b.example.com", verbose=True)

        assert merged["target"] == {"baseUrl": "https://b.example.com"}
        assert merged["verbose"] is True
        assert file_data == {"target": {"base_url": "https://a.example.com"}}
