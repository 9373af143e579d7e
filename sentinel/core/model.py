"""
Core models for Sentinel

Defines the value objects shared across the selector, suites, engine and reporters.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

HTTP_METHODS = ("get", "head", "post", "put", "patch", "delete", "options")


class Severity(str, Enum):
    """Finding severity, ordered info < low < medium < high < critical."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER.index(self)

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        if isinstance(value, cls):
            return value
        sev = str(value or "").strip().lower()
        if sev == "information":
            sev = "info"
        return cls(sev)


SEVERITY_ORDER = (
    Severity.INFO,
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
    Severity.CRITICAL,
)


@dataclass(frozen=True)
class Endpoint:
    """One operation to probe: lowercase HTTP method plus (possibly templated) path."""

    method: str
    path: str

    @property
    def key(self) -> str:
        return f"{self.method} {self.path}"

    def to_dict(self) -> Dict[str, str]:
        return {"method": self.method, "path": self.path}


ROOT_ENDPOINT = Endpoint("get", "/")


@dataclass(frozen=True)
class LoadedApiSpec:
    """A dereferenced OpenAPI document plus the operations extracted from it."""

    source: str
    spec: Mapping[str, Any]
    endpoints: Tuple[Endpoint, ...] = ()


@dataclass(frozen=True)
class Location:
    method: Optional[str] = None
    path: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Finding:
    """Standard Finding object emitted by suites.

    Findings are created once by a single suite invocation and never mutated.
    `id` is namespaced by suite, e.g. ``headers.missing_hsts``.
    """

    id: str
    title: str
    severity: Severity
    description: str
    suite: str
    remediation: str = ""
    evidence: Dict[str, Any] = field(default_factory=dict)
    location: Optional[Location] = None
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept plain strings ("HIGH", "low") for severity
        object.__setattr__(self, "severity", Severity.parse(self.severity))
        object.__setattr__(self, "evidence", dict(self.evidence or {}))
        object.__setattr__(self, "tags", tuple(self.tags or ()))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True)
class RunMeta:
    started_at: str
    target_base_url: str
    version: str
    finished_at: Optional[str] = None
    duration_ms: Optional[int] = None

    def finish(self, finished_at: str, duration_ms: int) -> "RunMeta":
        return replace(self, finished_at=finished_at, duration_ms=duration_ms)


@dataclass(frozen=True)
class RunResult:
    """Aggregate output of one scan.

    `config` is a sanitized snapshot (secrets redacted by the caller) and
    `findings` keeps suite execution order, then emission order.
    """

    meta: RunMeta
    config: Dict[str, Any]
    findings: Tuple[Finding, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "findings", tuple(self.findings))

    def severity_counts(self) -> Dict[str, int]:
        return count_by_severity(self.findings)

    def has_severity_at_least(self, threshold: Severity) -> bool:
        return any(f.severity.rank >= threshold.rank for f in self.findings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": asdict(self.meta),
            "config": self.config,
            "findings": [f.to_dict() for f in self.findings],
        }


def count_by_severity(findings: Iterable[Finding]) -> Dict[str, int]:
    """Count findings per severity, most severe first."""
    counts = {sev.value: 0 for sev in reversed(SEVERITY_ORDER)}
    for finding in findings:
        counts[finding.severity.value] += 1
    return counts
