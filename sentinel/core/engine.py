"""
Sentinel Scan Engine
Runs suites against a shared context and persists the reports

The engine does not interpret, filter or retry anything. Suites run one at
a time and never interleave. Any exception from a suite aborts the scan
before reports are written.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from .model import ROOT_ENDPOINT, Endpoint, Finding, LoadedApiSpec, RunMeta, RunResult

if TYPE_CHECKING:
    from sentinel.config.schema import SentinelConfig
    from sentinel.suites.base import Suite
    from sentinel.utils.report import Reporter

    from .http_client import HTTPClient

REPORT_BASENAME = "sentinel-report"


@dataclass(frozen=True)
class SuiteContext:
    """Read-only environment handed to every suite invocation."""

    http: "HTTPClient"
    config: "SentinelConfig"
    logger: logging.Logger
    selected_endpoints: Tuple[Endpoint, ...] = ()
    api: Optional[LoadedApiSpec] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected_endpoints", tuple(self.selected_endpoints or ()))

    @property
    def endpoints(self) -> List[Endpoint]:
        """Selected endpoints, or GET / when nothing was selected."""
        return list(self.selected_endpoints) or [ROOT_ENDPOINT]


def report_filename(reporter_name: str) -> str:
    extension = "md" if reporter_name == "markdown" else reporter_name
    return f"{REPORT_BASENAME}.{extension}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def run_scan(suites: Sequence["Suite"],
                   reporters: Sequence["Reporter"],
                   context: SuiteContext,
                   sanitized_config: Dict[str, Any],
                   output_dir: str,
                   meta: RunMeta) -> RunResult:
    """Execute suites sequentially, aggregate findings and write one report per reporter.

    Returns:
        The immutable RunResult; the caller derives the exit code from it
    """
    logger = context.logger
    started = _utc_now()
    findings: List[Finding] = []

    for suite in suites:
        logger.info(f"Running suite: {suite.name}")
        suite_findings = await suite.run(context)
        logger.debug(f"Suite {suite.name} returned {len(suite_findings)} finding(s)")
        findings.extend(suite_findings)

    finished = _utc_now()
    duration_ms = int((finished - started).total_seconds() * 1000)

    result = RunResult(
        meta=meta.finish(finished_at=finished.isoformat(), duration_ms=duration_ms),
        config=sanitized_config,
        findings=tuple(findings),
    )

    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    for reporter in reporters:
        rendered = reporter.render(result)
        report_path = out_path / report_filename(reporter.name)
        report_path.write_text(rendered, encoding="utf-8")
        logger.info(f"Wrote report: {report_path}")

    return result
