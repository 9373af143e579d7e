"""
Report Generation for Sentinel
Renders a RunResult as JSON or Markdown text

Reporters only render; the engine decides file names and writes them.
"""

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from jinja2 import Template
from tabulate import tabulate

from sentinel.core.model import RunResult

if TYPE_CHECKING:
    from sentinel.config.schema import OutputConfig


MARKDOWN_TEMPLATE = """# Sentinel Report

- Target: `{{ meta.target_base_url }}`
- Started: {{ meta.started_at }}
{% if meta.finished_at %}
- Finished: {{ meta.finished_at }}
{% endif %}
{% if meta.duration_ms is not none %}
- Duration: {{ meta.duration_ms }}ms
{% endif %}

## Summary

{{ summary_table }}

## Findings

{{ findings_table }}
"""


class Reporter(ABC):
    """Renders a run result to text. `name` also selects the report file extension."""

    name: str = ""

    @abstractmethod
    def render(self, result: RunResult) -> str:
        """Render the result."""


class JsonReporter(Reporter):
    """Lossless JSON dump of the run result."""

    name = "json"

    def render(self, result: RunResult) -> str:
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str)


class MarkdownReporter(Reporter):
    """Human-readable summary: run metadata, severity counts and a findings table."""

    name = "markdown"

    def __init__(self):
        self._template = Template(MARKDOWN_TEMPLATE, trim_blocks=True, keep_trailing_newline=True)

    def render(self, result: RunResult) -> str:
        summary_table = tabulate(
            [[severity.capitalize(), count] for severity, count in result.severity_counts().items()],
            headers=["Severity", "Count"],
            tablefmt="pipe",
        )

        # Header row is kept even when there are no findings
        findings_table = tabulate(
            [[f.severity.value, f.suite, escape_pipes(f.title)] for f in result.findings],
            headers=["Severity", "Suite", "Title"],
            tablefmt="pipe",
            disable_numparse=True,
        )

        return self._template.render(
            meta=result.meta,
            summary_table=summary_table,
            findings_table=findings_table,
        )


def escape_pipes(text: str) -> str:
    return text.replace("|", "\\|")


def build_reporters(output: "OutputConfig") -> List[Reporter]:
    """Reporters enabled in the output config, JSON first."""
    reporters: List[Reporter] = []
    if output.write_json:
        reporters.append(JsonReporter())
    if output.write_markdown:
        reporters.append(MarkdownReporter())
    return reporters
