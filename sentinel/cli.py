#!/usr/bin/env python3
"""
Sentinel CLI Interface
Command-line interface for the Sentinel API security scanner
"""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional, Tuple

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sentinel import ETHICAL_NOTICE, __version__
from sentinel.config import load_config
from sentinel.core.endpoints import select_endpoints
from sentinel.core.engine import SuiteContext, run_scan
from sentinel.core.errors import ConfigError, SentinelError, SpecLoadError
from sentinel.core.http_client import HTTPClient, build_auth_header
from sentinel.core.model import RunMeta, RunResult, Severity
from sentinel.core.suite_loader import available_suites, build_suites
from sentinel.utils.logger import setup_logger
from sentinel.utils.openapi_loader import load_openapi
from sentinel.utils.report import build_reporters

app = typer.Typer(
    name="sentinel",
    help="Sentinel: API security scanner (passive + light active checks)",
    no_args_is_help=True
)

console = Console()

USER_AGENT = f"sentinel/{__version__}"

SEVERITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
    "info": "dim",
}


def exit_code_for(result: RunResult) -> int:
    """2 when anything high or critical was found, otherwise 0."""
    return 2 if result.has_severity_at_least(Severity.HIGH) else 0


async def scan_command(url: str,
                       config: Optional[str] = None,
                       openapi: Optional[str] = None,
                       out: Optional[str] = None,
                       verbose: Optional[bool] = None,
                       env: Optional[Mapping[str, str]] = None,
                       transport: Optional[httpx.AsyncBaseTransport] = None,
                       cwd: Optional[Path] = None) -> Tuple[int, str, RunResult]:
    """Run one scan end to end.

    Returns:
        (exit_code, output_dir, result)

    Raises:
        ConfigError, SpecLoadError, TransportError: propagated to the caller
    """
    loaded = load_config(
        config_path=config,
        base_url=url,
        openapi=openapi,
        verbose=verbose,
        env=env,
        cwd=cwd,
    )
    cfg = loaded.config
    logger = setup_logger(2 if cfg.verbose else 1)

    api = None
    if cfg.target.openapi:
        api = await load_openapi(cfg.target.openapi, transport=transport)

    selected = select_endpoints(cfg.scope, api)
    logger.debug(f"Selected {len(selected)} endpoint(s): {', '.join(e.key for e in selected)}")

    output_dir = out or cfg.output.dir
    meta = RunMeta(
        started_at=datetime.now(timezone.utc).isoformat(),
        target_base_url=cfg.target.base_url,
        version=__version__,
    )

    async with HTTPClient(
        base_url=cfg.target.base_url,
        timeout_ms=cfg.active.timeout_ms,
        default_headers={"user-agent": USER_AGENT, "accept": "application/json,*/*"},
        auth_header=build_auth_header(cfg.auth),
        transport=transport,
    ) as http:
        context = SuiteContext(
            http=http,
            config=cfg,
            logger=logger,
            selected_endpoints=tuple(selected),
            api=api,
        )
        result = await run_scan(
            suites=build_suites(cfg.suites.model_dump(), active_enabled=cfg.active.enabled),
            reporters=build_reporters(cfg.output),
            context=context,
            sanitized_config=loaded.sanitized,
            output_dir=output_dir,
            meta=meta,
        )

    return exit_code_for(result), output_dir, result


def display_summary(result: RunResult, output_dir: str) -> None:
    """Print a findings table and the severity totals."""
    if result.findings:
        table = Table(title="Findings", show_lines=False)
        table.add_column("Severity")
        table.add_column("Suite", style="cyan")
        table.add_column("ID")
        table.add_column("Title")
        for finding in result.findings:
            severity = finding.severity.value
            table.add_row(
                f"[{SEVERITY_STYLES.get(severity, '')}]{severity}[/]",
                finding.suite,
                escape(finding.id),
                escape(finding.title),
            )
        console.print(table)
    else:
        console.print("[green]No findings.[/green]")

    totals = ", ".join(f"{sev}: {count}" for sev, count in result.severity_counts().items())
    console.print(f"Totals: {totals}")
    console.print(f"Reports saved to: {output_dir}")


@app.command()
def scan(
    url: str = typer.Option(
        ..., "--url", "-u",
        help="Target base URL (e.g., https://api.example.com)"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c",
        help="Config file path (JSON or YAML, default: sentinel.config.json)"
    ),
    openapi: Optional[str] = typer.Option(
        None, "--openapi",
        help="OpenAPI spec file path or URL"
    ),
    out: Optional[str] = typer.Option(
        None, "--out", "-o",
        help="Output directory for reports (overrides output.dir)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging"
    )
):
    """Run a security scan against the target API."""
    console.print(Panel(ETHICAL_NOTICE.strip(), title="Sentinel", border_style="red"))

    try:
        code, output_dir, result = asyncio.run(
            scan_command(url, config=config, openapi=openapi, out=out, verbose=verbose or None)
        )
    except ConfigError as e:
        console.print(str(e), style="red", markup=False, highlight=False)
        raise typer.Exit(1)
    except SpecLoadError as e:
        console.print(f"OpenAPI error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("[yellow]Scan interrupted by user[/yellow]")
        raise typer.Exit(1)
    except SentinelError as e:
        console.print(f"Scan failed: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1)
    except Exception as e:
        logging.getLogger("sentinel").exception(f"Unexpected error: {e}")
        console.print(f"Scan failed: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1)

    display_summary(result, output_dir)
    raise typer.Exit(code)


@app.command("list-suites")
def list_suites():
    """List all available check suites."""
    console.print("[cyan]Available Suites:[/cyan]\n")
    for suite in available_suites():
        kind = "active" if suite["active"] else "passive"
        console.print(f"  {suite['name']} - {suite['description']} [{kind}]", markup=False)


@app.command()
def version():
    """Show version information."""
    console.print(f"Sentinel v{__version__}")


if __name__ == "__main__":
    app()
