"""Typer CLI for scanning pages and generating accessibility reports."""
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from playwright.sync_api import Error as PlaywrightError

from . import orchestrator, scanner
from .config import load_config
from .export import loads_report
from .report import write_report
from .rules import default_registry
from .schema import Impact, PageTarget

# loading variables from .env file
load_dotenv()

app = typer.Typer(add_completion=False)


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get("A11Y_REPORT_LOG_LEVEL", "WARNING")
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")


@app.command()
def scan(
    config_file: str = typer.Option("config/targets.yaml", "--config", envvar="A11Y_REPORT_CONFIG", help="Run config YAML"),
    urls: List[str] = typer.Option([], "--url", help="Page to scan (repeatable). Overrides config targets."),
    out: str = typer.Option("runs", envvar="A11Y_REPORT_OUT", help="Output directory"),
    title: Optional[str] = typer.Option(None, help="Report title"),
    theme: Optional[str] = typer.Option(None, help="Report theme: light, dark or auto"),
    printable: Optional[bool] = typer.Option(None, "--printable/--no-printable", help="Also write a print-optimized report."),
    headless: Optional[bool] = typer.Option(None, "--headless/--headed", help="Run the browser headless."),
    fail_under: Optional[int] = typer.Option(None, min=0, max=100, help="Exit with code 1 when the compliance score is below this."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
):
    """Scan every target page and write the HTML report plus results.json."""
    _configure_logging(verbose)
    cfg = load_config(config_file)
    targets = [PageTarget(url=u) for u in urls] or cfg.targets
    if not targets:
        typer.echo("No targets: pass --url or list targets in the config file.", err=True)
        raise typer.Exit(code=2)

    overrides = {}
    if title is not None:
        overrides["title"] = title
    if theme is not None:
        if theme not in ("light", "dark", "auto"):
            raise typer.BadParameter("theme must be light, dark or auto", param_hint="--theme")
        overrides["theme"] = theme
    if printable is not None:
        overrides["generate_printable_version"] = printable
    report_cfg = cfg.report.model_copy(update=overrides)
    scan_cfg = cfg.scan
    if headless is not None:
        scan_cfg = scan_cfg.model_copy(update={"headless": headless})

    run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S")
    out_dir = Path(out) / run_id
    try:
        with scanner.open_scanner(**scan_cfg.model_dump()) as scan_fn:
            report = orchestrator.run(targets, scan_fn, out_dir, config=report_cfg)
    except PlaywrightError as e:
        typer.echo(f"Browser error: {e}", err=True)
        raise typer.Exit(code=1)
    except orchestrator.ReportWriteError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    latest_link = Path(out) / "latest"
    try:
        if latest_link.exists() or latest_link.is_symlink():
            latest_link.unlink()
        latest_link.symlink_to(out_dir.resolve())
    except OSError as e:
        logging.getLogger(__name__).debug("Could not update %s: %s", latest_link, e)

    score = report.summary.compliance_score
    typer.echo(
        f"Scanned {report.pages_analyzed} page(s): {report.total_violations} violation(s), "
        f"compliance {score}%"
    )
    typer.echo(f"Run complete: {out_dir / orchestrator.REPORT_FILE}")
    if fail_under is not None and score < fail_under:
        typer.echo(f"Compliance score {score}% is below {fail_under}%", err=True)
        raise typer.Exit(code=1)


@app.command()
def report(run_dir: str):
    """Regenerate the HTML report for an existing run directory."""
    rd = Path(run_dir)
    results = rd / orchestrator.RESULTS_FILE
    if not results.exists():
        typer.echo(f"No {orchestrator.RESULTS_FILE} in {rd}", err=True)
        raise typer.Exit(code=1)
    data = loads_report(results.read_bytes())
    cfg = load_config(os.environ.get("A11Y_REPORT_CONFIG", "config/targets.yaml"))
    write_report(rd / "report.rebuilt.html", data, default_registry(), cfg.report)
    typer.echo("Report regenerated.")


@app.command()
def rules(
    query: Optional[str] = typer.Option(None, help="Case-insensitive search over title, description and tags."),
    principle: Optional[str] = typer.Option(None, help="Perceivable, Operable, Understandable or Robust."),
    level: Optional[str] = typer.Option(None, help="A, AA or AAA."),
    impact: Optional[str] = typer.Option(None, help="critical, serious, moderate or minor."),
):
    """List knowledge base rules, optionally filtered."""
    registry = default_registry()
    if impact is not None and Impact.parse(impact) is None:
        raise typer.BadParameter(f"unknown impact: {impact}", param_hint="--impact")
    selected = registry.search_rules(query) if query else registry.get_all_rules()
    if principle:
        keep = {r.id for r in registry.get_rules_by_principle(principle)}
        selected = [r for r in selected if r.id in keep]
    if level:
        keep = {r.id for r in registry.get_rules_by_level(level)}
        selected = [r for r in selected if r.id in keep]
    if impact:
        keep = {r.id for r in registry.get_rules_by_impact(impact)}
        selected = [r for r in selected if r.id in keep]
    for r in selected:
        typer.echo(f"{r.id:<24} {r.level:<4} {r.principle:<15} {r.impact.label:<9} {r.title}")
    if not selected:
        typer.echo("No matching rules.")


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
