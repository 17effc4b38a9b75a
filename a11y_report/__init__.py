"""a11y_report

Aggregates axe-core accessibility scan results into scored, navigable reports.

Primary entrypoints:
 - cli.py (Typer CLI)
 - orchestrator.py (scan -> normalize -> aggregate -> render -> persist)
 - scanner.py (Playwright + axe-core invocation)
 - report.py (HTML report rendering)
"""

__all__ = [
    "metrics",
    "normalize",
    "orchestrator",
    "report",
    "rules",
    "scanner",
]
