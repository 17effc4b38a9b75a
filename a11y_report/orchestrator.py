"""Report orchestrator: scan -> normalize -> aggregate -> render -> persist.

Targets are processed one at a time. A target that cannot be scanned becomes
a synthetic failing page carrying a ``scan-error`` finding; the run goes on
and the report is still produced. Only a failure to write the output is
fatal.
"""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import orjson

from .export import dump_page, dumps_report
from .metrics import aggregate
from .normalize import normalize
from .report import write_report
from .rules import RuleRegistry, default_registry
from .schema import (
    AffectedNode,
    AggregateReport,
    Finding,
    Impact,
    PageScanResult,
    PageTarget,
    ReportConfig,
    utcnow,
)
from .utils import name_from_url, slugify

logger = logging.getLogger(__name__)

ScanFn = Callable[[PageTarget], Dict[str, Any]]

SCAN_ERROR_RULE_ID = "scan-error"
REPORT_FILE = "report.html"
RESULTS_FILE = "results.json"
RAW_DIR = "raw"


class ReportWriteError(RuntimeError):
    """The report artifacts could not be written."""


def target_name(target: PageTarget) -> str:
    return target.name or name_from_url(target.url)


def scan_error_result(target: PageTarget, exc: BaseException, timestamp: Optional[datetime] = None) -> PageScanResult:
    """Synthetic failing page for a target whose scan raised ``exc``."""
    message = f"{type(exc).__name__}: {exc}"
    finding = Finding(
        id=SCAN_ERROR_RULE_ID,
        impact=Impact.CRITICAL.value,
        tags=[SCAN_ERROR_RULE_ID],
        description=f"The page could not be scanned for accessibility issues ({message}).",
        help="Accessibility scan failed",
        nodes=[AffectedNode(html=f"<!-- {target.url} -->", target=[target.url], failure_summary=message)],
    )
    return PageScanResult(
        url=target.url,
        test_name=target_name(target),
        timestamp=timestamp or utcnow(),
        violations=[finding],
        error=message,
    )


def scan_target(target: PageTarget, scan: ScanFn, timestamp: Optional[datetime] = None) -> PageScanResult:
    """Scan and normalize one target. Never raises for scan-side failures.

    ``timestamp`` only stamps the synthetic result of a failed scan.
    """
    try:
        raw = scan(target)
        result = normalize(raw, url=target.url, test_name=target_name(target))
    except Exception as e:
        logger.warning("Scan failed for %s: %s", target.url, e)
        return scan_error_result(target, e, timestamp)
    logger.info(
        "Scanned %s: %d violations, %d passes", target.url, len(result.violations), len(result.passes)
    )
    return result


def persist(
    report: AggregateReport,
    out_dir: Path,
    registry: RuleRegistry,
    config: ReportConfig,
    raw_payloads: Optional[Dict[int, Dict[str, Any]]] = None,
) -> List[Path]:
    """Write the report document(s), structured export and optional per-target dumps.

    Dumps are prefixed with the target's position so targets sharing a name
    do not overwrite each other. ``raw_payloads`` is keyed by that position.
    """
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        written = write_report(out_dir / REPORT_FILE, report, registry, config)
        if config.export_json:
            path = out_dir / RESULTS_FILE
            path.write_bytes(dumps_report(report))
            written.append(path)
        if config.dump_raw:
            raw_dir = out_dir / RAW_DIR
            raw_dir.mkdir(exist_ok=True)
            for index, page in enumerate(report.test_results):
                slug = f"{index:02d}_{slugify(page.test_name)}"
                path = raw_dir / f"{slug}.json"
                path.write_bytes(dump_page(page))
                written.append(path)
                if raw_payloads and index in raw_payloads:
                    raw_path = raw_dir / f"{slug}.axe.json"
                    raw_path.write_bytes(orjson.dumps(raw_payloads[index], option=orjson.OPT_INDENT_2))
                    written.append(raw_path)
    except OSError as e:
        raise ReportWriteError(f"Failed writing report to {out_dir}: {e}") from e
    for path in written:
        logger.info("Wrote %s", path)
    return written


def run(
    targets: Sequence[PageTarget],
    scan: ScanFn,
    out_dir: Path,
    *,
    config: Optional[ReportConfig] = None,
    registry: Optional[RuleRegistry] = None,
    timestamp: Optional[datetime] = None,
) -> AggregateReport:
    """Scan every target, then aggregate, render and persist the report.

    Raises:
      ReportWriteError if the output cannot be written.
    """
    config = config or ReportConfig()
    if registry is None:
        registry = default_registry()
    results: List[PageScanResult] = []
    raw_payloads: Dict[int, Dict[str, Any]] = {}

    def recording_scan(index: int) -> ScanFn:
        def _scan(target: PageTarget) -> Dict[str, Any]:
            raw = scan(target)
            if config.dump_raw and isinstance(raw, dict):
                raw_payloads[index] = raw
            return raw
        return _scan

    for index, target in enumerate(targets):
        results.append(scan_target(target, recording_scan(index), timestamp))

    report = aggregate(results, registry, wcag_level=config.wcag_level, timestamp=timestamp)
    logger.info(
        "Aggregated %d pages: %d violations, compliance %d%%",
        report.pages_analyzed, report.total_violations, report.summary.compliance_score,
    )
    persist(report, Path(out_dir), registry, config, raw_payloads)
    return report


__all__ = ["run", "persist", "scan_target", "scan_error_result", "ReportWriteError", "ScanFn"]
