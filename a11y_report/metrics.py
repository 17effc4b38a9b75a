"""Aggregate compliance metrics across scanned pages."""
from __future__ import annotations
from datetime import datetime
from math import floor
from typing import Dict, Iterable, List, Optional, Sequence

from .rules import RuleRegistry
from .schema import (
    AggregateReport,
    Finding,
    Impact,
    PageScanResult,
    PrincipleBreakdown,
    Summary,
    utcnow,
)

# Tag substrings that place a violation under a principle. A violation can
# match several principles, or none; the breakdown is not a partition.
PRINCIPLE_TAG_MARKERS: Dict[str, tuple] = {
    "perceivable": ("cat.color", "cat.images", "cat.multimedia", "cat.text-alternatives"),
    "operable": ("cat.keyboard", "cat.time-and-media"),
    "understandable": ("cat.language", "cat.predictable"),
    "robust": ("cat.parsing", "cat.compatibility"),
}


def resolve_severity(finding: Finding, registry: RuleRegistry) -> Impact:
    """Finding's own impact, else the knowledge base impact, else minor."""
    own = Impact.parse(finding.impact)
    if own is not None:
        return own
    rule = registry.get_rule(finding.id)
    if rule is not None:
        return rule.impact
    return Impact.MINOR


def classify_principles(tags: Iterable[str]) -> List[str]:
    """Return every principle whose markers appear in ``tags``, in fixed order."""
    tags = list(tags)
    return [
        principle
        for principle, markers in PRINCIPLE_TAG_MARKERS.items()
        if any(marker in tag for tag in tags for marker in markers)
    ]


def compute_compliance_score(passed: int, total: int) -> int:
    """Percentage of passing pages, rounded half up. 0 when nothing was tested.

    Raises:
      ValueError if counts invalid.
    """
    if total < 0 or passed < 0 or passed > total:
        raise ValueError("Require 0 <= passed <= total")
    if total == 0:
        return 0
    return int(floor(100.0 * passed / total + 0.5))


def severity_counts(findings: Iterable[Finding], registry: RuleRegistry) -> Dict[Impact, int]:
    counts = {impact: 0 for impact in Impact}
    for finding in findings:
        counts[resolve_severity(finding, registry)] += 1
    return counts


def principle_breakdown(findings: Iterable[Finding]) -> PrincipleBreakdown:
    totals = {p: 0 for p in PRINCIPLE_TAG_MARKERS}
    for finding in findings:
        for principle in classify_principles(finding.tags):
            totals[principle] += 1
    return PrincipleBreakdown(**totals)


def aggregate(
    page_results: Sequence[PageScanResult],
    registry: RuleRegistry,
    *,
    wcag_level: str = "AA",
    timestamp: Optional[datetime] = None,
) -> AggregateReport:
    """Compute the AggregateReport for ``page_results``.

    Pure apart from ``timestamp``, which defaults to now; pass one in to get
    identical output for identical input.
    """
    pages = list(page_results)
    violations = [v for page in pages for v in page.violations]
    counts = severity_counts(violations, registry)
    passed = sum(1 for page in pages if page.passed)
    failed = len(pages) - passed
    total_tests = passed + failed
    return AggregateReport(
        timestamp=timestamp or utcnow(),
        total_violations=sum(counts.values()),
        critical_violations=counts[Impact.CRITICAL],
        serious_violations=counts[Impact.SERIOUS],
        moderate_violations=counts[Impact.MODERATE],
        minor_violations=counts[Impact.MINOR],
        pages_analyzed=len(pages),
        test_results=pages,
        summary=Summary(
            total_tests=total_tests,
            passed_tests=passed,
            failed_tests=failed,
            compliance_score=compute_compliance_score(passed, total_tests),
            wcag_level=wcag_level,
            principle_breakdown=principle_breakdown(violations),
        ),
    )


__all__ = [
    "aggregate",
    "classify_principles",
    "compute_compliance_score",
    "principle_breakdown",
    "resolve_severity",
    "severity_counts",
]
