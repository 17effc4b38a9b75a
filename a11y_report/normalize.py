"""Convert raw axe-core output into the internal Finding/PageScanResult shape.

The raw payload belongs to the scan engine and is treated as untyped. Nothing
loosely typed leaves this module.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .schema import AffectedNode, Finding, PageScanResult, utcnow
from .utils import name_from_url

MISSING_HTML = "HTML not available"
UNKNOWN_RULE_ID = "unknown-rule"
# Joins the frame/shadow-root hops of a nested axe selector
SELECTOR_HOP = " >>> "

RESULT_GROUPS = ("violations", "passes", "incomplete", "inapplicable")

_TIMESTAMP = TypeAdapter(datetime)


def normalize_target(target: Any) -> List[str]:
    """Return selector(s) as an ordered list of strings."""
    if target is None:
        return []
    if isinstance(target, str):
        return [target]
    if isinstance(target, (list, tuple)):
        out = []
        for t in target:
            if isinstance(t, (list, tuple)):
                out.append(SELECTOR_HOP.join(str(part) for part in t))
            elif t is not None:
                out.append(str(t))
        return out
    return [str(target)]


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _text(value: Any, default: Optional[str] = "") -> Optional[str]:
    """``value`` when it is a non-empty string, else ``default``."""
    return value if isinstance(value, str) and value else default


def _entries(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return _TIMESTAMP.validate_python(value)
    except ValidationError:
        return None


def normalize_node(raw: Dict[str, Any]) -> AffectedNode:
    return AffectedNode(
        html=_text(raw.get("html"), MISSING_HTML),
        impact=_optional_str(raw.get("impact")),
        target=normalize_target(raw.get("target")),
        failure_summary=_text(raw.get("failureSummary"), None) or _text(raw.get("failure_summary"), None),
    )


def normalize_finding(raw: Dict[str, Any]) -> Finding:
    nodes = [normalize_node(n) for n in _entries(raw.get("nodes")) if isinstance(n, dict)]
    return Finding(
        id=_text(raw.get("id"), UNKNOWN_RULE_ID),
        impact=_optional_str(raw.get("impact")),
        tags=[str(t) for t in _entries(raw.get("tags")) if t is not None],
        description=_text(raw.get("description")),
        help=_text(raw.get("help")),
        help_url=_text(raw.get("helpUrl"), None) or _text(raw.get("help_url"), None),
        nodes=nodes,
    )


def _findings(raw: Dict[str, Any], key: str) -> List[Finding]:
    return [normalize_finding(entry) for entry in _entries(raw.get(key)) if isinstance(entry, dict)]


def normalize(
    raw: Dict[str, Any],
    *,
    url: Optional[str] = None,
    test_name: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> PageScanResult:
    """Build a PageScanResult from one page's raw scan payload.

    Severities are copied as-is (including ``None`` and values the engine made
    up); resolving them is the aggregator's job.
    """
    page_url = url or _text(raw.get("url"), "about:blank")
    groups = {key: _findings(raw, key) for key in RESULT_GROUPS}
    return PageScanResult(
        url=page_url,
        test_name=test_name or _text(raw.get("testName"), None) or name_from_url(page_url),
        timestamp=timestamp or _timestamp(raw.get("timestamp")) or utcnow(),
        **groups,
    )


__all__ = ["normalize", "normalize_finding", "normalize_node", "normalize_target", "MISSING_HTML"]
