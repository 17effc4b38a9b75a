from datetime import datetime, timezone

import pytest

from a11y_report.normalize import normalize
from a11y_report.rules import RuleRegistry

FIXED_TS = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def registry():
    return RuleRegistry.load()


@pytest.fixture
def fixed_ts():
    return FIXED_TS


@pytest.fixture
def raw_violation():
    """Build one raw axe-core violation entry."""
    def _make(rule_id, impact=None, tags=None, html="<div></div>", target="#el", summary=None, description=None):
        return {
            "id": rule_id,
            "impact": impact,
            "tags": tags if tags is not None else ["wcag2aa"],
            "description": description or f"{rule_id} description",
            "help": f"{rule_id} help",
            "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}",
            "nodes": [
                {"html": html, "impact": impact, "target": target, "failureSummary": summary},
            ],
        }
    return _make


@pytest.fixture
def make_page():
    """Build a normalized PageScanResult from raw violation entries."""
    def _make(url, violations=(), passes=(), test_name=None):
        raw = {"url": url, "violations": list(violations), "passes": list(passes)}
        return normalize(raw, test_name=test_name, timestamp=FIXED_TS)
    return _make
