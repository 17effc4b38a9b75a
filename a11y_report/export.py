"""Machine-readable export of an AggregateReport (for CI consumption)."""
from typing import Any, Dict, Union

import orjson

from .schema import AggregateReport, PageScanResult

_OPTS = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS


def report_to_dict(report: AggregateReport) -> Dict[str, Any]:
    """camelCase, JSON-compatible view of the report."""
    return report.model_dump(mode="json", by_alias=True)


def dumps_report(report: AggregateReport) -> bytes:
    return orjson.dumps(report_to_dict(report), option=_OPTS)


def loads_report(data: Union[bytes, str]) -> AggregateReport:
    return AggregateReport.model_validate(orjson.loads(data))


def dump_page(result: PageScanResult) -> bytes:
    return orjson.dumps(result.model_dump(mode="json", by_alias=True), option=_OPTS)


__all__ = ["report_to_dict", "dumps_report", "loads_report", "dump_page"]
