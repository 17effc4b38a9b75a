from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Literal
from datetime import datetime, timezone


WcagLevel = Literal["A", "AA", "AAA"]
PrincipleName = Literal["Perceivable", "Operable", "Understandable", "Robust"]
Theme = Literal["light", "dark", "auto"]

PRINCIPLES = ("perceivable", "operable", "understandable", "robust")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Impact(str, Enum):
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @classmethod
    def parse(cls, value) -> Optional["Impact"]:
        """Return the matching Impact, or None for empty/unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return self.value.capitalize()


class _Model(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CodeExample(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    bad: str
    good: str
    description: str = ""


class Rule(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    title: str
    level: WcagLevel
    principle: PrincipleName
    guideline: str
    description: str
    explanation: str
    impact: Impact
    tags: List[str] = []
    remediation_steps: List[str] = []
    code_examples: List[CodeExample] = []
    testing_methods: List[str] = []
    resources: List[str] = []
    common_mistakes: List[str] = []
    user_impact: str = ""

    @field_validator("impact", mode="before")
    @classmethod
    def _parse_impact(cls, value):
        # Knowledge base files spell impacts as "Critical", "Serious", ...
        return Impact.parse(value) or value


class Category(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str
    color: str
    icon: str = ""


class AffectedNode(_Model):
    html: str
    impact: Optional[str] = None  # passed through from the scan engine, unvalidated
    target: List[str] = []
    failure_summary: Optional[str] = None


class Finding(_Model):
    """One rule instance (violation or pass) discovered on one page."""
    id: str
    impact: Optional[str] = None  # critical|serious|moderate|minor, or whatever the engine sent
    tags: List[str] = []
    description: str = ""
    help: str = ""
    help_url: Optional[str] = None
    nodes: List[AffectedNode] = []


class PageScanResult(_Model):
    url: str
    test_name: str
    timestamp: datetime
    violations: List[Finding] = []
    passes: List[Finding] = []
    # Kept for completeness, never scored
    incomplete: List[Finding] = []
    inapplicable: List[Finding] = []
    # Set only on synthetic results for targets that could not be scanned
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return not self.violations


class PrincipleBreakdown(_Model):
    perceivable: int = 0
    operable: int = 0
    understandable: int = 0
    robust: int = 0


class Summary(_Model):
    total_tests: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    compliance_score: int = 0  # 0-100
    wcag_level: WcagLevel = "AA"
    principle_breakdown: PrincipleBreakdown = Field(default_factory=PrincipleBreakdown)


class AggregateReport(_Model):
    """Summary across all scanned pages. Derived entirely from test_results."""
    timestamp: datetime
    total_violations: int = 0
    critical_violations: int = 0
    serious_violations: int = 0
    moderate_violations: int = 0
    minor_violations: int = 0
    pages_analyzed: int = 0
    test_results: List[PageScanResult] = []
    summary: Summary = Field(default_factory=Summary)


class PageTarget(_Model):
    url: str
    name: Optional[str] = None
    include: List[str] = []
    exclude: List[str] = []
    tags: Optional[List[str]] = None  # overrides the scanner's default tag filter


class ReportConfig(_Model):
    title: str = "Accessibility Assessment Report"
    include_summary: bool = True
    include_violations: bool = True
    include_remediation: bool = True
    include_code_examples: bool = True
    include_technical_details: bool = True
    theme: Theme = "auto"
    show_only_failures: bool = False
    group_by_category: bool = True
    generate_printable_version: bool = False
    export_json: bool = True
    dump_raw: bool = False
    wcag_level: WcagLevel = "AA"
