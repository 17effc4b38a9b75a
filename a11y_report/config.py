"""Run configuration loaded from YAML.

Example ``config/targets.yaml``::

    targets:
      - https://www.saucedemo.com/
      - url: https://the-internet.herokuapp.com/login
        name: Login page
        exclude: ["#flash"]
    report:
      title: Demo sites
      theme: dark
    scan:
      headless: true
      tags: [wcag2a, wcag2aa]
"""
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from .schema import PageTarget, ReportConfig

AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"
DEFAULT_TAGS = ["wcag2a", "wcag2aa", "wcag21aa"]


class ScanSettings(BaseModel):
    browser: str = "chromium"
    headless: bool = True
    axe_source: str = AXE_CDN
    tags: List[str] = Field(default_factory=lambda: list(DEFAULT_TAGS))
    timeout_ms: int = 30000


class RunConfig(BaseModel):
    targets: List[PageTarget] = []
    report: ReportConfig = Field(default_factory=ReportConfig)
    scan: ScanSettings = Field(default_factory=ScanSettings)

    @field_validator("targets", mode="before")
    @classmethod
    def _coerce_targets(cls, value):
        # Plain strings are shorthand for {url: ...}
        return [{"url": t} if isinstance(t, str) else t for t in (value or [])]


def load_config(path: Optional[Union[str, Path]]) -> RunConfig:
    """Load a run config; a missing path yields the defaults."""
    if path is None or not Path(path).exists():
        return RunConfig()
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    return RunConfig.model_validate(data)


__all__ = ["RunConfig", "ScanSettings", "load_config", "AXE_CDN", "DEFAULT_TAGS"]
