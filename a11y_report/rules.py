"""Rule knowledge base: remediation content keyed by axe-core rule id.

A ``RuleRegistry`` is an explicitly constructed, read-only lookup table. The
aggregator, renderer and orchestrator all take one as an argument, so tests
can hand in a small fake rule set instead of the packaged one.

Lookups on unknown ids return ``None``; callers fall back to defaults.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

import yaml

from .schema import Category, Impact, Rule

RULES_PATH = Path(__file__).resolve().parent / "data" / "rules.yaml"


class RuleRegistry:
    def __init__(self, rules: Iterable[Rule], categories: Iterable[Category] = ()):
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            if rule.id in self._rules:
                raise ValueError(f"Duplicate rule id in knowledge base: {rule.id}")
            self._rules[rule.id] = rule
        self._categories: Dict[str, Category] = {c.id: c for c in categories}

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RuleRegistry":
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls(
            (Rule.model_validate(r) for r in data.get("rules", []) or []),
            (Category.model_validate(c) for c in data.get("categories", []) or []),
        )

    @classmethod
    def load(cls) -> "RuleRegistry":
        """Build a registry from the packaged knowledge base."""
        return cls.from_yaml(RULES_PATH)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def get_all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def get_rules_by_principle(self, principle: str) -> List[Rule]:
        return [r for r in self._rules.values() if r.principle.lower() == principle.lower()]

    def get_rules_by_level(self, level: str) -> List[Rule]:
        return [r for r in self._rules.values() if r.level == level.upper()]

    def get_rules_by_impact(self, impact: Union[Impact, str]) -> List[Rule]:
        wanted = Impact.parse(impact)
        return [r for r in self._rules.values() if r.impact == wanted]

    def search_rules(self, query: str) -> List[Rule]:
        """Case-insensitive substring match on title, description or any tag."""
        q = query.lower()
        return [
            r for r in self._rules.values()
            if q in r.title.lower()
            or q in r.description.lower()
            or any(q in tag.lower() for tag in r.tags)
        ]

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id.lower())

    def get_all_categories(self) -> List[Category]:
        return list(self._categories.values())


@lru_cache(maxsize=None)
def default_registry() -> RuleRegistry:
    """Packaged registry, built on first use and shared for the process lifetime."""
    return RuleRegistry.load()


__all__ = ["RuleRegistry", "default_registry", "RULES_PATH"]
