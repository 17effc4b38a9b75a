import importlib
import sys

from a11y_report.config import DEFAULT_TAGS, load_config
from a11y_report.scanner import axe_context, axe_options
from a11y_report.schema import PageTarget


def test_missing_config_yields_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.yaml")
    assert cfg.targets == []
    assert cfg.report.title == "Accessibility Assessment Report"
    assert cfg.report.wcag_level == "AA"
    assert cfg.scan.tags == DEFAULT_TAGS
    assert load_config(None).scan.headless is True


def test_targets_accept_strings_and_mappings(tmp_path):
    path = tmp_path / "targets.yaml"
    path.write_text(
        "targets:\n"
        "  - https://example.com/\n"
        "  - url: https://example.com/login\n"
        "    name: Login\n"
        "    exclude: ['#flash']\n"
        "report:\n"
        "  theme: dark\n"
        "  show_only_failures: true\n"
        "scan:\n"
        "  timeout_ms: 5000\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert [t.url for t in cfg.targets] == ["https://example.com/", "https://example.com/login"]
    assert cfg.targets[1].name == "Login"
    assert cfg.targets[1].exclude == ["#flash"]
    assert cfg.report.theme == "dark"
    assert cfg.report.show_only_failures is True
    assert cfg.scan.timeout_ms == 5000


def test_axe_context_and_options():
    assert axe_context(PageTarget(url="https://example.com/")) == {"include": [["html"]]}
    narrowed = axe_context(PageTarget(url="https://example.com/", include=["main"], exclude=["#ads"]))
    assert narrowed == {"include": [["main"]], "exclude": [["#ads"]]}
    assert axe_options(["wcag2a"]) == {"runOnly": {"type": "tag", "values": ["wcag2a"]}}
    assert axe_options([]) == {}


def test_config_loads_without_playwright(monkeypatch, tmp_path):
    # a None entry makes any import of the module fail
    monkeypatch.setitem(sys.modules, "playwright", None)
    monkeypatch.setitem(sys.modules, "playwright.sync_api", None)
    monkeypatch.delitem(sys.modules, "a11y_report.scanner", raising=False)
    monkeypatch.delitem(sys.modules, "a11y_report.config", raising=False)
    config = importlib.import_module("a11y_report.config")
    path = tmp_path / "targets.yaml"
    path.write_text("targets:\n  - https://example.com/\n", encoding="utf-8")
    assert config.load_config(path).scan.tags == config.DEFAULT_TAGS
    assert "a11y_report.scanner" not in sys.modules
