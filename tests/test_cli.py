from contextlib import contextmanager
from pathlib import Path

import orjson
from playwright.sync_api import Error as PlaywrightError
from typer.testing import CliRunner

from a11y_report.cli import app

runner = CliRunner()

# We monkeypatch the scanner so no browser is launched


def _fake_results(url):
    violations = []
    if "login" in url:
        violations.append({
            "id": "label",
            "impact": "critical",
            "tags": ["cat.forms", "wcag2a"],
            "description": "Ensures every form element has a label",
            "help": "Form elements must have labels",
            "nodes": [{"html": "<input id=\"user\">", "target": ["#user"], "failureSummary": "Fix any of the following"}],
        })
    return {"url": url, "violations": violations, "passes": [{"id": "document-title", "nodes": []}]}


def _install_fake_scanner(monkeypatch, seen=None):
    @contextmanager
    def fake_open_scanner(**kwargs):
        if seen is not None:
            seen.update(kwargs)
        yield lambda target: _fake_results(target.url)

    monkeypatch.setattr("a11y_report.scanner.open_scanner", fake_open_scanner)


def _write_config(tmp_path, body):
    path = tmp_path / "targets.yaml"
    path.write_text(body, encoding="utf-8")
    return str(path)


def _run_dir(out):
    [run_dir] = [p for p in Path(out).iterdir() if p.name != "latest"]
    return run_dir


def test_scan_writes_report_and_results(monkeypatch, tmp_path):
    seen = {}
    _install_fake_scanner(monkeypatch, seen)
    cfg = _write_config(tmp_path, (
        "targets:\n"
        "  - https://example.com/login\n"
        "  - url: https://example.com/\n"
        "    name: Home\n"
        "report:\n"
        "  title: CLI Test\n"
        "scan:\n"
        "  headless: true\n"
    ))
    out = tmp_path / "runs"
    result = runner.invoke(app, ["scan", "--config", cfg, "--out", str(out), "--printable", "--headed"])
    assert result.exit_code == 0, result.output
    assert "Scanned 2 page(s): 1 violation(s), compliance 50%" in result.output
    assert "Run complete:" in result.output
    assert seen["headless"] is False

    run_dir = _run_dir(out)
    html = (run_dir / "report.html").read_text(encoding="utf-8")
    assert "<title>CLI Test</title>" in html
    assert (run_dir / "report-printable.html").exists()
    data = orjson.loads((run_dir / "results.json").read_bytes())
    assert data["summary"]["passedTests"] == 1
    assert [p["testName"] for p in data["testResults"]] == ["example.com/login", "Home"]


def test_scan_url_option_overrides_config(monkeypatch, tmp_path):
    _install_fake_scanner(monkeypatch)
    cfg = _write_config(tmp_path, "targets:\n  - https://example.com/login\n")
    out = tmp_path / "runs"
    result = runner.invoke(app, ["scan", "--config", cfg, "--out", str(out), "--url", "https://example.com/about"])
    assert result.exit_code == 0, result.output
    assert "Scanned 1 page(s): 0 violation(s), compliance 100%" in result.output


def test_scan_fail_under(monkeypatch, tmp_path):
    _install_fake_scanner(monkeypatch)
    cfg = _write_config(tmp_path, "targets:\n  - https://example.com/login\n")
    result = runner.invoke(app, ["scan", "--config", cfg, "--out", str(tmp_path / "runs"), "--fail-under", "90"])
    assert result.exit_code == 1
    assert "below 90%" in result.output


def test_scan_without_targets_exits_2(monkeypatch, tmp_path):
    _install_fake_scanner(monkeypatch)
    cfg = _write_config(tmp_path, "report:\n  title: Empty\n")
    result = runner.invoke(app, ["scan", "--config", cfg, "--out", str(tmp_path / "runs")])
    assert result.exit_code == 2


def test_report_regenerates_from_results(monkeypatch, tmp_path):
    _install_fake_scanner(monkeypatch)
    cfg = _write_config(tmp_path, "targets:\n  - https://example.com/login\n")
    monkeypatch.setenv("A11Y_REPORT_CONFIG", cfg)
    out = tmp_path / "runs"
    assert runner.invoke(app, ["scan", "--out", str(out)]).exit_code == 0
    run_dir = _run_dir(out)

    result = runner.invoke(app, ["report", str(run_dir)])
    assert result.exit_code == 0, result.output
    rebuilt = (run_dir / "report.rebuilt.html").read_text(encoding="utf-8")
    assert 'data-id="label"' in rebuilt


def test_report_missing_results(tmp_path):
    result = runner.invoke(app, ["report", str(tmp_path)])
    assert result.exit_code == 1


def test_rules_listing_and_filters():
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 12

    result = runner.invoke(app, ["rules", "--principle", "Understandable"])
    assert result.output.split()[0] == "html-has-lang"

    result = runner.invoke(app, ["rules", "--query", "keyboard", "--level", "AA"])
    [line] = result.output.strip().splitlines()
    assert line.startswith("focus-visible")

    result = runner.invoke(app, ["rules", "--impact", "minor"])
    assert "No matching rules." in result.output

    result = runner.invoke(app, ["rules", "--impact", "huge"])
    assert result.exit_code != 0


def test_scan_browser_launch_failure_exits_1(monkeypatch, tmp_path):
    @contextmanager
    def broken_open_scanner(**kwargs):
        raise PlaywrightError("Executable doesn't exist at /ms-playwright/chromium")
        yield

    monkeypatch.setattr("a11y_report.scanner.open_scanner", broken_open_scanner)
    cfg = _write_config(tmp_path, "targets:\n  - https://example.com/\n")
    out = tmp_path / "runs"
    result = runner.invoke(app, ["scan", "--config", cfg, "--out", str(out)])
    assert result.exit_code == 1
    assert "Browser error: Executable doesn't exist" in result.output
    assert not isinstance(result.exception, PlaywrightError)
    assert not out.exists()
