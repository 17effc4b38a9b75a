import pytest

from a11y_report.metrics import aggregate
from a11y_report.report import (
    level_from_tags,
    printable_path,
    render,
    render_printable,
    write_report,
)
from a11y_report.schema import ReportConfig

XSS = "<script>alert(1)</script>"


@pytest.fixture
def pages(make_page, raw_violation):
    return [
        make_page("https://example.com/a", [
            raw_violation("image-alt", "critical", tags=["cat.text-alternatives", "wcag2a"]),
            raw_violation("button-name", None, tags=["cat.name-role-value", "wcag2a"]),
        ], test_name="Page A"),
        make_page("https://example.com/b", test_name="Clean Page"),
    ]


def _build(pages, registry, fixed_ts):
    return aggregate(pages, registry, timestamp=fixed_ts)


def test_render_is_deterministic(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    first = render(report, pages, registry, generated_at=fixed_ts)
    second = render(report, pages, registry, generated_at=fixed_ts)
    assert first == second
    assert first.startswith("<!DOCTYPE html>")
    assert "March 01, 2024 12:00 UTC" in first
    assert '<span class="meta-value" id="pages-tested">2</span>' in first
    assert "50%" in first


def test_summary_cards_and_interactive_controls(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    html = render(report, pages, registry, generated_at=fixed_ts)
    for severity in ("critical", "serious", "moderate", "minor"):
        assert f'data-severity="{severity}"' in html
    assert 'id="severity-filter"' in html
    assert 'id="category-filter"' in html
    assert 'id="search-filter"' in html
    assert "<script>" in html
    assert 'data-export="results.json"' in html
    assert html.count('class="violation-card"') == 2


def test_known_rule_card_carries_remediation(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    html = render(report, pages, registry, generated_at=fixed_ts)
    assert 'data-id="image-alt"' in html
    assert html.count('class="remediation"') == 2
    assert 'class="code-examples"' in html


def test_no_violations_branch(make_page, registry, fixed_ts):
    clean = [make_page("https://example.com/")]
    report = _build(clean, registry, fixed_ts)
    html = render(report, clean, registry, generated_at=fixed_ts)
    assert 'id="no-violations"' in html
    assert 'id="violations"' not in html
    assert 'class="violation-card"' not in html


def test_no_pages(registry, fixed_ts):
    report = _build([], registry, fixed_ts)
    html = render(report, [], registry, generated_at=fixed_ts)
    assert "No pages were scanned." in html
    assert 'id="no-violations"' in html


def test_unknown_rule_renders_without_remediation(make_page, raw_violation, registry, fixed_ts):
    pages = [make_page("https://example.com/", [
        raw_violation("nonexistent-rule", None, tags=["cat.keyboard", "wcag2aaa"], description="Made-up rule"),
    ])]
    report = _build(pages, registry, fixed_ts)
    html = render(report, pages, registry, generated_at=fixed_ts)
    assert 'data-id="nonexistent-rule"' in html
    assert 'data-severity="minor"' in html
    assert 'data-category="operable"' in html
    assert "Made-up rule" in html
    assert 'class="remediation"' not in html
    assert '<span class="violation-badge badge-level">AAA</span>' in html


def test_untagged_unknown_rule_falls_back_to_general(make_page, raw_violation, registry, fixed_ts):
    pages = [make_page("https://example.com/", [raw_violation("mystery", "moderate", tags=[])])]
    report = _build(pages, registry, fixed_ts)
    html = render(report, pages, registry, ReportConfig(wcag_level="A"), generated_at=fixed_ts)
    assert 'id="category-general"' in html
    assert '<span class="violation-badge badge-level">A</span>' in html


def test_page_content_is_escaped(make_page, raw_violation, registry, fixed_ts):
    pages = [make_page("https://example.com/", [
        raw_violation("image-alt", "critical", html=XSS, target=XSS, summary=XSS, description=XSS),
    ], test_name=XSS)]
    report = _build(pages, registry, fixed_ts)
    html = render(report, pages, registry, generated_at=fixed_ts)
    assert XSS not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


def test_printable_variant(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    html = render_printable(report, pages, registry, generated_at=fixed_ts)
    assert "<script>" not in html
    assert 'id="severity-filter"' not in html
    assert "onclick=" not in html
    assert "data-export=" not in html
    assert "<details open>" in html
    assert "<details>" not in html
    assert "printable" in html.split("<body", 1)[1].split(">", 1)[0]


def test_show_only_failures_hides_passing_pages(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    default = render(report, pages, registry, generated_at=fixed_ts)
    assert "Clean Page" in default
    html = render(report, pages, registry, ReportConfig(show_only_failures=True), generated_at=fixed_ts)
    assert "Clean Page" not in html
    assert "Page A" in html
    # the summary still counts every page
    assert "1 of 2 pages passed" in html


def test_grouping_by_category(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    grouped = render(report, pages, registry, generated_at=fixed_ts)
    assert grouped.index('id="category-perceivable"') < grouped.index('id="category-robust"')
    flat = render(report, pages, registry, ReportConfig(group_by_category=False), generated_at=fixed_ts)
    assert 'class="category-title"' not in flat
    assert flat.count('class="violation-card"') == 2


def test_section_toggles(pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    config = ReportConfig(
        include_code_examples=False,
        include_technical_details=False,
        include_summary=False,
        theme="dark",
        title="Nightly Audit",
    )
    html = render(report, pages, registry, config, generated_at=fixed_ts)
    assert 'class="code-examples"' not in html
    assert 'class="technical-details"' not in html
    assert 'id="summary-h2"' not in html
    assert '<body class="theme-dark"' in html
    assert "<title>Nightly Audit</title>" in html

    html = render(report, pages, registry, ReportConfig(include_remediation=False), generated_at=fixed_ts)
    assert 'class="remediation"' not in html

    html = render(report, pages, registry, ReportConfig(include_violations=False), generated_at=fixed_ts)
    assert 'class="violation-card"' not in html


def test_level_from_tags():
    assert level_from_tags(["cat.color", "wcag2aa", "wcag143"]) == "AA"
    assert level_from_tags(["wcag21a"]) == "A"
    assert level_from_tags(["wcag2aaa"]) == "AAA"
    assert level_from_tags(["best-practice"]) is None


def test_write_report_with_printable(tmp_path, pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    out = tmp_path / "report.html"
    written = write_report(out, report, registry, ReportConfig(generate_printable_version=True), generated_at=fixed_ts)
    assert written == [out, tmp_path / "report-printable.html"]
    assert printable_path(out).name == "report-printable.html"
    assert "<script>" in out.read_text(encoding="utf-8")
    assert "<script>" not in written[1].read_text(encoding="utf-8")


def test_write_report_without_printable(tmp_path, pages, registry, fixed_ts):
    report = _build(pages, registry, fixed_ts)
    written = write_report(tmp_path / "report.html", report, registry, generated_at=fixed_ts)
    assert written == [tmp_path / "report.html"]
    assert not (tmp_path / "report-printable.html").exists()


def test_severity_percentages_round_half_up(make_page, raw_violation, registry, fixed_ts):
    violations = [raw_violation("image-alt", "critical")]
    violations += [raw_violation(f"minor-{i}", "minor") for i in range(7)]
    pages = [make_page("https://example.com/", violations)]
    report = _build(pages, registry, fixed_ts)
    html = render(report, pages, registry, generated_at=fixed_ts)
    # 1 of 8 is 12.5%
    assert 'aria-label="Critical Issues - 13 percent of all violations"' in html
    assert 'aria-label="Minor Issues - 88 percent of all violations"' in html
