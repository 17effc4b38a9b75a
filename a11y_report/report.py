"""HTML reporting for accessibility scan runs.

``render`` produces one self-contained, interactive document (inline CSS and
script, no external assets). ``render_printable`` renders the same data with
the interactive affordances left out and every collapsible section open.

Everything that comes from a scanned page (HTML snippets, selectors, failure
summaries, descriptions) is escaped by the template's autoescaping.
"""
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Template

from .metrics import classify_principles, compute_compliance_score, resolve_severity
from .rules import RuleRegistry
from .schema import AggregateReport, Finding, Impact, PageScanResult, ReportConfig, utcnow

SEVERITY_CARDS = [
    (Impact.CRITICAL, "Critical Issues", "🚨", "Issues that completely block access for users with disabilities"),
    (Impact.SERIOUS, "Serious Issues", "⚠️", "Issues that significantly impact user experience"),
    (Impact.MODERATE, "Moderate Issues", "⚡", "Issues that may cause difficulties for some users"),
    (Impact.MINOR, "Minor Issues", "💡", "Issues with minimal impact on accessibility"),
]
CATEGORY_ORDER = ["Perceivable", "Operable", "Understandable", "Robust", "General"]
_WCAG_LEVEL_TAG = re.compile(r"^wcag\d*(a{1,3})$")

CSS = """
* { box-sizing: border-box; margin: 0; padding: 0; }
:root {
  --primary-color: #2563eb; --success-color: #16a34a; --warning-color: #d97706;
  --error-color: #dc2626; --critical-color: #991b1b; --info-color: #0891b2;
  --border-radius: 12px;
  --shadow: 0 4px 6px -1px rgba(0,0,0,.1), 0 2px 4px -1px rgba(0,0,0,.06);
}
.theme-light, .theme-auto {
  --bg-primary: #ffffff; --bg-secondary: #f8fafc; --bg-tertiary: #f1f5f9;
  --text-primary: #1e293b; --text-secondary: #475569; --text-muted: #64748b;
  --border-color: #e2e8f0; --card-bg: #ffffff;
}
.theme-dark {
  --bg-primary: #0f172a; --bg-secondary: #1e293b; --bg-tertiary: #334155;
  --text-primary: #f8fafc; --text-secondary: #cbd5e1; --text-muted: #94a3b8;
  --border-color: #334155; --card-bg: #1e293b;
}
@media (prefers-color-scheme: dark) {
  .theme-auto {
    --bg-primary: #0f172a; --bg-secondary: #1e293b; --bg-tertiary: #334155;
    --text-primary: #f8fafc; --text-secondary: #cbd5e1; --text-muted: #94a3b8;
    --border-color: #334155; --card-bg: #1e293b;
  }
}
body { font-family: system-ui, -apple-system, 'Segoe UI', Roboto, sans-serif; line-height: 1.6;
  background: var(--bg-primary); color: var(--text-primary); }
a.skip-link { position: absolute; left: 0; top: -40px; background: #000; color: #fff; padding: 8px; }
a.skip-link:focus { top: 0; }
.report-container { max-width: 1400px; margin: 0 auto; padding: 2rem; }
.report-header, .filters-section, .summary-card, .violation-card, .page-card {
  background: var(--card-bg); border: 1px solid var(--border-color);
  border-radius: var(--border-radius); box-shadow: var(--shadow); }
.report-header { padding: 2rem; margin-bottom: 2rem; display: flex; justify-content: space-between;
  flex-wrap: wrap; gap: 1rem; }
.report-title { font-size: 2.25rem; }
.report-subtitle { color: var(--text-secondary); }
.report-meta { display: flex; gap: 2rem; flex-wrap: wrap; }
.meta-item { display: flex; flex-direction: column; text-align: right; }
.meta-label { color: var(--text-muted); font-size: .8rem; text-transform: uppercase; }
.meta-value { font-size: 1.125rem; font-weight: 600; }
section { margin-bottom: 2rem; }
.section-title { font-size: 1.75rem; margin-bottom: 1rem; }
.category-title { font-size: 1.25rem; margin: 1.5rem 0 .75rem; }
.summary-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(240px, 1fr)); gap: 1.25rem; }
.summary-card { padding: 1.25rem; border-top: 4px solid var(--card-accent, var(--primary-color)); }
.card-title { font-size: .9rem; text-transform: uppercase; color: var(--text-secondary); }
.card-value { font-size: 2.25rem; font-weight: 700; }
.card-description { color: var(--text-secondary); font-size: .875rem; }
.card-progress { height: 8px; background: var(--bg-tertiary); border-radius: 4px; overflow: hidden; margin-top: 1rem; }
.progress-fill { height: 100%; background: var(--card-accent, var(--primary-color)); }
.severity-critical { --card-accent: var(--critical-color); }
.severity-serious { --card-accent: var(--error-color); }
.severity-moderate { --card-accent: var(--warning-color); }
.severity-minor { --card-accent: var(--info-color); }
.compliance-score, .success-state { --card-accent: var(--success-color); }
.quick-actions { display: flex; gap: 1rem; flex-wrap: wrap; }
.action-button { background: var(--bg-secondary); color: var(--text-primary); border: 1px solid var(--border-color);
  padding: .6rem 1.25rem; border-radius: var(--border-radius); font-weight: 600; cursor: pointer; }
.action-button.primary { background: var(--primary-color); color: #fff; border: none; }
.filters-section { padding: 1.25rem; }
.filters-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 1rem; }
.filter-group { display: flex; flex-direction: column; gap: .4rem; }
.filter-control { padding: .5rem; border: 1px solid var(--border-color); border-radius: 6px;
  background: var(--bg-primary); color: var(--text-primary); }
.violations-grid, .pages-grid { display: grid; gap: 1.25rem; }
.violation-card, .page-card { padding: 1.25rem; }
.violation-header { display: flex; justify-content: space-between; gap: 1rem; flex-wrap: wrap; }
.violation-meta { display: flex; gap: .5rem; flex-wrap: wrap; margin: .5rem 0; }
.violation-badge { padding: .15rem .65rem; border-radius: 9999px; font-size: .75rem; font-weight: 600;
  text-transform: uppercase; border: 1px solid currentColor; }
.badge-critical { color: var(--critical-color); }
.badge-serious { color: var(--error-color); }
.badge-moderate { color: var(--warning-color); }
.badge-minor { color: var(--info-color); }
.badge-pass { color: var(--success-color); }
.badge-level, .badge-principle { color: #6366f1; }
.violation-description { color: var(--text-secondary); }
.violation-aside { font-size: .875rem; color: var(--text-muted); }
details { border-top: 1px solid var(--border-color); margin-top: .75rem; padding-top: .5rem; }
details summary { cursor: pointer; font-weight: 600; }
details ul, details ol { margin: .5rem 0 .5rem 1.5rem; color: var(--text-secondary); }
.element { margin: .75rem 0; padding: .75rem; background: var(--bg-secondary); border-radius: 8px;
  border-left: 4px solid var(--error-color); font-size: .875rem; }
.element code { display: block; white-space: pre-wrap; word-break: break-all; color: var(--text-secondary); }
.code-example { border: 1px solid var(--border-color); border-radius: 8px; margin: .5rem 0; overflow: hidden; }
.code-example-header { padding: .4rem .75rem; background: var(--bg-tertiary); font-weight: 600; font-size: .85rem; }
.code-example pre { padding: .75rem; overflow-x: auto; white-space: pre-wrap; }
.code-bad { border-left: 4px solid var(--error-color); }
.code-good { border-left: 4px solid var(--success-color); }
.finding-list li { margin-bottom: .25rem; }
footer { margin-top: 3rem; padding: 2rem; text-align: center; color: var(--text-muted);
  border-top: 1px solid var(--border-color); }
button:focus, select:focus, input:focus, summary:focus { outline: 2px solid var(--primary-color); outline-offset: 2px; }
@media (max-width: 768px) { .report-container { padding: 1rem; } .meta-item { text-align: left; } }
@media print {
  body { background: #fff; color: #000; }
  .quick-actions, .filters-section { display: none; }
  .summary-card, .violation-card, .page-card { box-shadow: none; break-inside: avoid; }
}
@media (prefers-reduced-motion: reduce) { * { transition: none !important; animation: none !important; } }
"""

SCRIPT = """
function toggleTheme() {
  var body = document.body;
  var current = body.getAttribute('data-theme');
  if (current === 'auto') {
    current = window.matchMedia('(prefers-color-scheme: dark)').matches ? 'dark' : 'light';
  }
  var next = current === 'dark' ? 'light' : 'dark';
  body.setAttribute('data-theme', next);
  body.className = body.className.replace(/theme-\\w+/, 'theme-' + next);
  try { localStorage.setItem('accessibility-report-theme', next); } catch (e) {}
}
function applyFilters() {
  var severity = document.getElementById('severity-filter').value;
  var category = document.getElementById('category-filter').value;
  var query = document.getElementById('search-filter').value.toLowerCase();
  document.querySelectorAll('.violation-card').forEach(function (card) {
    var show = (!severity || card.dataset.severity === severity)
      && (!category || card.dataset.category === category)
      && (!query || card.dataset.search.indexOf(query) !== -1);
    card.hidden = !show;
  });
}
function resetFilters() {
  ['severity-filter', 'category-filter', 'search-filter'].forEach(function (id) {
    document.getElementById(id).value = '';
  });
  applyFilters();
}
function exportData() {
  var href = document.body.dataset.export;
  if (href) { window.location.href = href; }
}
function printReport() { window.print(); }
function showHelp() {
  alert('This report lists WCAG issues found on the scanned pages. Use the filters to focus on a '
    + 'severity, principle or keyword, and expand a card section for remediation guidance. '
    + 'Press Escape to clear the filters.');
}
document.addEventListener('DOMContentLoaded', function () {
  var saved = null;
  try { saved = localStorage.getItem('accessibility-report-theme'); } catch (e) {}
  if (saved) {
    document.body.setAttribute('data-theme', saved);
    document.body.className = document.body.className.replace(/theme-\\w+/, 'theme-' + saved);
  }
});
document.addEventListener('keydown', function (e) {
  if (e.key === 'Escape' && document.getElementById('severity-filter')) { resetFilters(); }
});
"""

TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{{ config.title }}</title>
<style>{{ css|safe }}</style>
</head>
<body class="theme-{{ config.theme }}{% if printable %} printable{% endif %}" data-theme="{{ config.theme }}"{% if export_href %} data-export="{{ export_href }}"{% endif %}>
<a href="#main" class="skip-link">Skip to main content</a>
<div class="report-container">
<header class="report-header">
  <div>
    <h1 class="report-title">{{ config.title }}</h1>
    <p class="report-subtitle">WCAG {{ report.summary.wcag_level }} Accessibility Assessment</p>
  </div>
  <div class="report-meta">
    <div class="meta-item"><span class="meta-label">Generated</span><span class="meta-value" id="generated-at">{{ generated_at }}</span></div>
    <div class="meta-item"><span class="meta-label">Pages Tested</span><span class="meta-value" id="pages-tested">{{ report.pages_analyzed }}</span></div>
    <div class="meta-item"><span class="meta-label">Compliance Score</span><span class="meta-value" id="header-score" style="color: {{ score_color }}">{{ report.summary.compliance_score }}%</span></div>
  </div>
</header>
<main id="main">
{% if config.include_summary %}
<section class="summary-section" aria-labelledby="summary-h2">
  <h2 class="section-title" id="summary-h2">Executive Summary</h2>
  <div class="summary-grid">
    <div class="summary-card compliance-score">
      <h3 class="card-title">Compliance Score 🎯</h3>
      <div class="card-value">{{ report.summary.compliance_score }}%</div>
      <p class="card-description">{{ report.summary.passed_tests }} of {{ report.summary.total_tests }} pages passed WCAG {{ report.summary.wcag_level }} checks</p>
      <div class="card-progress" role="img" aria-label="Compliance score - {{ report.summary.compliance_score }} percent"><div class="progress-fill" style="width: {{ report.summary.compliance_score }}%"></div></div>
    </div>
    {% for card in severity_cards %}
    <div class="summary-card severity-{{ card.key }}" data-severity="{{ card.key }}">
      <h3 class="card-title">{{ card.title }} {{ card.icon }}</h3>
      <div class="card-value">{{ card.count }}</div>
      <p class="card-description">{{ card.description }}</p>
      <div class="card-progress" role="img" aria-label="{{ card.title }} - {{ card.percent }} percent of all violations"><div class="progress-fill" style="width: {{ card.percent }}%"></div></div>
    </div>
    {% endfor %}
    <div class="summary-card">
      <h3 class="card-title">Total Violations 📋</h3>
      <div class="card-value">{{ report.total_violations }}</div>
      <p class="card-description">All accessibility violations found across tested pages</p>
    </div>
  </div>
</section>
{% endif %}
{% if not printable %}
<section class="quick-actions" aria-label="Report actions">
  <button type="button" class="action-button primary" onclick="printReport()">📄 Export PDF</button>
  {% if export_href %}<button type="button" class="action-button" onclick="exportData()">📊 Export Data</button>{% endif %}
  <button type="button" class="action-button" onclick="toggleTheme()">🌙 Toggle Theme</button>
  <button type="button" class="action-button" onclick="printReport()">🖨️ Print Report</button>
  <button type="button" class="action-button" onclick="showHelp()">❓ Help Guide</button>
</section>
<section class="filters-section" aria-label="Filters">
  <div class="filters-grid">
    <div class="filter-group">
      <label for="severity-filter">Filter by Severity</label>
      <select id="severity-filter" class="filter-control" onchange="applyFilters()">
        <option value="">All Severities</option>
        {% for card in severity_cards %}<option value="{{ card.key }}">{{ card.label }}</option>{% endfor %}
      </select>
    </div>
    <div class="filter-group">
      <label for="category-filter">Filter by Category</label>
      <select id="category-filter" class="filter-control" onchange="applyFilters()">
        <option value="">All Categories</option>
        {% for name in category_order %}<option value="{{ name|lower }}">{{ name }}</option>{% endfor %}
      </select>
    </div>
    <div class="filter-group">
      <label for="search-filter">Search Violations</label>
      <input type="search" id="search-filter" class="filter-control" placeholder="Search..." oninput="applyFilters()">
    </div>
  </div>
</section>
{% endif %}
{% if config.include_violations %}
{% if violation_count == 0 %}
<section class="violations-section" id="no-violations" aria-labelledby="violations-h2">
  <h2 class="section-title" id="violations-h2">✅ Accessibility Violations</h2>
  <div class="summary-card success-state">
    <h3 class="card-title">No violations found 🎉</h3>
    <p class="card-description">No accessibility violations were found. The scanned pages meet the tested WCAG guidelines.</p>
  </div>
</section>
{% else %}
<section class="violations-section" id="violations" aria-labelledby="violations-h2">
  <h2 class="section-title" id="violations-h2">🔍 Accessibility Violations ({{ violation_count }})</h2>
  {% for group in violation_groups %}
  {% if group.name %}<h3 class="category-title" id="category-{{ group.name|lower }}">{{ group.name }} ({{ group.cards|length }})</h3>{% endif %}
  <div class="violations-grid">
  {% for card in group.cards %}
    <article class="violation-card" data-id="{{ card.id }}" data-severity="{{ card.severity }}" data-category="{{ card.principle|lower }}" data-page="{{ card.page_name }}" data-search="{{ card.search }}">
      <div class="violation-header">
        <div>
          <h4 class="violation-title">{{ card.title }}</h4>
          <div class="violation-meta">
            <span class="violation-badge badge-{{ card.severity }}">{{ card.severity_label }}</span>
            <span class="violation-badge badge-principle">{{ card.principle }}</span>
            <span class="violation-badge badge-level">{{ card.level }}</span>
          </div>
          <p class="violation-description">{{ card.explanation }}</p>
        </div>
        <div class="violation-aside">
          <p>{{ card.nodes|length }} element(s) affected</p>
          <p>Page: {{ card.page_name }}</p>
        </div>
      </div>
      {% if card.rule and config.include_remediation %}
      {% set rule = card.rule %}
      <div class="remediation">
        <details{{ open_attr }}>
          <summary>📋 Detailed Information</summary>
          <h5>User Impact</h5>
          <p>{{ rule.user_impact }}</p>
          <h5>WCAG Reference</h5>
          <p>{{ rule.guideline }} (Level {{ rule.level }})</p>
          {% if rule.common_mistakes %}
          <h5>Common Mistakes</h5>
          <ul>{% for item in rule.common_mistakes %}<li>{{ item }}</li>{% endfor %}</ul>
          {% endif %}
        </details>
        <details{{ open_attr }}>
          <summary>🔧 How to Fix</summary>
          <ol>{% for step in rule.remediation_steps %}<li>{{ step }}</li>{% endfor %}</ol>
        </details>
        {% if config.include_code_examples and rule.code_examples %}
        <details{{ open_attr }} class="code-examples">
          <summary>💻 Code Examples</summary>
          {% for example in rule.code_examples %}
          <div class="code-example code-bad"><div class="code-example-header">❌ Incorrect Implementation</div><pre><code>{{ example.bad }}</code></pre></div>
          <div class="code-example code-good"><div class="code-example-header">✅ Correct Implementation</div><pre><code>{{ example.good }}</code></pre></div>
          {% if example.description %}<p><em>{{ example.description }}</em></p>{% endif %}
          {% endfor %}
        </details>
        {% endif %}
        <details{{ open_attr }}>
          <summary>🧪 Testing Methods</summary>
          <ul>{% for item in rule.testing_methods %}<li>{{ item }}</li>{% endfor %}</ul>
        </details>
        <details{{ open_attr }}>
          <summary>📚 Additional Resources</summary>
          <ul>{% for item in rule.resources %}<li>{{ item }}</li>{% endfor %}</ul>
        </details>
      </div>
      {% endif %}
      {% if card.nodes %}
      <details open class="affected-elements">
        <summary>🎯 Affected Elements ({{ card.nodes|length }})</summary>
        {% for node in card.nodes %}
        <div class="element">
          <strong>Element {{ loop.index }}</strong> <span class="violation-aside">{{ node.impact or 'Unknown impact' }}</span>
          <code>{{ node.html }}</code>
          {% if node.target %}<p><strong>Selector:</strong> <code class="selector">{{ node.target|join(', ') }}</code></p>{% endif %}
          {% if node.failure_summary %}<p><strong>Details:</strong> {{ node.failure_summary }}</p>{% endif %}
        </div>
        {% endfor %}
      </details>
      {% endif %}
      {% if config.include_technical_details %}
      <details{{ open_attr }} class="technical-details">
        <summary>⚙️ Technical Details</summary>
        <ul>
          <li>Rule id: <code>{{ card.id }}</code></li>
          {% if card.tags %}<li>Tags: {{ card.tags|join(', ') }}</li>{% endif %}
          {% if card.help_url %}<li>Reference: <a href="{{ card.help_url }}">{{ card.help_url }}</a></li>{% endif %}
          <li>Page URL: {{ card.page_url }}</li>
        </ul>
      </details>
      {% endif %}
    </article>
  {% endfor %}
  </div>
  {% endfor %}
</section>
{% endif %}
{% endif %}
<section class="pages-section" aria-labelledby="pages-h2">
  <h2 class="section-title" id="pages-h2">📝 Test Results Summary</h2>
  <div class="pages-grid">
  {% for page in pages %}
    <article class="page-card" data-status="{{ 'pass' if page.passed else 'fail' }}">
      <h3>{{ page.test_name }}</h3>
      <div class="violation-meta">
        <span class="violation-badge {{ 'badge-pass' if page.passed else 'badge-serious' }}">{{ 'PASSED' if page.passed else 'FAILED' }}</span>
        <span class="violation-badge badge-level">{{ page.violations|length }} issues</span>
        <span class="violation-badge badge-pass">{{ page.passes|length }} rules passed</span>
      </div>
      <p class="violation-description">URL: {{ page.url }}</p>
      {% if page.error %}<p class="scan-error"><strong>Scan failed:</strong> {{ page.error }}</p>{% endif %}
      {% if page.violations %}
      <ul class="finding-list">{% for v in page.violations %}<li><strong>{{ v.id }}</strong>: {{ v.description or v.help }}</li>{% endfor %}</ul>
      {% endif %}
    </article>
  {% else %}
    <p>No pages were scanned.</p>
  {% endfor %}
  </div>
</section>
</main>
<footer>
<p>WCAG 2.1/2.2 compliance assessment generated by a11y-report.</p>
<p>Automated checks cover only part of WCAG. Manual review is still required.</p>
</footer>
</div>
{% if not printable %}<script>{{ script|safe }}</script>{% endif %}
</body>
</html>
"""

_template = Template(TEMPLATE, autoescape=True)


def level_from_tags(tags: Sequence[str]) -> Optional[str]:
    """Conformance level from axe tags such as ``wcag2aa`` or ``wcag21a``."""
    for tag in tags:
        m = _WCAG_LEVEL_TAG.match(tag)
        if m:
            return m.group(1).upper()
    return None


def score_color(score: int) -> str:
    if score >= 90:
        return "var(--success-color)"
    if score >= 70:
        return "var(--warning-color)"
    return "var(--error-color)"


def _violation_card(
    finding: Finding, page: PageScanResult, registry: RuleRegistry, config: ReportConfig
) -> Dict[str, Any]:
    rule = registry.get_rule(finding.id)
    severity = resolve_severity(finding, registry)
    if rule is not None:
        title = rule.title
        principle = rule.principle
        level = rule.level
        explanation = rule.explanation
    else:
        title = finding.help or finding.id
        principles = classify_principles(finding.tags)
        principle = principles[0].capitalize() if principles else "General"
        level = level_from_tags(finding.tags) or config.wcag_level
        explanation = finding.description or finding.help or "No detailed explanation available."
    return {
        "id": finding.id,
        "rule": rule,
        "title": title,
        "severity": severity.value,
        "severity_label": severity.label,
        "principle": principle,
        "level": level,
        "explanation": explanation,
        "nodes": finding.nodes,
        "tags": finding.tags,
        "help_url": finding.help_url,
        "page_name": page.test_name,
        "page_url": page.url,
        "search": " ".join([finding.id, title, explanation, finding.description]).lower(),
    }


def _group_cards(cards: List[Dict[str, Any]], by_category: bool) -> List[Dict[str, Any]]:
    if not by_category:
        return [{"name": None, "cards": cards}] if cards else []
    groups = []
    for name in CATEGORY_ORDER:
        members = [c for c in cards if c["principle"] == name]
        if members:
            groups.append({"name": name, "cards": members})
    return groups


def _severity_cards(report: AggregateReport) -> List[Dict[str, Any]]:
    counts = {
        Impact.CRITICAL: report.critical_violations,
        Impact.SERIOUS: report.serious_violations,
        Impact.MODERATE: report.moderate_violations,
        Impact.MINOR: report.minor_violations,
    }
    total = report.total_violations
    cards = []
    for impact, title, icon, description in SEVERITY_CARDS:
        count = counts[impact]
        cards.append({
            "key": impact.value,
            "label": impact.label,
            "title": title,
            "icon": icon,
            "description": description,
            "count": count,
            "percent": compute_compliance_score(count, total),
        })
    return cards


def _render(
    report: AggregateReport,
    page_results: Sequence[PageScanResult],
    registry: RuleRegistry,
    config: Optional[ReportConfig],
    generated_at: Optional[datetime],
    printable: bool,
    export_href: Optional[str],
) -> str:
    config = config or ReportConfig()
    generated_at = generated_at or utcnow()
    cards = [
        _violation_card(v, page, registry, config)
        for page in page_results
        for v in page.violations
    ]
    pages = [p for p in page_results if not (config.show_only_failures and p.passed)]
    return _template.render(
        config=config,
        report=report,
        css=CSS,
        script=SCRIPT,
        printable=printable,
        open_attr=" open" if printable else "",
        export_href=export_href if config.export_json else None,
        generated_at=generated_at.strftime("%B %d, %Y %H:%M %Z").strip(),
        score_color=score_color(report.summary.compliance_score),
        severity_cards=_severity_cards(report),
        category_order=CATEGORY_ORDER,
        violation_count=len(cards),
        violation_groups=_group_cards(cards, config.group_by_category),
        pages=pages,
    )


def render(
    report: AggregateReport,
    page_results: Sequence[PageScanResult],
    registry: RuleRegistry,
    config: Optional[ReportConfig] = None,
    *,
    generated_at: Optional[datetime] = None,
    export_href: Optional[str] = "results.json",
) -> str:
    """Render the interactive report document."""
    return _render(report, page_results, registry, config, generated_at, False, export_href)


def render_printable(
    report: AggregateReport,
    page_results: Sequence[PageScanResult],
    registry: RuleRegistry,
    config: Optional[ReportConfig] = None,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the print-optimized variant: no script, no controls, sections open."""
    return _render(report, page_results, registry, config, generated_at, True, None)


def printable_path(out_html: Path) -> Path:
    return out_html.with_name(f"{out_html.stem}-printable{out_html.suffix}")


def write_report(
    out_html: Path,
    report: AggregateReport,
    registry: RuleRegistry,
    config: Optional[ReportConfig] = None,
    *,
    generated_at: Optional[datetime] = None,
) -> List[Path]:
    """Render ``report`` to ``out_html`` (plus the printable variant when configured).

    Returns the paths written. I/O errors propagate to the caller.
    """
    config = config or ReportConfig()
    pages = report.test_results
    out_html.write_text(
        render(report, pages, registry, config, generated_at=generated_at), encoding="utf-8"
    )
    written = [out_html]
    if config.generate_printable_version:
        path = printable_path(out_html)
        path.write_text(
            render_printable(report, pages, registry, config, generated_at=generated_at),
            encoding="utf-8",
        )
        written.append(path)
    return written


__all__ = ["render", "render_printable", "write_report", "level_from_tags", "printable_path"]
