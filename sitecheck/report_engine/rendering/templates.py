"""Jinja2 templates for the interactive report document."""

BASE_STYLES = """
:root { color-scheme: light; }
body { margin: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; color: #1d2939; background: #f8fafc; }
.report-header { background: #0f172a; color: #fff; padding: 1rem 1.5rem; }
.report-header h1 { margin: 0 0 0.25rem; font-size: 1.5rem; }
.report-header p { margin: 0; color: #cbd5e1; }
.view-toggle { position: absolute; opacity: 0; pointer-events: none; }
.report-shell { display: grid; grid-template-columns: 260px minmax(0, 1fr); min-height: 100vh; }
.sidebar { background: #fff; border-right: 1px solid #d0d7de; padding: 1rem; }
.sidebar h2 { font-size: 0.8rem; text-transform: uppercase; letter-spacing: 0.05em; color: #475467; margin: 1rem 0 0.35rem; }
.sidebar ul { list-style: none; margin: 0; padding: 0; }
.sidebar label { display: flex; justify-content: space-between; gap: 0.5rem; padding: 0.35rem 0.5rem; border-radius: 6px; cursor: pointer; }
.sidebar label:hover { background: #eef2f6; }
.panels { padding: 1.25rem 1.5rem; }
.panel { display: none; }
.panel h2 { margin-top: 0; }
.status-tag { display: inline-block; border-radius: 999px; padding: 1px 8px; font-size: 0.75rem; font-weight: 600; border: 1px solid #d0d7de; text-transform: uppercase; }
.status-tag.status-fail { background: #ffe5e5; border-color: #f3b5b3; color: #b42318; }
.status-tag.status-warn { background: #fff4ce; border-color: #f7d070; color: #6a4d00; }
.status-tag.status-pass { background: #edf7ed; border-color: #cce4cc; color: #1d7a1d; }
table { border-collapse: collapse; width: 100%; margin: 0.5rem 0 1rem; background: #fff; }
th, td { border: 1px solid #d0d7de; padding: 6px 8px; text-align: left; vertical-align: top; }
th { background: #f6f8fa; }
tr.tone-error td { background: #ffe5e5; }
tr.tone-warning td { background: #fff4ce; }
tr.tone-ok td { background: #edf7ed; }
td ul { margin: 0; padding-left: 1.1rem; }
.details { color: #475467; font-size: 0.9rem; margin: 0.25rem 0; }
.bucket { margin-bottom: 2rem; }
.summary-cards { display: grid; grid-template-columns: repeat(auto-fit, minmax(160px, 1fr)); gap: 0.75rem; margin: 1rem 0; }
.summary-card { background: #fff; border: 1px solid #d0d7de; border-radius: 8px; padding: 0.75rem 1rem; }
.summary-card dt { font-size: 0.8rem; color: #475467; }
.summary-card dd { margin: 0.25rem 0 0; font-size: 1.4rem; font-weight: 600; }
details.page-group { background: #fff; border: 1px solid #d0d7de; border-radius: 8px; margin: 0.5rem 0; padding: 0.5rem 0.75rem; }
details.page-group > summary { cursor: pointer; display: flex; justify-content: space-between; gap: 0.5rem; }
.page-card { border-top: 1px solid #eef2f6; padding: 0.5rem 0; }
.page-card__header { display: flex; justify-content: space-between; align-items: center; gap: 0.75rem; }
.page-card__header h4 { margin: 0; }
.accordion-controls { margin: 0.5rem 0; display: flex; gap: 0.5rem; }
.test-card { background: #fff; border: 1px solid #d0d7de; border-radius: 8px; margin: 0.5rem 0; padding: 0.5rem 0.75rem; }
.test-card[data-hidden="true"] { display: none; }
.attempt { border-top: 1px solid #eef2f6; padding: 0.5rem 0; }
.attachment img { max-width: 100%; border: 1px solid #d0d7de; }
pre { background: #0f172a; color: #e2e8f0; padding: 0.5rem; overflow-x: auto; white-space: pre-wrap; }
.fragment { background: #fff; border: 1px dashed #d0d7de; padding: 0.5rem; }
@media (max-width: 900px) { .report-shell { grid-template-columns: 1fr; } }
"""

BEHAVIOUR_SCRIPT = """
(function () {
  document.querySelectorAll('[data-requires-script]').forEach(function (node) {
    node.hidden = false;
  });

  document.querySelectorAll('[data-accordion-action]').forEach(function (button) {
    button.addEventListener('click', function () {
      var open = button.getAttribute('data-accordion-action') === 'expand';
      var scope = button.closest('.panel') || document;
      scope.querySelectorAll('details').forEach(function (node) {
        node.open = open;
      });
    });
  });

  var statusInputs = Array.from(document.querySelectorAll('.status-filters input[type="checkbox"]'));
  var searchInput = document.getElementById('attempt-search');
  var testCards = Array.from(document.querySelectorAll('.test-card'));

  function applyFilters() {
    var active = statusInputs.filter(function (input) { return input.checked; }).map(function (input) { return input.value; });
    var term = searchInput ? searchInput.value.trim().toLowerCase() : '';
    testCards.forEach(function (card) {
      var status = card.getAttribute('data-status');
      var matchesStatus = active.length === 0 || active.indexOf(status) !== -1;
      var matchesSearch = !term || (card.textContent || '').toLowerCase().indexOf(term) !== -1;
      card.setAttribute('data-hidden', matchesStatus && matchesSearch ? 'false' : 'true');
    });
  }

  statusInputs.forEach(function (input) { input.addEventListener('change', applyFilters); });
  if (searchInput) { searchInput.addEventListener('input', applyFilters); }
})();
"""

FRAGMENTS_TEMPLATE = """
{%- macro tone_class(tone) -%}{% if tone %}tone-{{ tone }}{% endif %}{%- endmacro -%}

{%- macro status_tag(status, label=None) -%}
<span class="status-tag status-{{ status }}">{{ label or status }}</span>
{%- endmacro -%}

{%- macro cell(value) -%}
{%- if value is string -%}{{ value }}
{%- elif value -%}<ul>{% for item in value %}<li>{{ item }}</li>{% endfor %}</ul>
{%- else -%}—{%- endif -%}
{%- endmacro -%}

{%- macro overview(metrics, notes) -%}
{% if metrics %}
<table class="overview-table">
  <thead><tr><th>Metric</th><th>Value</th></tr></thead>
  <tbody>
  {% for metric in metrics %}
    <tr><th scope="row">{{ metric.label }}</th><td data-metric="{{ metric.label }}">{{ metric.display }}</td></tr>
  {% endfor %}
  </tbody>
</table>
{% endif %}
{% for note in notes %}<p class="details">{{ note }}</p>{% endfor %}
{%- endmacro -%}

{%- macro table(data) -%}
{% if data.heading %}<h4>{{ data.heading }}</h4>{% endif %}
{% if data.rows %}
<table>
  <thead><tr>{% for column in data.columns %}<th>{{ column }}</th>{% endfor %}</tr></thead>
  <tbody>
  {% for row in data.rows %}
    <tr class="{{ tone_class(row.tone) }}">{% for value in row.cells %}<td>{{ cell(value) }}</td>{% endfor %}</tr>
  {% endfor %}
  </tbody>
</table>
{% else %}
<p class="details">{{ data.empty_text }}</p>
{% endif %}
{%- endmacro -%}

{%- macro page_card(card) -%}
<section class="page-card">
  <div class="page-card__header">
    <h4>{{ card.title }}</h4>
    {{ status_tag(card.status, card.status_label) }}
  </div>
  {% for line in card.details %}<p class="details">{{ line }}</p>{% endfor %}
  {% for section in card.sections %}
  <details class="card-section">
    <summary>{{ section.label }} ({{ section.items | length }})</summary>
    <ul class="details">{% for item in section.items %}<li>{{ item }}</li>{% endfor %}</ul>
  </details>
  {% endfor %}
  {% for data in card.tables %}{{ table(data) }}{% endfor %}
</section>
{%- endmacro -%}
"""

DOCUMENT_TEMPLATE = """{%- import "fragments.html.j2" as fragments -%}
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{{ run.run_id }} – {{ run.title }}</title>
  <style>{{ styles }}
{% for panel in panel_ids %}#view-{{ panel }}:checked ~ .report-shell #panel-{{ panel }} { display: block; }
#view-{{ panel }}:checked ~ .report-shell label[for="view-{{ panel }}"] { background: #e0e7ff; font-weight: 600; }
{% endfor %}</style>
</head>
<body>
  <header class="report-header">
    <h1>{{ run.title }}</h1>
    <p>{{ run.run_id }} • {{ duration }}{% if run.site %} • {{ run.site.name }}{% endif %}{% if run.profile %} • profile {{ run.profile }}{% endif %}</p>
  </header>
  {% for panel in panel_ids %}
  <input type="radio" name="report-view" id="view-{{ panel }}" class="view-toggle"{% if loop.first %} checked{% endif %} />
  {% endfor %}
  <div class="report-shell">
    <nav class="sidebar" aria-label="Report sections">
      <ul>
        <li><label for="view-summary"><span>Summary</span></label></li>
      </ul>
      {% for domain in domains %}
      <h2>{{ domain.label }}</h2>
      <ul>
        {% for topic in domain.topics %}
        <li><label for="view-{{ topic.panel_id }}"><span>{{ topic.title }}</span>{{ fragments.status_tag(topic.status) }}</label></li>
        {% endfor %}
      </ul>
      {% endfor %}
      <h2>Debug</h2>
      <ul>
        <li><label for="view-tests"><span>Test attempts</span></label></li>
      </ul>
    </nav>
    <main class="panels">
      <section class="panel" id="panel-summary" aria-label="Run summary">
        <h2>Run summary</h2>
        <dl class="summary-cards">
          {% for card in summary_cards %}
          <div class="summary-card"><dt>{{ card.label }}</dt><dd>{{ card.display }}</dd></div>
          {% endfor %}
        </dl>
        {{ fragments.table(topic_table) }}
        {{ fragments.table(environment_table) }}
      </section>
      {% for topic in topics %}
      <section class="panel" id="panel-{{ topic.panel_id }}" aria-label="{{ topic.title }}">
        <h2>{{ topic.title }} {{ fragments.status_tag(topic.status) }}</h2>
        <p class="details">{{ topic.reason }}</p>
        <div class="accordion-controls" data-requires-script hidden>
          <button type="button" data-accordion-action="expand">Expand all</button>
          <button type="button" data-accordion-action="collapse">Collapse all</button>
        </div>
        {% for section in topic.sections %}
        <article class="bucket" data-project="{{ section.project }}">
          <h3>{{ section.heading }}</h3>
          {{ section.overview }}
          {% if section.fragment %}<div class="fragment">{{ section.fragment }}</div>{% endif %}
          {% for rule_table in section.rule_tables %}{{ rule_table }}{% endfor %}
          {% if section.page_table %}{{ fragments.table(section.page_table) }}{% endif %}
          {% for extra in section.extra_tables %}{{ fragments.table(extra) }}{% endfor %}
          {% if section.page_groups %}
          <h4>{{ section.accordion_heading }}</h4>
          {% for page_group in section.page_groups %}
          <details class="page-group">
            <summary><span>{{ page_group.label }}</span>{{ fragments.status_tag(page_group.status) }}</summary>
            {% for card in page_group.cards %}{{ card }}{% endfor %}
          </details>
          {% endfor %}
          {% endif %}
        </article>
        {% endfor %}
      </section>
      {% endfor %}
      <section class="panel" id="panel-tests" aria-label="Test attempts">
        <h2>Test attempts</h2>
        <div class="status-filters" data-requires-script hidden>
          {% for status in status_filters %}
          <label><input type="checkbox" value="{{ status.value }}" /> {{ status.label }} ({{ status.count }})</label>
          {% endfor %}
          <input type="search" id="attempt-search" placeholder="Filter tests" />
        </div>
        {% for test in run.tests %}
        <details class="test-card" id="{{ test.anchor_id }}" data-status="{{ test.status }}">
          <summary>{{ fragments.status_tag(test.status) }} {{ test.display_title }} <span class="details">{{ test.project_name }}{% if test.flaky %} • flaky{% endif %}</span></summary>
          {% if test.location %}<p class="details">{{ test.location.file }}{% if test.location.line %}:{{ test.location.line }}{% endif %}</p>{% endif %}
          {% for attempt in test.attempts %}
          <div class="attempt">
            <p class="details">Attempt {{ loop.index }} • {{ attempt.status }} • {{ format_duration(attempt.duration_ms) }}{% if attempt.start_time %} • {{ format_datetime(attempt.start_time) }}{% endif %}</p>
            {% for error in attempt.errors %}<pre>{{ error.message }}{% if error.stack %}
{{ error.stack }}{% endif %}</pre>{% endfor %}
            {% for attachment in attempt.attachments %}
            <div class="attachment">
              <p class="details">{{ attachment.name }} ({{ attachment.content_type }}, {{ format_bytes(attachment.size) }})</p>
              {% if attachment.omitted %}<p class="details">{{ attachment.reason }}</p>
              {% elif attachment.data_uri and attachment.content_type.startswith("image/") %}<img src="{{ attachment.data_uri }}" alt="{{ attachment.name }}" />
              {% elif attachment.data_uri %}<a href="{{ attachment.data_uri }}" download="{{ attachment.name }}">Download</a>
              {% elif attachment.text is not none %}<pre>{{ attachment.text }}</pre>{% endif %}
            </div>
            {% endfor %}
            {% if attempt.stdout %}<details><summary>stdout</summary><pre>{{ attempt.stdout | join("") }}</pre></details>{% endif %}
            {% if attempt.stderr %}<details><summary>stderr</summary><pre>{{ attempt.stderr | join("") }}</pre></details>{% endif %}
          </div>
          {% endfor %}
        </details>
        {% else %}
        <p class="details">No tests were recorded.</p>
        {% endfor %}
      </section>
    </main>
  </div>
  <script>{{ script }}</script>
</body>
</html>
"""

TEMPLATES = {
    "fragments.html.j2": FRAGMENTS_TEMPLATE,
    "report.html.j2": DOCUMENT_TEMPLATE,
}
