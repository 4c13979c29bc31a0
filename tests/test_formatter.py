"""
Plinth — Output Formatter Tests
================================
Report rendering and the three export formats.

Run: python -m pytest tests/test_formatter.py -v
"""

import json
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.agents.enhancer import AISuggestions
from src.pipeline.formatter import ExportFormatError, OutputFormatter
from src.pipeline.positioning import PositioningDocument, generate_document
from src.utils.text_utils import ANSI_PATTERN, render_table, slugify, strip_ansi, style, wrap_text
from tests.sample_inputs import ACME_INPUT, ANALYTICS_INPUT

TODAY = date(2024, 3, 9)


def _formatter(inputs=ANALYTICS_INPUT, suggestions=None) -> OutputFormatter:
    return OutputFormatter(generate_document(inputs), suggestions)


def test_cli_report_sections():
    report = strip_ansi(_formatter().format_cli())

    assert "POSITIONING STATEMENT" in report
    assert "📦 Acme Analytics" in report
    assert "  CTA: Get Started" in report
    assert "    3. empower non-technical teams" in report
    assert "    3. AI-powered insights" in report
    assert "AI Suggestions" not in report
    assert report.splitlines()[0] == "═" * 70


def test_cli_report_is_styled():
    assert ANSI_PATTERN.search(_formatter().format_cli())


def test_text_export_has_no_escape_codes():
    text = _formatter().export_text()
    assert "\x1b" not in text
    assert not ANSI_PATTERN.search(text)
    assert text == strip_ansi(text)


def test_json_export_roundtrip():
    formatter = _formatter()
    data = json.loads(formatter.export_json())

    assert PositioningDocument.from_dict(data) == formatter.doc
    assert data == formatter.doc.to_dict()
    assert formatter.export_json().startswith('{\n  "productName": "Acme Analytics"')
    assert "✓" in formatter.export_json()


def test_markdown_export():
    md = _formatter().export_markdown()
    lines = md.split("\n")

    assert lines[0] == "# Acme Analytics - Positioning Statement"
    assert "| Feature | Acme Analytics | Excel | Google Sheets |" in lines
    assert "| --- | --- | --- | --- |" in lines
    assert "| no-code setup | ✓ | ✗ | ✗ |" in lines
    assert "1. make data-driven decisions faster" in lines
    assert "- hiring a data analyst" in lines
    assert lines[-1] == "**Market Category:** business intelligence platform"

    order = [
        "## 🎯 Core Positioning Statement",
        "### 30-Second Version",
        "### 2-Minute Version",
        "## 🌟 Website Hero Copy",
        "## 📊 Competitive Positioning Matrix",
        "## 🏗️ Messaging Hierarchy",
        "## 📋 Raw Framework Data",
    ]
    positions = [lines.index(heading) for heading in order]
    assert positions == sorted(positions)


def test_suggestions_section():
    suggestions = AISuggestions(
        problem="struggle with stale reports",
        alternative_positioning=["Acme turns spreadsheets into live dashboards"],
        suggested_categories=["Spreadsheet replacement"],
        critique="- Name a concrete outcome",
    )
    formatter = _formatter(ACME_INPUT, suggestions)

    report = strip_ansi(formatter.format_cli())
    assert "🤖 AI Suggestions:" in report
    assert "  Inferred Problem: struggle with stale reports" in report
    assert "    1. Spreadsheet replacement" in report

    md = formatter.export_markdown()
    assert "## 🤖 AI Suggestions" in md
    assert md.index("## 🤖 AI Suggestions") < md.index("## 📋 Raw Framework Data")

    # Suggestions are never part of the document itself
    assert "struggle with stale reports" not in formatter.export_json()


def test_empty_suggestions_are_ignored():
    assert _formatter(suggestions=AISuggestions()).suggestions is None


def test_filename():
    assert _formatter().filename("markdown", today=TODAY) == "positioning-acme-analytics-2024-03-09.md"
    assert _formatter().filename("text", today=TODAY).endswith(".txt")
    assert _formatter().filename("json", today=TODAY).endswith(".json")


def test_export_writes_file(tmp_path):
    formatter = _formatter(ACME_INPUT)
    path = formatter.export("json", output_dir=tmp_path, today=TODAY)

    assert path == tmp_path / "positioning-acme-2024-03-09.json"
    assert json.loads(path.read_text(encoding="utf-8")) == formatter.doc.to_dict()

    md_path = formatter.export("markdown", output_dir=tmp_path, today=TODAY)
    assert md_path.read_text(encoding="utf-8") == formatter.export_markdown()


def test_unknown_export_format(tmp_path):
    with pytest.raises(ExportFormatError, match="Unknown format: pdf"):
        _formatter().export("pdf", output_dir=tmp_path)
    assert list(tmp_path.iterdir()) == []


# ── Text utilities ────────────────────────────────────────────────────

def test_wrap_text():
    assert wrap_text("one two three four", 9) == "one two\nthree four"
    assert wrap_text("one two three four", 8) == "one two\nthree\nfour"
    assert wrap_text("supercalifragilistic word", 5) == "supercalifragilistic\nword"
    assert wrap_text("", 10) == ""


def test_slugify():
    assert slugify("Acme  Analytics\tPro") == "acme-analytics-pro"
    assert slugify("Huddle Board") == "huddle-board"


def test_style_and_strip():
    styled = style("hello", "bold", "cyan")
    assert styled == "\x1b[1;36mhello\x1b[0m"
    assert strip_ansi(styled) == "hello"
    assert style("plain") == "plain"


def test_render_table_pads_short_headers():
    table = strip_ansi(render_table(["Feature", "Acme"], [["sync", "✓", "✗", "✗"]]))
    lines = table.split("\n")

    assert len(lines) == 5
    assert len({len(line) for line in lines}) == 1
    assert "│ sync    │ ✓    │ ✗ │ ✗ │" in lines


def test_filename_defaults_to_utc_date():
    name = _formatter(ACME_INPUT).filename("markdown")
    assert name == f"positioning-acme-{datetime.now(timezone.utc).date().isoformat()}.md"
