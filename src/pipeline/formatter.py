"""
Plinth — Output Formatter
==========================
Renders a PositioningDocument as a styled terminal report and exports it as
Markdown, plain text or JSON.

Export filenames: positioning-{product slug}-{YYYY-MM-DD}.{md|txt|json}
"""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

from config.settings import EXPORT_DIR, EXPORT_EXTENSIONS, REPORT_WIDTH, WRAP_WIDTH
from src.agents.enhancer import AISuggestions
from src.pipeline.positioning import PositioningDocument
from src.utils.text_utils import render_table, slugify, strip_ansi, style, wrap_text


logger = logging.getLogger(__name__)


class ExportFormatError(ValueError):
    """Requested export format is not one of markdown, text, json."""


class OutputFormatter:
    """
    Usage:
        formatter = OutputFormatter(document)
        print(formatter.format_cli())
        path = formatter.export("markdown")
    """

    def __init__(self, document: PositioningDocument, suggestions: Optional[AISuggestions] = None):
        self.doc = document
        self.suggestions = suggestions if suggestions and not suggestions.is_empty() else None

    # ── Terminal ──────────────────────────────────────────────────────

    def format_cli(self) -> str:
        doc = self.doc
        lines = []

        lines.append(style("═" * REPORT_WIDTH, "cyan"))
        lines.append(style("           POSITIONING STATEMENT           ", "bold", "cyan"))
        lines.append(style("═" * REPORT_WIDTH, "cyan"))
        lines.append("")

        lines.append(style(f"📦 {doc.product_name}", "bold", "white"))
        lines.append("")

        lines.append(style("🎯 Core Positioning Statement:", "bold", "yellow"))
        lines.append(style(wrap_text(doc.positioning_statement, WRAP_WIDTH), "white"))
        lines.append("")

        lines.append(style("⏱️  30-Second Elevator Pitch:", "bold", "green"))
        lines.append(style(wrap_text(doc.elevator_pitch_30, WRAP_WIDTH), "white"))
        lines.append("")

        lines.append(style("⏱️  2-Minute Elevator Pitch:", "bold", "green"))
        for line in doc.elevator_pitch_2min.split("\n"):
            lines.append(style(wrap_text(line.strip(), WRAP_WIDTH), "white"))
        lines.append("")

        lines.append(style("🌟 Website Hero Copy:", "bold", "magenta"))
        lines.append(style(f"  Headline: {doc.hero_copy.headline}", "white"))
        lines.append(style(f"  Subheadline: {doc.hero_copy.subheadline}", "white"))
        lines.append(style(f"  CTA: {doc.hero_copy.cta}", "white"))
        lines.append("")

        lines.append(style("📊 Competitive Positioning Matrix:", "bold", "blue"))
        lines.append(render_table(doc.competitive_matrix.headers, doc.competitive_matrix.rows))
        lines.append("")

        hierarchy = doc.messaging_hierarchy
        lines.append(style("🏗️  Messaging Hierarchy:", "bold", "cyan"))
        lines.append(style(f"  Top-Level Narrative: {hierarchy.top_level}", "white"))
        lines.append(style("  Pillar Messages:", "white"))
        for i, pillar in enumerate(hierarchy.pillars, 1):
            lines.append(style(f"    {i}. {pillar}", "white"))
        lines.append(style("  Proof Points:", "white"))
        for i, point in enumerate(hierarchy.proof_points, 1):
            lines.append(style(f"    {i}. {point}", "white"))
        lines.append("")

        if self.suggestions:
            lines.extend(self._cli_suggestions())

        lines.append(style("═" * REPORT_WIDTH, "cyan"))

        return "\n".join(lines)

    def _cli_suggestions(self) -> list[str]:
        s = self.suggestions
        lines = [style("🤖 AI Suggestions:", "bold", "magenta")]

        if s.problem:
            lines.append(style(f"  Inferred Problem: {s.problem}", "white"))
        if s.improved_values:
            lines.append(style("  Improved Value Themes:", "white"))
            for i, value in enumerate(s.improved_values, 1):
                lines.append(style(f"    {i}. {value}", "white"))
        if s.alternative_positioning:
            lines.append(style("  Alternative Positioning:", "white"))
            for i, alt in enumerate(s.alternative_positioning, 1):
                lines.append(style(f"    {i}. {alt}", "white"))
        if s.suggested_categories:
            lines.append(style("  Suggested Categories:", "white"))
            for i, category in enumerate(s.suggested_categories, 1):
                lines.append(style(f"    {i}. {category}", "white"))
        if s.critique:
            lines.append(style("  Critique:", "white"))
            for line in s.critique.split("\n"):
                lines.append(style(f"    {line.strip()}", "gray"))

        lines.append("")
        return lines

    # ── Exports ───────────────────────────────────────────────────────

    def export_markdown(self) -> str:
        doc = self.doc
        md = []

        md.append(f"# {doc.product_name} - Positioning Statement")
        md.append("")
        md.append("> Generated with Plinth, the positioning statement generator")
        md.append("> Based on April Dunford's \"Obviously Awesome\" framework")
        md.append("")

        md.append("## 🎯 Core Positioning Statement")
        md.append("")
        md.append(doc.positioning_statement)
        md.append("")

        md.append("## ⏱️ Elevator Pitches")
        md.append("")
        md.append("### 30-Second Version")
        md.append("")
        md.append(doc.elevator_pitch_30)
        md.append("")
        md.append("### 2-Minute Version")
        md.append("")
        md.append(doc.elevator_pitch_2min)
        md.append("")

        md.append("## 🌟 Website Hero Copy")
        md.append("")
        md.append(f"**Headline:** {doc.hero_copy.headline}")
        md.append("")
        md.append(f"**Subheadline:** {doc.hero_copy.subheadline}")
        md.append("")
        md.append(f"**CTA:** {doc.hero_copy.cta}")
        md.append("")

        columns = doc.competitive_matrix.headers[1:]
        md.append("## 📊 Competitive Positioning Matrix")
        md.append("")
        md.append(f"| Feature | {' | '.join(columns)} |")
        md.append(f"| --- | {' | '.join('---' for _ in columns)} |")
        for row in doc.competitive_matrix.rows:
            md.append(f"| {' | '.join(row)} |")
        md.append("")

        hierarchy = doc.messaging_hierarchy
        md.append("## 🏗️ Messaging Hierarchy")
        md.append("")
        md.append(f"**Top-Level Narrative:** {hierarchy.top_level}")
        md.append("")
        md.append("**Pillar Messages:**")
        for i, pillar in enumerate(hierarchy.pillars, 1):
            md.append(f"{i}. {pillar}")
        md.append("")
        md.append("**Proof Points:**")
        for i, point in enumerate(hierarchy.proof_points, 1):
            md.append(f"{i}. {point}")
        md.append("")

        if self.suggestions:
            md.extend(self._markdown_suggestions())

        raw = doc.raw_data
        md.append("---")
        md.append("")
        md.append("## 📋 Raw Framework Data")
        md.append("")
        md.append("**Competitive Alternatives:**")
        md.extend(f"- {alt}" for alt in raw.competitive_alternatives)
        md.append("")
        md.append("**Unique Attributes:**")
        md.extend(f"- {attr}" for attr in raw.unique_attributes)
        md.append("")
        md.append("**Value Themes:**")
        md.extend(f"- {value}" for value in raw.value_themes)
        md.append("")
        md.append(f"**Target Market:** {raw.target_market}")
        md.append("")
        md.append(f"**Market Category:** {raw.market_category}")

        return "\n".join(md)

    def _markdown_suggestions(self) -> list[str]:
        s = self.suggestions
        md = ["## 🤖 AI Suggestions", ""]

        if s.problem:
            md.extend([f"**Inferred Problem:** {s.problem}", ""])
        for title, items in (
            ("Improved Value Themes", s.improved_values),
            ("Alternative Positioning", s.alternative_positioning),
            ("Suggested Categories", s.suggested_categories),
        ):
            if items:
                md.append(f"**{title}:**")
                md.extend(f"{i}. {item}" for i, item in enumerate(items, 1))
                md.append("")
        if s.critique:
            md.extend(["**Critique:**", "", s.critique, ""])

        return md

    def export_text(self) -> str:
        return strip_ansi(self.format_cli())

    def export_json(self) -> str:
        return json.dumps(self.doc.to_dict(), indent=2, ensure_ascii=False)

    def filename(self, fmt: str, today: date = None) -> str:
        if fmt not in EXPORT_EXTENSIONS:
            raise ExportFormatError(f"Unknown format: {fmt}")
        stamp = (today or datetime.now(timezone.utc).date()).isoformat()
        return f"positioning-{slugify(self.doc.product_name)}-{stamp}.{EXPORT_EXTENSIONS[fmt]}"

    def export(self, fmt: str, output_dir: Path | str = None, today: date = None) -> Path:
        """Write the document in `fmt` and return the file path."""
        renderers = {
            "markdown": self.export_markdown,
            "text": self.export_text,
            "json": self.export_json,
        }
        if fmt not in renderers:
            raise ExportFormatError(f"Unknown format: {fmt}")

        output_dir = Path(output_dir) if output_dir else EXPORT_DIR
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / self.filename(fmt, today=today)

        with open(path, "w", encoding="utf-8") as f:
            f.write(renderers[fmt]())

        logger.info(f"Exported {fmt} to {path}")
        return path
