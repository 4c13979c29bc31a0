"""
Plinth — Positioning Statement Generator CLI
=============================================
Interactive intake for April Dunford's framework, then the full positioning
document, then an optional export.

Usage:
    python -m src.pipeline.run                           # interactive
    python -m src.pipeline.run --input inputs.json       # skip the questions
    python -m src.pipeline.run --format markdown         # skip the export menu
    python -m src.pipeline.run --ai                      # add model suggestions
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from config.settings import LOG_FORMAT, LOG_LEVEL
from src.agents.enhancer import AISuggestions, PositioningEnhancer
from src.pipeline.formatter import OutputFormatter
from src.pipeline.intake import EXPORT_CHOICES, choose_export_format, collect_input
from src.pipeline.positioning import PositioningDocument, PositioningInput, generate_document
from src.utils.text_utils import style


logger = logging.getLogger(__name__)


def load_input(path: Path | str) -> PositioningInput:
    """Read the six answers from a JSON file (camelCase keys, as exported in rawData)."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    # Accept a full exported document as well as bare inputs
    return PositioningInput.from_dict(data.get("rawData", data))


class PositioningPipeline:

    def __init__(self, enhancer: Optional[PositioningEnhancer] = None,
                 ask: Callable[[str], str] = input, echo: Callable[[str], None] = print):
        self.enhancer = enhancer
        self.ask = ask
        self.echo = echo

    async def _enhance(self, inputs: PositioningInput) -> tuple[PositioningDocument, AISuggestions]:
        # The heuristic document is complete on its own; the model only
        # supplies the pitch problem and the side suggestions.
        baseline = generate_document(inputs)
        suggestions = await self.enhancer.suggest(inputs, baseline.positioning_statement)
        if not suggestions.problem:
            return baseline, suggestions
        return generate_document(inputs, problem=suggestions.problem), suggestions

    def build(self, inputs: PositioningInput) -> tuple[PositioningDocument, Optional[AISuggestions]]:
        if self.enhancer is None or not self.enhancer.is_enabled():
            if self.enhancer is not None:
                self.echo(style("⚠️  No ANTHROPIC_API_KEY set, skipping AI suggestions", "yellow"))
            return generate_document(inputs), None

        self.echo(style("🤖 Asking the model for suggestions...", "gray"))
        return asyncio.run(self._enhance(inputs))

    def run(self, inputs: PositioningInput = None, export_format: str = None,
            output_dir: Path | str = None) -> dict:
        self.echo(style("\n🎯 POSITIONING STATEMENT GENERATOR", "bold", "cyan"))
        self.echo(style("Based on April Dunford's \"Obviously Awesome\" framework\n", "gray"))

        if inputs is None:
            inputs = collect_input(ask=self.ask, echo=self.echo)

        self.echo(style("\n🎉 Generating your positioning statement...\n", "bold", "cyan"))
        document, suggestions = self.build(inputs)

        formatter = OutputFormatter(document, suggestions)
        self.echo(formatter.format_cli())

        if export_format is None:
            export_format = choose_export_format(ask=self.ask, echo=self.echo)

        results = {
            "document": document.to_dict(),
            "suggestions": suggestions.to_dict() if suggestions else None,
            "export_path": None,
        }

        if export_format != "none":
            path = formatter.export(export_format, output_dir=output_dir)
            results["export_path"] = str(path)
            self.echo(style(f"\n✓ Saved to {path}\n", "green"))

        self.echo(style("\n🚀 Your positioning is ready! Go nail that messaging.\n", "cyan"))
        return results


def main(argv: list[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Plinth — Positioning Statement Generator")
    parser.add_argument("--input", type=str, default=None,
                        help="JSON file with the six framework answers (skips the questions)")
    parser.add_argument("--format", choices=[value for _, value in EXPORT_CHOICES], default=None,
                        help="Export format (skips the export menu)")
    parser.add_argument("--output-dir", type=str, default=None)
    parser.add_argument("--ai", action="store_true", help="Add model suggestions (needs ANTHROPIC_API_KEY)")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level="DEBUG" if args.verbose else LOG_LEVEL, format=LOG_FORMAT)

    try:
        inputs = load_input(args.input) if args.input else None
        pipeline = PositioningPipeline(enhancer=PositioningEnhancer() if args.ai else None)
        pipeline.run(inputs, export_format=args.format, output_dir=args.output_dir)
    except (KeyboardInterrupt, EOFError):
        print(style("\n❌ Cancelled", "red"), file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Session failed", exc_info=True)
        print(style("\n❌ Error:", "red"), e, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
