"""
Plinth — Positioning Enhancer Agent
====================================
Optional model-backed suggestions that sit next to the positioning document:
an inferred customer problem, sharper value props, a critique, alternative
positioning statements and candidate market categories.

The enhancer is advisory. Every capability has a local fallback and nothing
raises to the caller:

  infer_problem          → heuristic problem clause
  improve_value_prop     → the original value prop
  critique_positioning   → None
  generate_alternatives  → []
  suggest_category       → []

Enabled only when an API key (or a client) is supplied at construction. When
disabled no client is created and no request is ever made.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from anthropic import AsyncAnthropic

from config.settings import ANTHROPIC_API_KEY, ENHANCER_MODEL, ENHANCER_CALLS, ENHANCER_TIMEOUT
from src.pipeline.positioning import PositioningInput
from src.pipeline.problem import infer_problem


logger = logging.getLogger(__name__)


class EnhancementFailure(RuntimeError):
    """A model call that could not produce a usable answer."""


# ─── Data Models ──────────────────────────────────────────────────────

@dataclass
class EnhancementResult:
    """Outcome of one model call: either a value or the reason it failed."""
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: Any) -> Any:
        return self.value if self.ok else default


@dataclass
class AISuggestions:
    """Advisory output, kept apart from the canonical document."""
    problem: Optional[str] = None
    improved_values: list[str] = field(default_factory=list)
    critique: Optional[str] = None
    alternative_positioning: list[str] = field(default_factory=list)
    suggested_categories: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.problem or self.improved_values or self.critique
                    or self.alternative_positioning or self.suggested_categories)

    def to_dict(self) -> dict:
        return {
            "problem": self.problem,
            "improvedValues": list(self.improved_values),
            "critique": self.critique,
            "alternativePositioning": list(self.alternative_positioning),
            "suggestedCategories": list(self.suggested_categories),
        }


# ─── Prompts ──────────────────────────────────────────────────────────

INFER_PROBLEM_PROMPT = """You are a product marketing expert. Based on the following information, infer the main problem that the target market is experiencing.

Target Market: {target_market}
Competitive Alternatives: {alternatives}

Respond with a concise problem statement (one sentence, no quotes). Focus on the pain point, not the solution.

Example format: "struggle with manual, time-consuming data entry that causes errors\""""

IMPROVE_VALUE_PROP_PROMPT = """You are a product marketing expert. Improve this value proposition to be more customer-centric and outcome-focused.

Original Value Prop: {value_prop}
Target Market: {target_market}

Rules:
- Focus on outcomes, not features
- Use active voice
- Be specific and concrete
- Keep it under 15 words
- Don't use buzzwords

Respond with ONLY the improved value proposition, no explanation."""

CRITIQUE_PROMPT = """You are April Dunford, positioning expert. Critique this positioning statement and provide 1-2 specific improvements.

Positioning Statement: {statement}

Provide constructive feedback in 2-3 bullet points. Be specific and actionable."""

ALTERNATIVES_PROMPT = """Generate 3 alternative positioning statement variations for:

Product: {product_name}
Target Market: {target_market}
Main Value: {value_theme}
Category: {market_category}

Each variation should emphasize a different angle (outcome-focused, differentiation-focused, category-focused).

Format:
1. [positioning statement]
2. [positioning statement]
3. [positioning statement]"""

CATEGORY_PROMPT = """You are a positioning strategist. Suggest 3 possible market categories for this product.

Product: {product_name}
Unique Attributes: {attributes}
Value Themes: {value_themes}
Target Market: {target_market}

Suggest 3 market categories that would make the value obvious to the target market. Be specific (not just "SaaS" or "platform").

Format:
1. [category name]
2. [category name]
3. [category name]"""


_NUMBERED_LINE = re.compile(r"^\d+\.")
_NUMBER_PREFIX = re.compile(r"^\d+\.\s*")


def parse_numbered_list(text: str) -> list[str]:
    """Keep "1. foo" style lines, minus their numbering."""
    return [
        _NUMBER_PREFIX.sub("", line).strip()
        for line in text.split("\n")
        if _NUMBERED_LINE.match(line)
    ]


# ─── Agent ────────────────────────────────────────────────────────────

class PositioningEnhancer:
    """
    Async gateway to the model.

    Usage:
        enhancer = PositioningEnhancer(api_key="sk-...")
        problem = await enhancer.infer_problem("analysts", ["Excel"])
        suggestions = await enhancer.suggest(inputs, document.positioning_statement)
    """

    def __init__(self, api_key: str = None, client: Any = None, model: str = None):
        api_key = api_key if api_key is not None else ANTHROPIC_API_KEY
        if client is None and api_key:
            client = AsyncAnthropic(api_key=api_key, timeout=ENHANCER_TIMEOUT, max_retries=0)
        self.client = client
        self.model = model or ENHANCER_MODEL

    def is_enabled(self) -> bool:
        return self.client is not None

    async def _complete(self, capability: str, prompt: str) -> EnhancementResult:
        """Single-turn request. Failures come back as a result, never raised."""
        if not self.is_enabled():
            return EnhancementResult(error="enhancer disabled")

        temperature, max_tokens = ENHANCER_CALLS[capability]
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
            if not response.content:
                raise EnhancementFailure("empty response")
            text = response.content[0].text.strip()
            if not text:
                raise EnhancementFailure("blank response")
            return EnhancementResult(value=text)
        except Exception as e:
            logger.warning(f"Enhancer {capability} failed, using fallback: {e}")
            return EnhancementResult(error=str(e))

    async def infer_problem(self, target_market: str, competitive_alternatives: list[str]) -> str:
        prompt = INFER_PROBLEM_PROMPT.format(
            target_market=target_market,
            alternatives=", ".join(competitive_alternatives),
        )
        result = await self._complete("infer_problem", prompt)
        return result.unwrap_or(infer_problem(competitive_alternatives))

    async def improve_value_prop(self, value_prop: str, target_market: str) -> str:
        prompt = IMPROVE_VALUE_PROP_PROMPT.format(value_prop=value_prop, target_market=target_market)
        result = await self._complete("improve_value_prop", prompt)
        if not result.ok:
            return value_prop
        return re.sub(r"['\"]", "", result.value)

    async def critique_positioning(self, positioning_statement: str) -> Optional[str]:
        prompt = CRITIQUE_PROMPT.format(statement=positioning_statement)
        result = await self._complete("critique_positioning", prompt)
        return result.unwrap_or(None)

    async def generate_alternatives(self, product_name: str, target_market: str,
                                    value_theme: str, market_category: str) -> list[str]:
        prompt = ALTERNATIVES_PROMPT.format(
            product_name=product_name,
            target_market=target_market,
            value_theme=value_theme,
            market_category=market_category,
        )
        result = await self._complete("generate_alternatives", prompt)
        return parse_numbered_list(result.value) if result.ok else []

    async def suggest_category(self, product_name: str, unique_attributes: list[str],
                               value_themes: list[str], target_market: str) -> list[str]:
        prompt = CATEGORY_PROMPT.format(
            product_name=product_name,
            attributes=", ".join(unique_attributes),
            value_themes=", ".join(value_themes),
            target_market=target_market,
        )
        result = await self._complete("suggest_category", prompt)
        return parse_numbered_list(result.value) if result.ok else []

    async def suggest(self, inputs: PositioningInput, positioning_statement: str) -> AISuggestions:
        """Run every capability in turn. Returns an empty AISuggestions when disabled."""
        if not self.is_enabled():
            return AISuggestions()

        problem = await self.infer_problem(inputs.target_market, inputs.competitive_alternatives)
        improved = [
            await self.improve_value_prop(value, inputs.target_market)
            for value in inputs.value_themes
        ]
        critique = await self.critique_positioning(positioning_statement)
        alternatives = await self.generate_alternatives(
            inputs.product_name,
            inputs.target_market,
            inputs.value_themes[0] if inputs.value_themes else "",
            inputs.market_category,
        )
        categories = await self.suggest_category(
            inputs.product_name, inputs.unique_attributes,
            inputs.value_themes, inputs.target_market,
        )

        return AISuggestions(
            problem=problem,
            improved_values=improved,
            critique=critique,
            alternative_positioning=alternatives,
            suggested_categories=categories,
        )
