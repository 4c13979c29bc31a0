"""
Plinth — Heuristic Problem Inferencer
======================================
Guesses the customer pain implied by the competitive alternatives when no
model suggestion is available.

Two rule sets ship side by side:

  FALLBACK_MATCHER — loose substring scan over the lowercased alternatives.
                     Used by infer_problem() and the enhancer's fallback.
                     Returns a full "struggle with ..." clause.
  PITCH_MATCHER    — case-sensitive exact match on whole alternatives, no
                     "hire" rule. Used inline by the 2-minute elevator pitch,
                     whose template already says "struggle with".

["hiring a data analyst"] is the easy way to see the difference: the
fallback says "high costs", the pitch says "inefficient workflows using ...".
"""

from dataclasses import dataclass
from enum import Enum


class MatchMode(Enum):
    SUBSTRING = "substring"     # any keyword inside the lowercased, joined text
    EXACT = "exact"             # any keyword equal to one alternative, case-sensitive


@dataclass(frozen=True)
class ProblemRule:
    keywords: tuple[str, ...]
    clause: str


@dataclass(frozen=True)
class ProblemMatcher:
    """Ordered, first-match-wins keyword rules with a templated default."""
    rules: tuple[ProblemRule, ...]
    mode: MatchMode
    default: str = "inefficient workflows using {first}"
    prefix: str = ""

    def _matches(self, rule: ProblemRule, alternatives: list[str], haystack: str) -> bool:
        if self.mode is MatchMode.EXACT:
            return any(keyword in alternatives for keyword in rule.keywords)
        return any(keyword in haystack for keyword in rule.keywords)

    def infer(self, alternatives: list[str]) -> str:
        alternatives = list(alternatives or [])
        haystack = " ".join(alternatives).lower()

        for rule in self.rules:
            if self._matches(rule, alternatives, haystack):
                return self.prefix + rule.clause

        first = alternatives[0] if alternatives else ""
        return self.prefix + self.default.format(first=first)


# ─── Rule Sets ────────────────────────────────────────────────────────

FALLBACK_MATCHER = ProblemMatcher(
    rules=(
        ProblemRule(("spreadsheet", "excel", "google sheets"), "manual, error-prone processes"),
        ProblemRule(("email", "slack"), "scattered, unorganized communication"),
        ProblemRule(("nothing", "doing it manually"), "this problem without any solution"),
        ProblemRule(("hire", "hiring"), "high costs and slow turnaround times"),
    ),
    mode=MatchMode.SUBSTRING,
    prefix="struggle with ",
)

PITCH_MATCHER = ProblemMatcher(
    rules=(
        ProblemRule(("spreadsheets", "Excel"), "manual, error-prone processes"),
        ProblemRule(("email", "Slack"), "scattered, unorganized communication"),
        ProblemRule(("nothing",), "this problem without any solution"),
    ),
    mode=MatchMode.EXACT,
)


def infer_problem(alternatives: list[str]) -> str:
    """Full problem clause, e.g. "struggle with manual, error-prone processes"."""
    return FALLBACK_MATCHER.infer(alternatives)


def infer_pitch_problem(alternatives: list[str]) -> str:
    """Bare clause for the 2-minute pitch template (no "struggle with")."""
    return PITCH_MATCHER.infer(alternatives)
