"""
Plinth — Positioning Document Generator
========================================
Turns the six inputs of April Dunford's "Obviously Awesome" framework into
the positioning document: statement, two elevator pitches, hero copy,
competitive matrix and messaging hierarchy.

Everything here is deterministic string templating. Nothing raises: an empty
list simply renders its missing first element as "".

Usage:
    inputs = (
        PositioningBuilder()
        .set_product_name("Acme")
        .add_competitive_alternatives(["Excel", "Google Sheets"])
        ...
        .build()
    )
    document = generate_document(inputs)
"""

from dataclasses import dataclass
from typing import Optional

from config.settings import HERO_CTA, MATRIX_ALTERNATIVES_SHOWN, PILLAR_COUNT
from src.pipeline.problem import infer_pitch_problem


# ─── Data Models ──────────────────────────────────────────────────────

def _items(value, name: str) -> tuple[str, ...]:
    """JSON list field → tuple. A lone string counts as one item."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list of strings, got {type(value).__name__}")
    return tuple(value)


@dataclass(frozen=True)
class PositioningInput:
    """The six framework answers, finalized. List answers are stored as tuples."""
    product_name: str = ""
    competitive_alternatives: tuple[str, ...] = ()     # what customers use if you don't exist
    unique_attributes: tuple[str, ...] = ()            # what you have that they don't
    value_themes: tuple[str, ...] = ()                 # value those attributes enable
    target_market: str = ""                            # who cares most about that value
    market_category: str = ""                          # category that makes the value obvious

    def __post_init__(self):
        for name in ("competitive_alternatives", "unique_attributes", "value_themes"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def to_dict(self) -> dict:
        return {
            "productName": self.product_name,
            "competitiveAlternatives": list(self.competitive_alternatives),
            "uniqueAttributes": list(self.unique_attributes),
            "valueThemes": list(self.value_themes),
            "targetMarket": self.target_market,
            "marketCategory": self.market_category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PositioningInput":
        return cls(
            product_name=data.get("productName", ""),
            competitive_alternatives=_items(data.get("competitiveAlternatives"), "competitiveAlternatives"),
            unique_attributes=_items(data.get("uniqueAttributes"), "uniqueAttributes"),
            value_themes=_items(data.get("valueThemes"), "valueThemes"),
            target_market=data.get("targetMarket", ""),
            market_category=data.get("marketCategory", ""),
        )


@dataclass(frozen=True)
class HeroCopy:
    headline: str
    subheadline: str
    cta: str


@dataclass(frozen=True)
class CompetitiveMatrix:
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))


@dataclass(frozen=True)
class MessagingHierarchy:
    top_level: str
    pillars: tuple[str, ...]
    proof_points: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "pillars", tuple(self.pillars))
        object.__setattr__(self, "proof_points", tuple(self.proof_points))


@dataclass(frozen=True)
class PositioningDocument:
    """Snapshot of every derived artifact plus the inputs it came from."""
    product_name: str
    positioning_statement: str
    elevator_pitch_30: str
    elevator_pitch_2min: str
    hero_copy: HeroCopy
    competitive_matrix: CompetitiveMatrix
    messaging_hierarchy: MessagingHierarchy
    raw_data: PositioningInput

    def to_dict(self) -> dict:
        """Serializable form. Key order is the export order."""
        return {
            "productName": self.product_name,
            "positioningStatement": self.positioning_statement,
            "elevatorPitch30": self.elevator_pitch_30,
            "elevatorPitch2Min": self.elevator_pitch_2min,
            "heroCopy": {
                "headline": self.hero_copy.headline,
                "subheadline": self.hero_copy.subheadline,
                "cta": self.hero_copy.cta,
            },
            "competitiveMatrix": {
                "headers": list(self.competitive_matrix.headers),
                "rows": [list(row) for row in self.competitive_matrix.rows],
            },
            "messagingHierarchy": {
                "topLevel": self.messaging_hierarchy.top_level,
                "pillars": list(self.messaging_hierarchy.pillars),
                "proofPoints": list(self.messaging_hierarchy.proof_points),
            },
            "rawData": self.raw_data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PositioningDocument":
        hero = data["heroCopy"]
        matrix = data["competitiveMatrix"]
        hierarchy = data["messagingHierarchy"]
        return cls(
            product_name=data["productName"],
            positioning_statement=data["positioningStatement"],
            elevator_pitch_30=data["elevatorPitch30"],
            elevator_pitch_2min=data["elevatorPitch2Min"],
            hero_copy=HeroCopy(hero["headline"], hero["subheadline"], hero["cta"]),
            competitive_matrix=CompetitiveMatrix(
                headers=matrix["headers"],
                rows=matrix["rows"],
            ),
            messaging_hierarchy=MessagingHierarchy(
                top_level=hierarchy["topLevel"],
                pillars=hierarchy["pillars"],
                proof_points=hierarchy["proofPoints"],
            ),
            raw_data=PositioningInput.from_dict(data["rawData"]),
        )


# ─── Builder ──────────────────────────────────────────────────────────

class PositioningBuilder:
    """
    Collects the framework answers one step at a time.

    Setters only touch the builder's own draft; build() hands out a frozen
    PositioningInput holding tuples, so later edits never leak into a
    document that was already generated.
    """

    FIELDS = (
        "product_name", "competitive_alternatives", "unique_attributes",
        "value_themes", "target_market", "market_category",
    )

    def __init__(self):
        self._draft = {
            "product_name": "",
            "competitive_alternatives": [],
            "unique_attributes": [],
            "value_themes": [],
            "target_market": "",
            "market_category": "",
        }

    def set_product_name(self, name: str) -> "PositioningBuilder":
        self._draft["product_name"] = name
        return self

    def add_competitive_alternatives(self, alternatives: list[str]) -> "PositioningBuilder":
        self._draft["competitive_alternatives"] = list(alternatives)
        return self

    def add_unique_attributes(self, attributes: list[str]) -> "PositioningBuilder":
        self._draft["unique_attributes"] = list(attributes)
        return self

    def add_value_themes(self, themes: list[str]) -> "PositioningBuilder":
        self._draft["value_themes"] = list(themes)
        return self

    def set_target_market(self, market: str) -> "PositioningBuilder":
        self._draft["target_market"] = market
        return self

    def set_market_category(self, category: str) -> "PositioningBuilder":
        self._draft["market_category"] = category
        return self

    def missing_fields(self) -> list[str]:
        return [name for name in self.FIELDS if not self._draft[name]]

    def build(self) -> PositioningInput:
        return PositioningInput(
            product_name=self._draft["product_name"],
            competitive_alternatives=tuple(self._draft["competitive_alternatives"]),
            unique_attributes=tuple(self._draft["unique_attributes"]),
            value_themes=tuple(self._draft["value_themes"]),
            target_market=self._draft["target_market"],
            market_category=self._draft["market_category"],
        )


# ─── Generators ───────────────────────────────────────────────────────

def _first(items: tuple[str, ...]) -> str:
    return items[0] if items else ""


def positioning_statement(p: PositioningInput) -> str:
    return (
        f"{p.product_name} is a {p.market_category} that helps {p.target_market} "
        f"{_first(p.value_themes)}. Unlike {', '.join(p.competitive_alternatives)}, "
        f"we {_first(p.unique_attributes)}."
    )


def elevator_pitch_30(p: PositioningInput) -> str:
    return (
        f"{p.product_name} helps {p.target_market} {_first(p.value_themes)}. "
        f"We're the only {p.market_category} that {_first(p.unique_attributes)}."
    )


def _pitch_problem(p: PositioningInput, problem: Optional[str]) -> str:
    # Model replies come quoted and punctuated like the prompt's example
    problem = (problem or "").strip().strip("\"'“”‘’").strip().rstrip(".!?;:").strip()
    if not problem:
        return infer_pitch_problem(p.competitive_alternatives)
    # Enhancer output already carries the verb the template supplies
    if problem.lower().startswith("struggle with "):
        return problem[len("struggle with "):]
    return problem


def elevator_pitch_2min(p: PositioningInput, problem: Optional[str] = None) -> str:
    """Five-paragraph narrative. `problem` overrides the inline heuristic."""
    return (
        f"You know how {p.target_market} struggle with {_pitch_problem(p, problem)}?\n"
        f"\n"
        f"Most companies use {_first(p.competitive_alternatives)}, but that approach has limitations.\n"
        f"\n"
        f"{p.product_name} is a {p.market_category} that solves this differently. "
        f"We {', and we '.join(p.unique_attributes)}.\n"
        f"\n"
        f"This means {', '.join(p.value_themes)}.\n"
        f"\n"
        f"We're built specifically for {p.target_market} who need {_first(p.value_themes)}."
    )


def hero_copy(p: PositioningInput) -> HeroCopy:
    return HeroCopy(
        headline=f"{_first(p.value_themes)} for {p.target_market}",
        subheadline=f"{p.product_name} helps you {', '.join(p.value_themes[:PILLAR_COUNT])}",
        cta=HERO_CTA,
    )


def competitive_matrix(p: PositioningInput) -> CompetitiveMatrix:
    # Rows always carry three comparison cells, whatever the header count.
    return CompetitiveMatrix(
        headers=["Feature", p.product_name, *p.competitive_alternatives[:MATRIX_ALTERNATIVES_SHOWN]],
        rows=[[attr, "✓", "✗", "✗"] for attr in p.unique_attributes],
    )


def messaging_hierarchy(p: PositioningInput) -> MessagingHierarchy:
    return MessagingHierarchy(
        top_level=_first(p.value_themes),
        pillars=p.value_themes[:PILLAR_COUNT],
        proof_points=p.unique_attributes,
    )


def generate_document(p: PositioningInput, problem: Optional[str] = None) -> PositioningDocument:
    """Build the complete positioning document from finalized inputs."""
    return PositioningDocument(
        product_name=p.product_name,
        positioning_statement=positioning_statement(p),
        elevator_pitch_30=elevator_pitch_30(p),
        elevator_pitch_2min=elevator_pitch_2min(p, problem=problem),
        hero_copy=hero_copy(p),
        competitive_matrix=competitive_matrix(p),
        messaging_hierarchy=messaging_hierarchy(p),
        raw_data=p,
    )


# ─── Engine ───────────────────────────────────────────────────────────

class PositioningEngine(PositioningBuilder):
    """
    Setter-style facade for step-by-step sessions.

    Usage:
        engine = PositioningEngine()
        engine.set_product_name("Acme")
        ...
        doc = engine.get_complete_document()
    """

    def get_complete_document(self, problem: Optional[str] = None) -> PositioningDocument:
        return generate_document(self.build(), problem=problem)
