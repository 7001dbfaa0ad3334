"""Pydantic data models: the shared business objects.

Inputs (items, sections), the per-rule scores and issues, and the final
report all live here. Every model is frozen: the engine derives new records
and never mutates what it was given.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Severity(str, Enum):
    """How urgently an issue should be addressed."""

    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Grade(str, Enum):
    """Letter grade for an overall or section score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ContextFit(str, Enum):
    """How well bullets suit the declared usage context."""

    EXCELLENT = "excellent"
    GOOD = "good"
    POOR = "poor"


class Context(str, Enum):
    """Where the bullet list will be used."""

    DOCUMENT = "document"
    PRESENTATION = "presentation"
    REFERENCE = "reference"


class Importance(str, Enum):
    """Priority hint for serial position checks."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GrammarPattern(str, Enum):
    """Opening grammatical pattern of a bullet."""

    VERB_IMPERATIVE = "verb-imperative"
    VERB_GERUND = "verb-gerund"
    NOUN_PHRASE = "noun-phrase"
    SENTENCE = "sentence"
    UNKNOWN = "unknown"


class RuleId(str, Enum):
    """Identifiers of the seven scoring rules."""

    LIST_LENGTH = "LIST_LENGTH"
    HIERARCHY = "HIERARCHY"
    LINE_LENGTH = "LINE_LENGTH"
    SERIAL_POSITION = "SERIAL_POSITION"
    STRUCTURE = "STRUCTURE"
    FIRST_WORDS = "FIRST_WORDS"
    FORMATTING = "FORMATTING"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ─── Inputs ──────────────────────────────────────────────────────────────────


class BulletItem(_Frozen):
    """A single bullet with optional sub-bullets and an importance hint."""

    text: str = Field(min_length=1, description="The bullet point text content")
    children: Optional[list[BulletItem]] = Field(None, description="Nested sub-bullets (max 1 level recommended)")
    importance: Optional[Importance] = Field(None, description="High-importance items belong first or last")


class BulletSection(_Frozen):
    """A titled group of bullets scored on its own."""

    title: str = Field(min_length=1)
    items: list[BulletItem] = Field(min_length=1)
    context: Optional[str] = None
    description: Optional[str] = None
    intro: Optional[str] = None


class BulletInput(_Frozen):
    """A validated request: exactly one of ``items`` or ``sections`` is set."""

    items: Optional[list[BulletItem]] = None
    sections: Optional[list[BulletSection]] = None
    context: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    intro: Optional[str] = None


# ─── Rule results ────────────────────────────────────────────────────────────


class ValidationIssue(_Frozen):
    """One problem found by a rule."""

    rule: RuleId
    severity: Severity
    message: str
    item_index: Optional[int] = Field(None, description="Zero-based; children encoded as parent*100+child")
    suggestion: Optional[str] = Field(None, description="Actionable fix")
    research_basis: Optional[str] = Field(None, description="Citation backing the rule")


class RuleScore(_Frozen):
    """Points earned for one rule, with the issues that cost points."""

    rule: RuleId
    max_points: int = Field(ge=0)
    earned_points: int = Field(ge=0)
    issues: list[ValidationIssue] = Field(default_factory=list)

    @model_validator(mode="after")
    def _earned_within_max(self) -> RuleScore:
        if self.earned_points > self.max_points:
            raise ValueError(f"{self.rule.value}: earned {self.earned_points} exceeds max {self.max_points}")
        return self


# ─── Report ──────────────────────────────────────────────────────────────────


class SectionScore(_Frozen):
    """Score and issues for one section of a sectioned request."""

    title: str
    description: Optional[str] = None
    intro: Optional[str] = None
    score: int = Field(ge=0, le=100)
    grade: Grade
    item_count: int
    issues: list[ValidationIssue]
    context: str


class ImprovementList(_Frozen):
    """The top suggested improvements, itself shaped as a bullet list."""

    title: str = "Suggested Improvements"
    description: str
    intro: str
    items: list[str]


class ContextAssessment(_Frozen):
    """Result of the context advisor."""

    fit: ContextFit
    feedback: Optional[str] = None


class BulletAnalysis(_Frozen):
    """Complete analysis returned by the bullet tool."""

    title: Optional[str] = None
    description: Optional[str] = None
    intro: Optional[str] = None
    overall_score: int = Field(ge=0, le=100)
    grade: Grade
    scores: list[RuleScore]
    errors: list[ValidationIssue]
    warnings: list[ValidationIssue]
    suggestions: list[ValidationIssue]
    summary: str
    top_improvements: ImprovementList
    item_count: int
    max_depth: int
    avg_line_length: int
    context_fit: ContextFit
    context_feedback: Optional[str] = None
    section_scores: Optional[list[SectionScore]] = None
