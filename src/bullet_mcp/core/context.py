"""Context fit: are bullets the right format for where this list will be used?

Independent of the scoring rules; the result never affects the score.
"""

from __future__ import annotations

from typing import Sequence

from .models import BulletItem, Context, ContextAssessment, ContextFit, GrammarPattern
from .patterns import classify
from .rules import max_depth

PRESENTATION_FEEDBACK = (
    "3M research shows presentations are 43% more persuasive with visuals instead of bullets. "
    "Consider using graphics with narration."
)
REFERENCE_FLAT_FEEDBACK = (
    "For reference materials, consider using hierarchy (sub-bullets) to group related items for faster lookup."
)
REFERENCE_OK_FEEDBACK = "Well-structured for reference use. Ensure consistent formatting for quick scanning."
HETEROGENEOUS_FEEDBACK = (
    "Content appears heterogeneous. Bullets work best with related, similar items. Consider grouping by category."
)

REFERENCE_FLAT_MAX_ITEMS = 5
MAX_DISTINCT_PATTERNS = 2


def analyze_context(items: Sequence[BulletItem], context: str) -> ContextAssessment:
    """Judge how well the items suit the declared context.

    Presentations are always a poor fit (visuals beat bullets). Reference
    lists want hierarchy once they grow past five flat items. Anything else is
    treated as a document, where mixing many grammatical patterns suggests
    heterogeneous content that should be grouped.
    """
    if context == Context.PRESENTATION:
        return ContextAssessment(fit=ContextFit.POOR, feedback=PRESENTATION_FEEDBACK)

    if context == Context.REFERENCE:
        if max_depth(items) == 1 and len(items) > REFERENCE_FLAT_MAX_ITEMS:
            return ContextAssessment(fit=ContextFit.GOOD, feedback=REFERENCE_FLAT_FEEDBACK)
        return ContextAssessment(fit=ContextFit.EXCELLENT, feedback=REFERENCE_OK_FEEDBACK)

    patterns = {classify(item.text) for item in items} - {GrammarPattern.UNKNOWN}
    if len(patterns) > MAX_DISTINCT_PATTERNS:
        return ContextAssessment(fit=ContextFit.GOOD, feedback=HETEROGENEOUS_FEEDBACK)

    return ContextAssessment(fit=ContextFit.EXCELLENT)
