"""Evidence-based thresholds for bullet list scoring.

Every threshold comes from cognitive psychology or typography research; the
matching citation is attached to each issue a rule emits.
"""

from __future__ import annotations

from .models import Grade, RuleId

# ─── List length (working memory) ────────────────────────────────────────────
# Miller (1956): 7±2 items; Cowan (2001): 3-4 chunks for complex info.

LIST_MIN_ITEMS = 3
LIST_OPTIMAL_ITEMS = 5
LIST_MAX_ITEMS = 7
LIST_HARD_MAX_ITEMS = 9
LIST_OVER_MAX_PENALTY = 10
LIST_UNDER_MIN_PENALTY = 5

# ─── Hierarchy (information architecture) ────────────────────────────────────
# Kiger (1984), Zaphiris (2000): two levels are navigated fastest.

HIERARCHY_MAX_DEPTH = 2
HIERARCHY_HARD_MAX_DEPTH = 3
HIERARCHY_OVER_MAX_PENALTY = 8

# ─── Line length (typography) ────────────────────────────────────────────────

LINE_MIN_CHARS = 40
LINE_OPTIMAL_MAX_CHARS = 75
LINE_HARD_MAX_CHARS = 80
LINE_TOO_LONG_PENALTY = 5
LINE_SLIGHTLY_LONG_PENALTY = 2
LINE_SHORT_PENALTY = 1
# Child bullets are reported as parent_index * CHILD_INDEX_STRIDE + child_index.
CHILD_INDEX_STRIDE = 100

# ─── Serial position (Ebbinghaus 1885, Murdock 1962) ─────────────────────────

PRIMACY_ZONE = 2
RECENCY_ZONE = 1
RECALL_VALLEY_PENALTY = 5
SERIAL_MIN_ITEMS_WITH_IMPORTANCE = 3
SERIAL_MIN_ITEMS_FOR_HINT = 4

# ─── Parallel structure (Frazier et al. 1984) ────────────────────────────────

STRUCTURE_MISMATCH_PENALTY = 4

# ─── First words (Nielsen eye-tracking) ──────────────────────────────────────

CRITICAL_WORD_COUNT = 2
DUPLICATE_OPENING_PENALTY = 3

# ─── Formatting consistency ──────────────────────────────────────────────────

FORMATTING_INCONSISTENCY_PENALTY = 2

# ─── Points and grades ───────────────────────────────────────────────────────

RULE_POINTS: dict[RuleId, int] = {
    RuleId.LIST_LENGTH: 20,
    RuleId.HIERARCHY: 15,
    RuleId.LINE_LENGTH: 15,
    RuleId.SERIAL_POSITION: 15,
    RuleId.STRUCTURE: 20,
    RuleId.FIRST_WORDS: 10,
    RuleId.FORMATTING: 5,
}

TOTAL_POINTS = sum(RULE_POINTS.values())

GRADE_THRESHOLDS: list[tuple[Grade, int]] = [
    (Grade.A, 90),
    (Grade.B, 80),
    (Grade.C, 70),
    (Grade.D, 60),
]

MAX_IMPROVEMENTS = 3

RESEARCH_CITATIONS: dict[str, str] = {
    RuleId.LIST_LENGTH: "Miller (1956), Cowan (2001): Working memory capacity 3-4 chunks; Columbia Business School: >3-4 key points decrease comprehension",
    RuleId.HIERARCHY: "Kiger (1984), Zaphiris (2000), Nielsen: 2-level structures show fastest performance; >3 levels drops comprehension substantially",
    RuleId.LINE_LENGTH: "Typography research: 45-75 chars optimal, 66 ideal; <40 causes excessive eye movements, >80 makes line tracking difficult",
    RuleId.SERIAL_POSITION: "Ebbinghaus (1885), Murdock (1962): U-shaped retention curve; items at beginning and end recalled significantly better than middle",
    RuleId.STRUCTURE: "Frazier et al. (1984): Parallel grammatical structure enables significantly faster reading through processing facilitation",
    RuleId.FIRST_WORDS: "Nielsen eye-tracking: First 2 words are critical; readers fixate on initial words when deciding whether to read further",
    RuleId.FORMATTING: "Usability research: Consistent punctuation/capitalization aids scanning; simple bullet symbols preferred",
    "CONTEXT": "Jansen (2014): Bullets improve recall ~33% for homogeneous content; 3M research: presentations 43% more persuasive with visuals vs bullets",
}
