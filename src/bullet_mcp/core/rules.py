"""The seven bullet list rules.

Each rule takes the items of one list (top-level items of a flat request, or a
section's items) and returns a RuleScore. Rules are independent of each other
and never mutate their input; points are deducted from the rule's maximum and
floored at zero.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterator, Sequence

from .constants import (
    CHILD_INDEX_STRIDE,
    CRITICAL_WORD_COUNT,
    DUPLICATE_OPENING_PENALTY,
    FORMATTING_INCONSISTENCY_PENALTY,
    HIERARCHY_HARD_MAX_DEPTH,
    HIERARCHY_MAX_DEPTH,
    HIERARCHY_OVER_MAX_PENALTY,
    LINE_HARD_MAX_CHARS,
    LINE_MIN_CHARS,
    LINE_OPTIMAL_MAX_CHARS,
    LINE_SHORT_PENALTY,
    LINE_SLIGHTLY_LONG_PENALTY,
    LINE_TOO_LONG_PENALTY,
    LIST_HARD_MAX_ITEMS,
    LIST_MAX_ITEMS,
    LIST_MIN_ITEMS,
    LIST_OPTIMAL_ITEMS,
    LIST_OVER_MAX_PENALTY,
    LIST_UNDER_MIN_PENALTY,
    PRIMACY_ZONE,
    RECALL_VALLEY_PENALTY,
    RECENCY_ZONE,
    RESEARCH_CITATIONS,
    RULE_POINTS,
    SERIAL_MIN_ITEMS_FOR_HINT,
    SERIAL_MIN_ITEMS_WITH_IMPORTANCE,
    STRUCTURE_MISMATCH_PENALTY,
)
from .models import (
    BulletItem,
    GrammarPattern,
    Importance,
    RuleId,
    RuleScore,
    Severity,
    ValidationIssue,
)
from .patterns import classify, most_common

logger = logging.getLogger(__name__)

Rule = Callable[[Sequence[BulletItem]], RuleScore]


def _issue(rule: RuleId, severity: Severity, message: str, **kwargs) -> ValidationIssue:
    return ValidationIssue(
        rule=rule,
        severity=severity,
        message=message,
        research_basis=RESEARCH_CITATIONS[rule],
        **kwargs,
    )


def _score(rule: RuleId, points: int, issues: list[ValidationIssue]) -> RuleScore:
    return RuleScore(
        rule=rule,
        max_points=RULE_POINTS[rule],
        earned_points=max(0, points),
        issues=issues,
    )


# ─── Tree helpers ────────────────────────────────────────────────────────────


def max_depth(items: Sequence[BulletItem], current_depth: int = 1) -> int:
    """Deepest nesting level; a flat list has depth 1. Empty child lists don't count."""
    deepest = current_depth
    for item in items:
        if item.children:
            deepest = max(deepest, max_depth(item.children, current_depth + 1))
    return deepest


def iter_lengths(items: Sequence[BulletItem]) -> Iterator[int]:
    """Text length of every item at every depth, parents before children."""
    for item in items:
        yield len(item.text)
        if item.children:
            yield from iter_lengths(item.children)


# ─── Rule 1: List length ─────────────────────────────────────────────────────


def validate_list_length(items: Sequence[BulletItem]) -> RuleScore:
    """Check item count against working memory limits (3-7 items, 5 optimal)."""
    rule = RuleId.LIST_LENGTH
    count = len(items)
    points = RULE_POINTS[rule]
    issues = []

    if count > LIST_HARD_MAX_ITEMS:
        groups = math.ceil(count / LIST_OPTIMAL_ITEMS)
        issues.append(_issue(
            rule, Severity.ERROR,
            f"List has {count} items, exceeds maximum of {LIST_HARD_MAX_ITEMS}",
            suggestion=f"Subdivide into {groups} categorized groups of ~{LIST_OPTIMAL_ITEMS} items each",
        ))
        points = 0
    elif count > LIST_MAX_ITEMS:
        issues.append(_issue(
            rule, Severity.WARNING,
            f"List has {count} items, exceeds recommended maximum of {LIST_MAX_ITEMS}",
            suggestion="Consider subdividing or removing less critical items",
        ))
        points -= LIST_OVER_MAX_PENALTY
    elif count < LIST_MIN_ITEMS:
        if count == 1:
            suggestion = "Consider using prose instead of a single bullet"
        else:
            suggestion = "Consider adding more detail or using prose instead"
        issues.append(_issue(
            rule, Severity.SUGGESTION,
            f"List has only {count} item(s), below minimum of {LIST_MIN_ITEMS}",
            suggestion=suggestion,
        ))
        points -= LIST_UNDER_MIN_PENALTY

    return _score(rule, points, issues)


# ─── Rule 2: Hierarchy ───────────────────────────────────────────────────────


def validate_hierarchy(items: Sequence[BulletItem]) -> RuleScore:
    """Check nesting depth; two levels are recommended, more than three is unusable."""
    rule = RuleId.HIERARCHY
    depth = max_depth(items)
    points = RULE_POINTS[rule]
    issues = []

    if depth > HIERARCHY_HARD_MAX_DEPTH:
        issues.append(_issue(
            rule, Severity.ERROR,
            f"Hierarchy depth of {depth} exceeds usable maximum of {HIERARCHY_HARD_MAX_DEPTH}",
            suggestion="Flatten structure or use a table for complex relationships",
        ))
        points = 0
    elif depth > HIERARCHY_MAX_DEPTH:
        issues.append(_issue(
            rule, Severity.WARNING,
            f"Hierarchy depth of {depth} exceeds recommended maximum of {HIERARCHY_MAX_DEPTH}",
            suggestion="Consider flattening to 2 levels for better comprehension",
        ))
        points -= HIERARCHY_OVER_MAX_PENALTY

    return _score(rule, points, issues)


# ─── Rule 3: Line length ─────────────────────────────────────────────────────


def validate_line_length(items: Sequence[BulletItem]) -> RuleScore:
    """Check every bullet, children included, against the 40-80 character band."""
    rule = RuleId.LINE_LENGTH
    issues: list[ValidationIssue] = []
    penalty = 0

    def check(item: BulletItem, index: int) -> None:
        nonlocal penalty
        length = len(item.text)

        if length > LINE_HARD_MAX_CHARS:
            issues.append(_issue(
                rule, Severity.WARNING,
                f"Item {index + 1} is too long ({length} chars), exceeds readable maximum of {LINE_HARD_MAX_CHARS}",
                item_index=index,
                suggestion="Break into two bullets or trim to essential information",
            ))
            penalty += LINE_TOO_LONG_PENALTY
        elif length > LINE_OPTIMAL_MAX_CHARS:
            issues.append(_issue(
                rule, Severity.SUGGESTION,
                f"Item {index + 1} is slightly long ({length} chars), above optimal of {LINE_OPTIMAL_MAX_CHARS}",
                item_index=index,
                suggestion="Consider trimming for easier scanning",
            ))
            penalty += LINE_SLIGHTLY_LONG_PENALTY
        elif 0 < length < LINE_MIN_CHARS:
            issues.append(_issue(
                rule, Severity.SUGGESTION,
                f"Item {index + 1} is short ({length} chars), may appear sparse",
                item_index=index,
                suggestion="Consider adding detail or combining with a related point",
            ))
            penalty += LINE_SHORT_PENALTY

        for child_index, child in enumerate(item.children or []):
            check(child, index * CHILD_INDEX_STRIDE + child_index)

    for index, item in enumerate(items):
        check(item, index)

    return _score(rule, RULE_POINTS[rule] - penalty, issues)


# ─── Rule 4: Serial position ─────────────────────────────────────────────────


def validate_serial_position(items: Sequence[BulletItem]) -> RuleScore:
    """High-importance items belong in the primacy or recency zone.

    U-shaped recall: the first two and the last item are remembered best; the
    positions in between form the recall valley.
    """
    rule = RuleId.SERIAL_POSITION
    count = len(items)
    points = RULE_POINTS[rule]
    issues = []

    has_importance = any(item.importance is not None for item in items)

    if has_importance and count > SERIAL_MIN_ITEMS_WITH_IMPORTANCE:
        for index, item in enumerate(items):
            if item.importance != Importance.HIGH:
                continue
            in_primacy = index < PRIMACY_ZONE
            in_recency = index >= count - RECENCY_ZONE
            if in_primacy or in_recency:
                continue
            short_text = item.text[:40] + "..." if len(item.text) > 40 else item.text
            issues.append(_issue(
                rule, Severity.WARNING,
                f'High-importance item "{short_text}" is in recall valley (position {index + 1})',
                item_index=index,
                suggestion=f"Move to position 1, 2, or {count} for better recall",
            ))
            points -= RECALL_VALLEY_PENALTY
    elif count > SERIAL_MIN_ITEMS_FOR_HINT:
        issues.append(_issue(
            rule, Severity.SUGGESTION,
            f"Consider placing most critical information in positions 1, 2, or {count}",
            suggestion=f'Items in positions 3-{count - 1} are in the "recall valley" with lower retention',
        ))

    return _score(rule, points, issues)


# ─── Rule 5: Parallel structure ──────────────────────────────────────────────


def validate_structure(items: Sequence[BulletItem]) -> RuleScore:
    """Every bullet should open with the same grammatical pattern."""
    rule = RuleId.STRUCTURE
    points = RULE_POINTS[rule]
    issues = []

    if len(items) < 2:
        return _score(rule, points, issues)

    patterns = [classify(item.text) for item in items]
    dominant = most_common(patterns)

    if dominant is not GrammarPattern.UNKNOWN:
        for index, pattern in enumerate(patterns):
            if pattern is GrammarPattern.UNKNOWN or pattern is dominant:
                continue
            issues.append(_issue(
                rule, Severity.WARNING,
                f'Item {index + 1} uses "{pattern.value}" pattern while most items use "{dominant.value}"',
                item_index=index,
                suggestion=f'Rewrite to match the "{dominant.value}" pattern for consistency',
            ))
            points -= STRUCTURE_MISMATCH_PENALTY

    return _score(rule, points, issues)


# ─── Rule 6: First words ─────────────────────────────────────────────────────


def validate_first_words(items: Sequence[BulletItem]) -> RuleScore:
    """Opening words must differ so readers can tell bullets apart while scanning."""
    rule = RuleId.FIRST_WORDS
    points = RULE_POINTS[rule]
    issues = []

    positions: dict[str, list[int]] = {}
    for index, item in enumerate(items):
        key = " ".join(item.text.split()[:CRITICAL_WORD_COUNT]).lower()
        positions.setdefault(key, []).append(index)

    for words, indices in positions.items():
        if len(indices) < 2:
            continue
        numbered = ", ".join(str(i + 1) for i in indices)
        issues.append(_issue(
            rule, Severity.WARNING,
            f'Items {numbered} start with similar words "{words}"',
            suggestion="Vary the opening words to help readers quickly distinguish between items",
        ))
        points -= DUPLICATE_OPENING_PENALTY

    return _score(rule, points, issues)


# ─── Rule 7: Formatting ──────────────────────────────────────────────────────


def _ending_class(text: str) -> str:
    stripped = text.strip()
    last = stripped[-1:]
    if last in (".", "!", "?"):
        return "sentence"
    if last == ":":
        return "colon"
    return "none"


def _capitalization_class(text: str) -> str:
    first = text.strip()[:1]
    return "upper" if first == first.upper() else "lower"


def validate_formatting(items: Sequence[BulletItem]) -> RuleScore:
    """Ending punctuation and leading capitalization should be consistent."""
    rule = RuleId.FORMATTING
    points = RULE_POINTS[rule]
    issues = []

    if len(items) < 2:
        return _score(rule, points, issues)

    endings = [_ending_class(item.text) for item in items]
    dominant_end = most_common(endings)
    differing = sum(1 for e in endings if e != dominant_end)
    if 0 < differing < len(endings):
        if dominant_end == "sentence":
            suggestion = "Add periods to all items for consistency"
        else:
            suggestion = "Remove periods from all items for consistency"
        issues.append(_issue(
            rule, Severity.SUGGESTION,
            f"Inconsistent ending punctuation: {differing} items differ from the majority",
            suggestion=suggestion,
        ))
        points -= FORMATTING_INCONSISTENCY_PENALTY

    capitals = [_capitalization_class(item.text) for item in items]
    dominant_cap = most_common(capitals)
    differing = sum(1 for c in capitals if c != dominant_cap)
    if 0 < differing < len(capitals):
        if dominant_cap == "upper":
            suggestion = "Capitalize the first letter of all items"
        else:
            suggestion = "Use lowercase for the first letter of all items"
        issues.append(_issue(
            rule, Severity.SUGGESTION,
            f"Inconsistent capitalization: {differing} items differ from the majority",
            suggestion=suggestion,
        ))
        points -= FORMATTING_INCONSISTENCY_PENALTY

    return _score(rule, points, issues)


# ─── Pipeline ────────────────────────────────────────────────────────────────

RULES: list[Rule] = [
    validate_list_length,
    validate_hierarchy,
    validate_line_length,
    validate_serial_position,
    validate_structure,
    validate_first_words,
    validate_formatting,
]


def run_rules(items: Sequence[BulletItem]) -> list[RuleScore]:
    """Run every rule over one list of items, in fixed rule order."""
    scores = [rule(items) for rule in RULES]
    logger.debug("Scored %d items: %s", len(items), {s.rule.value: s.earned_points for s in scores})
    return scores
