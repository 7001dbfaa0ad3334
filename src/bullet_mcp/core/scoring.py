"""Aggregation of rule scores into a graded report.

Flat lists are scored directly. Sectioned documents are scored per section,
then combined: the document score is the mean of the section scores and each
rule's points are averaged across sections rather than summed.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence

from ..config import BulletConfig
from .constants import GRADE_THRESHOLDS, MAX_IMPROVEMENTS, TOTAL_POINTS
from .context import analyze_context
from .models import (
    BulletAnalysis,
    BulletItem,
    BulletSection,
    Grade,
    ImprovementList,
    RuleId,
    RuleScore,
    SectionScore,
    Severity,
    ValidationIssue,
)
from .rules import iter_lengths, max_depth, run_rules

logger = logging.getLogger(__name__)

SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.SUGGESTION: 2}


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values used in scoring."""
    return math.floor(value + 0.5)


def calculate_grade(score: int) -> Grade:
    for grade, threshold in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F


def score_percentage(scores: Sequence[RuleScore]) -> int:
    """Earned points as a 0-100 share of the fixed total across all rules."""
    earned = sum(s.earned_points for s in scores)
    return round_half_up(earned / TOTAL_POINTS * 100)


def average_line_length(items: Sequence[BulletItem]) -> int:
    lengths = list(iter_lengths(items))
    if not lengths:
        return 0
    return round_half_up(sum(lengths) / len(lengths))


# ─── Issue handling ──────────────────────────────────────────────────────────


def partition_issues(
    issues: Iterable[ValidationIssue],
) -> tuple[list[ValidationIssue], list[ValidationIssue], list[ValidationIssue]]:
    """Split issues into (errors, warnings, suggestions), keeping their order."""
    buckets: dict[Severity, list[ValidationIssue]] = {severity: [] for severity in Severity}
    for issue in issues:
        buckets[issue.severity].append(issue)
    return buckets[Severity.ERROR], buckets[Severity.WARNING], buckets[Severity.SUGGESTION]


def promote_warnings(
    errors: list[ValidationIssue],
    warnings: list[ValidationIssue],
) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
    """Strict mode: every warning becomes an error, appended after the real errors."""
    promoted = [w.model_copy(update={"severity": Severity.ERROR}) for w in warnings]
    return errors + promoted, []


def strip_citations(scores: Sequence[RuleScore]) -> list[RuleScore]:
    return [
        s.model_copy(update={"issues": [i.model_copy(update={"research_basis": None}) for i in s.issues]})
        for s in scores
    ]


def prefix_issues(scores: Sequence[RuleScore], section_title: str) -> list[RuleScore]:
    """Tag every issue message with the section it came from."""
    return [
        s.model_copy(update={
            "issues": [i.model_copy(update={"message": f"[{section_title}] {i.message}"}) for i in s.issues],
        })
        for s in scores
    ]


def _improvement_description(score: int, count: int) -> str:
    if count == 0:
        return "Your bullet list follows best practices."
    if score >= 90:
        return "Minor tweaks to make your bullet list even better."
    if score >= 70:
        return "A few adjustments would improve readability and recall."
    return "These changes will significantly improve your bullet list."


def top_improvements(issues: Iterable[ValidationIssue], score: int) -> ImprovementList:
    """The most impactful distinct suggestions, errors first.

    Sorting is stable, so issues of equal severity keep their rule order.
    """
    ranked = sorted((i for i in issues if i.suggestion), key=lambda i: SEVERITY_RANK[i.severity])

    unique: list[str] = []
    for issue in ranked:
        if issue.suggestion not in unique:
            unique.append(issue.suggestion)
        if len(unique) >= MAX_IMPROVEMENTS:
            break

    return ImprovementList(
        description=_improvement_description(score, len(unique)),
        intro="Consider the following changes:" if unique else "",
        items=unique,
    )


# ─── Summaries ───────────────────────────────────────────────────────────────


def summarize(score: int, error_count: int, warning_count: int) -> str:
    if score >= 90 and error_count == 0:
        return "Excellent bullet list following evidence-based best practices."
    if score >= 80 and error_count == 0:
        return "Good bullet list with minor improvements possible."
    if score >= 70:
        return f"Adequate bullet list. {warning_count} issue(s) may impact effectiveness."
    if error_count > 0:
        return f"Bullet list has {error_count} critical issue(s) that should be addressed."
    return f"Bullet list needs improvement. Review {warning_count} warning(s) for better results."


def summarize_sections(score: int, section_scores: Sequence[SectionScore]) -> str:
    count = len(section_scores)
    # max/min return the first section reaching the extreme.
    best = max(section_scores, key=lambda s: s.score)
    worst = min(section_scores, key=lambda s: s.score)

    if score >= 90:
        return f"Excellent structured summary across {count} sections. All sections follow evidence-based best practices."
    if score >= 80:
        return (
            f'Good structured summary across {count} sections. Best: "{best.title}" ({best.score}), '
            f'needs work: "{worst.title}" ({worst.score}).'
        )
    return f'Structured summary with {count} sections needs improvement. Focus on "{worst.title}" (score: {worst.score}).'


# ─── Flat mode ───────────────────────────────────────────────────────────────


def score_flat(
    items: Sequence[BulletItem],
    context: str,
    config: BulletConfig,
    title: Optional[str] = None,
    description: Optional[str] = None,
    intro: Optional[str] = None,
) -> BulletAnalysis:
    """Score a single bullet list."""
    scores = run_rules(items)
    overall = score_percentage(scores)

    all_issues = [issue for s in scores for issue in s.issues]
    errors, warnings, suggestions = partition_issues(all_issues)
    if config.validation.strict_mode:
        errors, warnings = promote_warnings(errors, warnings)

    assessment = analyze_context(items, context)

    return BulletAnalysis(
        title=title or None,
        description=description or None,
        intro=intro or None,
        overall_score=overall,
        grade=calculate_grade(overall),
        scores=scores if config.validation.enable_research_citations else strip_citations(scores),
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        summary=summarize(overall, len(errors), len(warnings)),
        top_improvements=top_improvements(all_issues, overall),
        item_count=len(items),
        max_depth=max_depth(items),
        avg_line_length=average_line_length(items),
        context_fit=assessment.fit,
        context_feedback=assessment.feedback,
    )


# ─── Sectioned mode ──────────────────────────────────────────────────────────


def merge_rule_scores(scores: Iterable[RuleScore]) -> list[RuleScore]:
    """Combine per-section scores of the same rule into one.

    Max and earned points are each the rounded mean across sections; issues
    are concatenated in section order. Rules keep their first-seen order.
    """
    by_rule: dict[RuleId, list[RuleScore]] = {}
    for score in scores:
        by_rule.setdefault(score.rule, []).append(score)

    merged = []
    for rule, group in by_rule.items():
        merged.append(RuleScore(
            rule=rule,
            max_points=round_half_up(sum(s.max_points for s in group) / len(group)),
            earned_points=round_half_up(sum(s.earned_points for s in group) / len(group)),
            issues=[issue for s in group for issue in s.issues],
        ))
    return merged


def _score_section(section: BulletSection, global_context: str) -> tuple[SectionScore, list[RuleScore]]:
    scores = prefix_issues(run_rules(section.items), section.title)
    score = score_percentage(scores)
    section_score = SectionScore(
        title=section.title,
        description=section.description or None,
        intro=section.intro or None,
        score=score,
        grade=calculate_grade(score),
        item_count=len(section.items),
        issues=[issue for s in scores for issue in s.issues],
        context=section.context or global_context,
    )
    return section_score, scores


def score_sections(
    sections: Sequence[BulletSection],
    context: str,
    config: BulletConfig,
    title: Optional[str] = None,
    description: Optional[str] = None,
    intro: Optional[str] = None,
) -> BulletAnalysis:
    """Score each section, then merge into one document-level report."""
    section_scores: list[SectionScore] = []
    rule_scores: list[RuleScore] = []
    for section in sections:
        section_score, scores = _score_section(section, context)
        section_scores.append(section_score)
        rule_scores.extend(scores)

    overall = round_half_up(sum(s.score for s in section_scores) / len(section_scores))
    logger.debug("Section scores: %s -> %d", [s.score for s in section_scores], overall)

    all_issues = [issue for s in section_scores for issue in s.issues]
    errors, warnings, suggestions = partition_issues(all_issues)
    if config.validation.strict_mode:
        errors, warnings = promote_warnings(errors, warnings)

    merged = merge_rule_scores(rule_scores)
    all_items = [item for section in sections for item in section.items]
    assessment = analyze_context(all_items, context)

    return BulletAnalysis(
        title=title or None,
        description=description or None,
        intro=intro or None,
        overall_score=overall,
        grade=calculate_grade(overall),
        scores=merged if config.validation.enable_research_citations else strip_citations(merged),
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        summary=summarize_sections(overall, section_scores),
        top_improvements=top_improvements(all_issues, overall),
        item_count=len(all_items),
        max_depth=max_depth(all_items),
        avg_line_length=average_line_length(all_items),
        context_fit=assessment.fit,
        context_feedback=assessment.feedback,
        section_scores=section_scores,
    )
