from conftest import GOOD_TEXTS

from bullet_mcp.config import DEFAULT_CONFIG, BulletConfig, ValidationConfig
from bullet_mcp.core.engine import analyze
from bullet_mcp.core.models import BulletInput, ContextFit, Grade, RuleId, SectionScore, Severity
from bullet_mcp.core.scoring import round_half_up, score_flat, summarize_sections


def section(title, texts, **extra):
    return {"title": title, "items": [{"text": t} for t in texts], **extra}


def two_sections(**extra):
    return BulletInput.model_validate({
        "sections": [
            section("Database", GOOD_TEXTS),
            section("Quick wins", ["Use caching.", "Add indexes."]),
        ],
        **extra,
    })


def section_score(title, score):
    return SectionScore(title=title, score=score, grade=Grade.A, item_count=3, issues=[], context="document")


class TestSectionedScoring:
    def test_overall_is_mean_of_section_scores(self):
        analysis = analyze(two_sections())
        assert [s.score for s in analysis.section_scores] == [100, 93]
        assert analysis.overall_score == 97
        assert analysis.grade is Grade.A
        assert analysis.summary == (
            "Excellent structured summary across 2 sections. All sections follow evidence-based best practices."
        )

    def test_rule_points_are_averaged(self):
        merged = {s.rule: s for s in analyze(two_sections()).scores}
        assert list(merged) == list(RuleId)
        assert (merged[RuleId.LIST_LENGTH].max_points, merged[RuleId.LIST_LENGTH].earned_points) == (20, 18)
        assert merged[RuleId.LINE_LENGTH].earned_points == 14
        assert merged[RuleId.STRUCTURE].earned_points == 20

    def test_issue_messages_are_tagged_with_section(self):
        analysis = analyze(two_sections())
        quick_wins = analysis.section_scores[1]
        assert quick_wins.item_count == 2
        assert quick_wins.issues
        assert all(i.message.startswith("[Quick wins] ") for i in quick_wins.issues)
        assert analysis.suggestions[0].message.startswith("[Database] ")

    def test_global_statistics_cover_all_items(self):
        analysis = analyze(two_sections())
        texts = GOOD_TEXTS + ["Use caching.", "Add indexes."]
        assert analysis.item_count == 7
        assert analysis.max_depth == 1
        assert analysis.avg_line_length == round_half_up(sum(map(len, texts)) / len(texts))

    def test_section_context_defaults_to_request_context(self):
        request = BulletInput.model_validate({
            "context": "reference",
            "sections": [
                section("Database", GOOD_TEXTS),
                section("Slides", GOOD_TEXTS, context="presentation"),
            ],
        })
        analysis = analyze(request)
        assert [s.context for s in analysis.section_scores] == ["reference", "presentation"]
        assert analysis.context_fit is ContextFit.GOOD

    def test_context_advice_uses_request_context(self):
        analysis = analyze(two_sections(context="presentation"))
        assert analysis.context_fit is ContextFit.POOR
        assert "43% more persuasive" in analysis.context_feedback

    def test_section_metadata_is_echoed(self):
        request = BulletInput.model_validate({
            "title": "Performance review",
            "sections": [section("Database", GOOD_TEXTS, description="Storage layer", intro="We will:")],
        })
        analysis = analyze(request)
        assert analysis.title == "Performance review"
        assert analysis.section_scores[0].description == "Storage layer"
        assert analysis.section_scores[0].intro == "We will:"

    def test_single_section_scores_like_flat_list(self):
        sectioned = analyze(BulletInput.model_validate({"sections": [section("Only", GOOD_TEXTS[:2])]}))
        flat = score_flat(BulletInput.model_validate({"items": [{"text": t} for t in GOOD_TEXTS[:2]]}).items,
                          "document", DEFAULT_CONFIG)
        assert sectioned.overall_score == flat.overall_score
        assert [s.earned_points for s in sectioned.scores] == [s.earned_points for s in flat.scores]

    def test_errors_from_every_section_are_collected(self):
        request = BulletInput.model_validate({
            "sections": [
                section("First", [f"Keep every bullet readable {i}" for i in range(10)]),
                section("Second", [f"Trim every bullet down {i}" for i in range(10)]),
            ],
        })
        analysis = analyze(request)
        list_errors = [e for e in analysis.errors if e.rule is RuleId.LIST_LENGTH]
        assert [e.message.split("]")[0] for e in list_errors] == ["[First", "[Second"]
        assert all(e.severity is Severity.ERROR for e in list_errors)


    def test_strict_mode_promotes_section_warnings(self):
        request = BulletInput.model_validate({
            "sections": [section("Long", [f"Keep every bullet within a comfortable reading width {i}" for i in range(8)])],
        })
        relaxed = analyze(request)
        strict = analyze(request, BulletConfig(validation=ValidationConfig(strict_mode=True)))

        assert len(relaxed.warnings) == 2
        assert strict.warnings == []
        assert [e.message for e in strict.errors] == [w.message for w in relaxed.warnings]
        assert all(e.severity is Severity.ERROR for e in strict.errors)
        assert strict.overall_score == relaxed.overall_score

    def test_citations_can_be_disabled(self):
        config = BulletConfig(validation=ValidationConfig(enable_research_citations=False))
        analysis = analyze(two_sections(), config)
        assert any(s.issues for s in analysis.scores)
        assert all(i.research_basis is None for s in analysis.scores for i in s.issues)
        assert all(i.research_basis for i in analysis.suggestions)


class TestSummarizeSections:
    def test_good_band_names_best_and_worst(self):
        scores = [section_score("A", 95), section_score("B", 75), section_score("C", 75)]
        assert summarize_sections(82, scores) == (
            'Good structured summary across 3 sections. Best: "A" (95), needs work: "B" (75).'
        )

    def test_low_band_names_worst_section(self):
        scores = [section_score("A", 95), section_score("B", 40)]
        assert summarize_sections(68, scores) == (
            'Structured summary with 2 sections needs improvement. Focus on "B" (score: 40).'
        )
