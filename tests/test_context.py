from conftest import GOOD_TEXTS, make_items, nested

from bullet_mcp.core.context import (
    HETEROGENEOUS_FEEDBACK,
    PRESENTATION_FEEDBACK,
    REFERENCE_FLAT_FEEDBACK,
    REFERENCE_OK_FEEDBACK,
    analyze_context,
)
from bullet_mcp.core.models import ContextFit


class TestAnalyzeContext:
    def test_presentation_is_always_poor(self, good_items):
        result = analyze_context(good_items, "presentation")
        assert result.fit is ContextFit.POOR
        assert result.feedback == PRESENTATION_FEEDBACK

    def test_long_flat_reference_list_wants_hierarchy(self):
        items = make_items(*GOOD_TEXTS, "Archive old rows to cold storage monthly.")
        result = analyze_context(items, "reference")
        assert result.fit is ContextFit.GOOD
        assert result.feedback == REFERENCE_FLAT_FEEDBACK

    def test_short_reference_list_is_excellent(self, good_items):
        result = analyze_context(good_items, "reference")
        assert result.fit is ContextFit.EXCELLENT
        assert result.feedback == REFERENCE_OK_FEEDBACK

    def test_nested_reference_list_is_excellent(self):
        items = [nested(2)] + make_items(*GOOD_TEXTS)
        assert analyze_context(items, "reference").fit is ContextFit.EXCELLENT

    def test_homogeneous_document(self, good_items):
        result = analyze_context(good_items, "document")
        assert result.fit is ContextFit.EXCELLENT
        assert result.feedback is None

    def test_heterogeneous_document(self):
        items = make_items("Use a cache", "Caching the results", "The hot path", "Latency is high")
        result = analyze_context(items, "document")
        assert result.fit is ContextFit.GOOD
        assert result.feedback == HETEROGENEOUS_FEEDBACK

    def test_unknown_patterns_do_not_count_as_distinct(self):
        items = make_items("Use a cache", "Caching the results", "Fast reads", "Cheap writes")
        assert analyze_context(items, "document").fit is ContextFit.EXCELLENT

    def test_unrecognized_context_behaves_as_document(self, good_items):
        assert analyze_context(good_items, "email") == analyze_context(good_items, "document")
