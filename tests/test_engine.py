import json

from conftest import GOOD_TEXTS

from bullet_mcp.config import BulletConfig, ValidationConfig
from bullet_mcp.core.engine import run_analysis
from bullet_mcp.core.validation import USAGE_HINT


class TestRunAnalysis:
    def test_flat_payload(self, good_request):
        response = run_analysis(good_request)
        assert response.is_error is False
        payload = response.payload
        assert payload["overall_score"] == 100
        assert payload["grade"] == "A"
        assert payload["context_fit"] == "excellent"
        assert [s["rule"] for s in payload["scores"]] == [
            "LIST_LENGTH", "HIERARCHY", "LINE_LENGTH", "SERIAL_POSITION", "STRUCTURE", "FIRST_WORDS", "FORMATTING",
        ]
        assert payload["suggestions"][0]["severity"] == "suggestion"

    def test_absent_optional_fields_are_omitted(self, good_request):
        payload = run_analysis(good_request).payload
        for key in ("title", "description", "intro", "context_feedback", "section_scores"):
            assert key not in payload
        assert payload["top_improvements"]["title"] == "Suggested Improvements"

    def test_sectioned_payload(self):
        raw = {"title": "Review", "sections": [{"title": "Database", "items": [{"text": t} for t in GOOD_TEXTS]}]}
        payload = run_analysis(raw).payload
        assert payload["title"] == "Review"
        assert payload["section_scores"][0]["title"] == "Database"
        assert payload["section_scores"][0]["context"] == "document"

    def test_invalid_request_returns_error_payload(self):
        response = run_analysis({"items": []})
        assert response.is_error is True
        assert response.payload == {"error": "Items array cannot be empty", "hint": USAGE_HINT}
        assert json.loads(response.text) == response.payload

    def test_config_is_applied(self):
        raw = {"items": [{"text": f"Keep every bullet within a comfortable reading width {i}"} for i in range(8)]}
        strict = BulletConfig(validation=ValidationConfig(strict_mode=True))
        payload = run_analysis(raw, strict).payload
        assert payload["warnings"] == []
        assert len(payload["errors"]) == 2

    def test_text_is_indented_json(self, good_request):
        text = run_analysis(good_request).text
        assert text.startswith("{\n  ")
        assert json.loads(text)["grade"] == "A"
