"""Analysis boundary: raw request in, JSON-ready payload out.

Validation failures never escape this module; they become an
``{error, hint}`` payload with the error flag set.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from ..config import DEFAULT_CONFIG, BulletConfig
from .models import BulletAnalysis, BulletInput, Context
from .scoring import score_flat, score_sections
from .validation import USAGE_HINT, InputValidationError, validate_input

logger = logging.getLogger(__name__)


class AnalysisResponse(BaseModel):
    """Serialized outcome of one analysis call."""

    payload: dict[str, Any]
    is_error: bool = False

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2)


def analyze(request: BulletInput, config: BulletConfig = DEFAULT_CONFIG) -> BulletAnalysis:
    """Score a validated request in flat or sectioned mode."""
    context = request.context or Context.DOCUMENT.value
    if request.sections:
        analysis = score_sections(
            request.sections, context, config,
            title=request.title, description=request.description, intro=request.intro,
        )
    else:
        analysis = score_flat(
            request.items or [], context, config,
            title=request.title, description=request.description, intro=request.intro,
        )
    logger.debug("Analyzed %d items: score=%d grade=%s", analysis.item_count, analysis.overall_score, analysis.grade.value)
    return analysis


def run_analysis(raw: Any, config: BulletConfig = DEFAULT_CONFIG) -> AnalysisResponse:
    """Validate and score a raw request.

    Returns the serialized BulletAnalysis, or ``{"error", "hint"}`` with
    ``is_error`` set when the request is malformed. No partial report is
    produced on failure.
    """
    try:
        request = validate_input(raw)
    except InputValidationError as exc:
        logger.warning("Rejected bullet input: %s", exc)
        return AnalysisResponse(payload={"error": str(exc), "hint": USAGE_HINT}, is_error=True)

    analysis = analyze(request, config)
    return AnalysisResponse(payload=analysis.model_dump(mode="json", exclude_none=True))
