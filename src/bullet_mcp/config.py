"""Process-wide configuration, read once from the environment at startup.

Each toggle is enabled only by the exact string ``"true"``; any other value is
ignored.

    BULLET_STRICT_MODE=true    treat warnings as errors
    BULLET_NO_CITATIONS=true   drop research citations from rule scores
    BULLET_NO_COLOR=true       plain startup banner
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


class ValidationConfig(BaseModel):
    """Scoring behaviour switches."""

    model_config = ConfigDict(frozen=True)

    strict_mode: bool = False
    enable_research_citations: bool = True


class DisplayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    color_output: bool = True


class BulletConfig(BaseModel):
    """Complete server configuration."""

    model_config = ConfigDict(frozen=True)

    validation: ValidationConfig = ValidationConfig()
    display: DisplayConfig = DisplayConfig()


DEFAULT_CONFIG = BulletConfig()


def _enabled(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name) == "true"


def load_config(environ: Optional[Mapping[str, str]] = None) -> BulletConfig:
    """Build the configuration from environment variables over the defaults."""
    env = os.environ if environ is None else environ
    return BulletConfig(
        validation=ValidationConfig(
            strict_mode=_enabled(env, "BULLET_STRICT_MODE") or DEFAULT_CONFIG.validation.strict_mode,
            enable_research_citations=(
                DEFAULT_CONFIG.validation.enable_research_citations and not _enabled(env, "BULLET_NO_CITATIONS")
            ),
        ),
        display=DisplayConfig(
            color_output=DEFAULT_CONFIG.display.color_output and not _enabled(env, "BULLET_NO_COLOR"),
        ),
    )
