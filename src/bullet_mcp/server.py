"""Bullet MCP Server.

FastMCP server with one tool, ``bullet``, that scores bullet lists against
cognitive and typographic research.
Run: bullet-mcp
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent, ToolAnnotations

from . import __version__
from .config import BulletConfig, load_config
from .core.engine import run_analysis

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)

config = load_config()


def _startup_banner(cfg: BulletConfig) -> list[str]:
    if cfg.display.color_output:
        header = f"\U0001f4dd BULLET MCP Server {__version__} starting"
    else:
        header = f"BULLET MCP Server {__version__} starting"
    lines = [
        header,
        f"   - Strict Mode: {cfg.validation.strict_mode}",
        "   - Research Citations: " + ("Enabled" if cfg.validation.enable_research_citations else "Disabled"),
        f"   - Color Output: {cfg.display.color_output}",
    ]
    if cfg.validation.strict_mode:
        lines.append("Running in STRICT MODE - warnings treated as errors")
    return lines


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and report the active configuration."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    for line in _startup_banner(config):
        logger.info(line)
    yield


mcp = FastMCP(
    "bullet-mcp",
    instructions="Validate and improve bullet point lists using evidence-based cognitive research. "
    "Call the bullet tool before finalizing any bullet list summary.",
    lifespan=lifespan,
)


@mcp.tool(annotations=READ_ONLY)
async def bullet(
    items: Optional[Any] = None,
    sections: Optional[Any] = None,
    context: Optional[Any] = None,
    title: Optional[Any] = None,
    description: Optional[Any] = None,
    intro: Optional[Any] = None,
) -> CallToolResult:
    """Validate and improve bullet point lists using evidence-based cognitive research.

    Scores a list 0-100 with a letter grade (A/B/C/D/F), a per-rule breakdown
    with research citations, and the top 3 improvements ranked by impact.

    Principles enforced:
    1. List length (3-7 items, 5 optimal): working memory limits recall.
    2. Hierarchy (max 2 levels): breadth over depth.
    3. Serial position: place critical info first and last.
    4. Line length (45-75 chars): typography research on readability.
    5. Parallel structure: consistent grammar enables faster scanning.
    6. First two words: critical for scanning decisions.
    7. Formatting: consistent punctuation and capitalization.

    Provide either ``items`` (one list) or ``sections`` (a long document split
    into titled lists, each scored separately and averaged).

    Args:
        items: Bullet items. Each item: {text, children?: [...], importance?: "high"|"medium"|"low"}.
        sections: Titled groups: {title, items, context?, description?, intro?}.
        context: 'document' (default), 'presentation' (warns that visuals persuade better), or 'reference'.
        title: Optional title echoed in the report.
        description: Optional description echoed in the report.
        intro: Optional intro line echoed in the report.
    """
    # Arguments stay untyped so every malformed request reaches validate_input.
    raw = {
        "items": items,
        "sections": sections,
        "context": context,
        "title": title,
        "description": description,
        "intro": intro,
    }
    response = run_analysis({k: v for k, v in raw.items() if v is not None}, config)
    return CallToolResult(
        content=[TextContent(type="text", text=response.text)],
        structuredContent=None if response.is_error else response.payload,
        isError=response.is_error,
    )


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
