"""Bullet MCP Server.

Evidence-based scoring for bullet point lists: list length, hierarchy, line
length, serial position, parallel structure, first words and formatting,
graded 0-100 with ranked improvements.
"""

__version__ = "0.1.0"
