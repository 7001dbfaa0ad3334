"""Core business logic: rules, scoring, context advice, and data models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework; the server only calls ``engine.run_analysis``.
"""
