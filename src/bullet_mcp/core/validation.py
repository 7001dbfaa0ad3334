"""Request validation.

Runs once, before any rule, over the raw (JSON-decoded) request. Either
returns a typed BulletInput or raises InputValidationError naming the
offending index and location.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .models import BulletInput, Importance

USAGE_HINT = (
    'Provide "items" (flat mode) or "sections" (sectioned mode). '
    'Each item: {text: string, children?: [...], importance?: "high"|"medium"|"low"}'
)

_IMPORTANCE_VALUES = {level.value for level in Importance}


class InputValidationError(ValueError):
    """The request does not describe a bullet list we can score."""


def validate_input(raw: Any) -> BulletInput:
    """Check the request shape and build the typed input.

    Exactly one of ``items`` (flat mode) or ``sections`` (sectioned mode)
    must be a list. Lists must be non-empty, sections need a title, and every
    item (children included) needs non-blank text.
    """
    if not isinstance(raw, dict):
        raise InputValidationError("Input must be an object")

    has_items = isinstance(raw.get("items"), list)
    has_sections = isinstance(raw.get("sections"), list)

    if not has_items and not has_sections:
        raise InputValidationError('Must provide either "items" (flat mode) or "sections" (sectioned mode)')
    if has_items and has_sections:
        raise InputValidationError('Cannot use both "items" and "sections" - choose one mode')

    if has_items:
        if not raw["items"]:
            raise InputValidationError("Items array cannot be empty")
        _validate_items(raw["items"], "items")
    else:
        sections = raw["sections"]
        if not sections:
            raise InputValidationError("Sections array cannot be empty")
        for i, section in enumerate(sections):
            _validate_section(section, i)

    # A non-list value under the unused mode key counts as absent.
    unused = "sections" if has_items else "items"
    fields = {key: raw[key] for key in BulletInput.model_fields if key != unused and raw.get(key) is not None}
    try:
        return BulletInput.model_validate(fields)
    except ValidationError as exc:
        raise InputValidationError(f"Invalid bullet input: {exc.errors()[0]['msg']}") from exc


def _validate_section(section: Any, index: int) -> None:
    if not isinstance(section, dict):
        raise InputValidationError(f"Section at index {index} must be an object")

    title = section.get("title")
    if not isinstance(title, str) or not title.strip():
        raise InputValidationError(f"Section at index {index} must have a non-empty title")

    items = section.get("items")
    if not isinstance(items, list):
        raise InputValidationError(f'Section "{title}" must have an items array')
    if not items:
        raise InputValidationError(f'Section "{title}" cannot have empty items array')

    _validate_items(items, f'section "{title}"')


def _validate_items(items: list, location: str) -> None:
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise InputValidationError(f"Item at index {i} in {location} must be an object")

        text = item.get("text")
        if not isinstance(text, str) or not text.strip():
            raise InputValidationError(f"Item at index {i} in {location} must have non-empty text property")

        importance = item.get("importance")
        if importance is not None and (not isinstance(importance, str) or importance not in _IMPORTANCE_VALUES):
            raise InputValidationError(
                f"Item at index {i} in {location} has invalid importance {importance!r} "
                '(expected "high", "medium" or "low")'
            )

        children = item.get("children")
        if children is None:
            continue
        if not isinstance(children, list):
            raise InputValidationError(f"Item at index {i} in {location} has children that are not an array")
        _validate_items(children, f"children of item {i} in {location}")
