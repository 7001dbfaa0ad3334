"""Shallow grammatical pattern detection for bullet openings.

Looks only at the first word (plus a copula scan of the whole text), which is
enough to tell "Use X" from "Using X" from "The X" when checking parallel
structure. English only.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Hashable, Iterable, Optional, TypeVar

from .models import GrammarPattern

T = TypeVar("T", bound=Hashable)

IMPERATIVE_VERBS = frozenset({
    "use", "create", "add", "remove", "update", "check", "ensure", "make", "set", "get",
    "run", "build", "test", "deploy", "configure", "install", "enable", "disable", "implement", "define",
    "write", "read", "delete", "move", "copy", "start", "stop", "open", "close", "send",
    "receive", "validate", "verify", "confirm", "select", "choose", "avoid", "include", "exclude", "maintain",
    "keep", "place", "put", "apply", "follow", "consider", "review", "analyze", "optimize", "limit",
    "maximize", "minimize", "target", "focus", "provide", "support", "handle", "process", "format", "parse",
    "convert", "transform", "organize", "structure", "break", "split", "merge", "combine", "group", "separate",
    "allow", "prevent", "require", "expect", "return", "call", "invoke", "execute", "perform", "complete",
    "finish", "begin", "continue", "repeat", "iterate", "loop", "track", "monitor", "log", "record",
    "store", "save", "load", "fetch", "retrieve", "display", "show", "hide", "render", "print",
    "export", "import",
})

# Words ending in "-ing" that are nouns, not gerunds.
NON_GERUNDS = frozenset({
    "king", "ring", "thing", "string", "spring", "swing", "bring", "sing",
    "bling", "fling", "sling", "sting", "wing", "cling", "wring",
    "anything", "everything", "nothing", "something",
})

DETERMINERS = frozenset({"the", "a", "an", "this", "that", "each", "every", "all", "some"})

SENTENCE_MARKERS = (" is ", " are ", " was ", " were ", " has ", " have ", " will ", " can ")

_NON_LETTER_RE = re.compile(r"[^a-z]")


def classify(text: str) -> GrammarPattern:
    """Classify the opening grammatical pattern of a bullet."""
    words = text.split()
    if not words:
        return GrammarPattern.UNKNOWN

    first_word = _NON_LETTER_RE.sub("", words[0].lower())

    if first_word in IMPERATIVE_VERBS:
        return GrammarPattern.VERB_IMPERATIVE

    if first_word.endswith("ing") and len(first_word) > 4 and first_word not in NON_GERUNDS:
        return GrammarPattern.VERB_GERUND

    if first_word in DETERMINERS:
        return GrammarPattern.NOUN_PHRASE

    lowered = text.lower()
    if any(marker in lowered for marker in SENTENCE_MARKERS):
        return GrammarPattern.SENTENCE

    return GrammarPattern.UNKNOWN


def most_common(values: Iterable[T]) -> Optional[T]:
    """Return the most frequent value; ties go to the value seen first.

    ``Counter.most_common`` orders equal counts by first insertion, which is
    the tie-break every rule relies on.
    """
    ranked = Counter(values).most_common(1)
    if not ranked:
        return None
    return ranked[0][0]
