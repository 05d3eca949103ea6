"""Pull performer names out of show descriptions and match them to the registry.

Descriptions announce people with a handful of phrases ("Team members are:",
"Cast:", "Hosted by", ...). Whatever follows the phrase up to the end of the
sentence is split on commas and "and" into candidate names, which are then
resolved against known performers by normalized exact or substring match.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from thefuzz import fuzz

from clubsync.log import get_logger
from clubsync.models import Ambiguous, Matched, MatchOutcome, Unmatched
from clubsync.normalize import fold_name, normalize_name, slugify

logger = get_logger("performers")

# Phrases followed by a list of names
_NAME_LIST_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\*?Actual Cast:\s*",
        r"Team members are:\s*",
        r"regular cast is\s*",
        r"cast is\s*",
        r"cast:\s*",
        r"performers?:\s*",
        r"starring:\s*",
        r"featuring:\s*",
        r"lineup:\s*",
    )
]

# Phrases followed by one or two people, never a long list
_PERSON_PATTERNS = [
    re.compile(r"hosted by:?\s*", re.IGNORECASE),
    re.compile(r"coached by\s*", re.IGNORECASE),
]

_SECTION_END = re.compile(r"\.\s|\n|\Z")
_COMMA = re.compile(r",\s*")
_AND = re.compile(r"\s+and\s+")
_TRAILING_PUNCT = re.compile(r"[.!?]+$")

MAX_NAME_LEN = 50
MAX_PERSON_SECTION_LEN = 100
MIN_PARTIAL_MATCH_LEN = 5
SUGGESTION_THRESHOLD = 85


def _split_names(section: str) -> list[str]:
    names = []
    for part in _COMMA.split(section):
        for piece in _AND.split(part):
            name = _TRAILING_PUNCT.sub("", piece.strip())
            if name and "(" not in name and len(name) < MAX_NAME_LEN:
                names.append(name)
    return names


def _name_section(text: str, start: int) -> str:
    rest = text[start:]
    end = _SECTION_END.search(rest)
    return rest[: end.start()] if end else rest


def extract_name_strings(text: str) -> list[str]:
    """Extract candidate person names from free text, in order of appearance."""
    if not text:
        return []

    found: list[tuple[int, list[str]]] = []
    for pattern in _NAME_LIST_PATTERNS:
        m = pattern.search(text)
        if m:
            found.append((m.start(), _split_names(_name_section(text, m.end()))))

    for pattern in _PERSON_PATTERNS:
        m = pattern.search(text)
        if m:
            section = _name_section(text, m.end()).strip()
            if 0 < len(section) < MAX_PERSON_SECTION_LEN:
                found.append((m.start(), _split_names(section)))

    found.sort(key=lambda f: f[0])
    return list(dict.fromkeys(name for _, names in found for name in names))


# --- Matching ---


def _field(entry: Any, key: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(key)
    return getattr(entry, key, None)


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def _candidates(
    normalized: str, registry: Iterable[Any], used: set[Any]
) -> tuple[Any | None, list[Any]]:
    """Return (exact match, partial matches) among registry entries not yet used."""
    partial = []
    for entry in registry:
        if _field(entry, "id") in used:
            continue
        other = normalize_name(_field(entry, "name") or "")
        if not other:
            continue
        if normalized == other:
            return entry, []
        if len(normalized) >= MIN_PARTIAL_MATCH_LEN and _contains_either(normalized, other):
            partial.append(entry)
    return None, partial


def match_performers(extracted_names: Sequence[str], registry: Sequence[Any]) -> list[Any]:
    """Resolve extracted names to registry entries.

    Each registry entry is returned at most once, in the order the names
    first resolve. Names shorter than five characters only match exactly.
    When a partial match has several candidates the first one is taken and
    the ambiguity is logged.
    """
    matched: list[Any] = []
    used: set[Any] = set()
    if not extracted_names or not registry:
        return matched

    for name in extracted_names:
        normalized = normalize_name(name)
        if not normalized:
            continue
        exact, partial = _candidates(normalized, registry, used)
        entry = exact if exact is not None else (partial[0] if partial else None)
        if entry is None:
            continue
        if exact is None and len(partial) > 1:
            logger.warning(
                "ambiguous_match",
                name=name,
                chosen=_field(entry, "name"),
                candidates=[_field(p, "name") for p in partial],
            )
        matched.append(entry)
        used.add(_field(entry, "id"))
    return matched


def suggest_performers(name: str, registry: Sequence[Any], limit: int = 3) -> list[Any]:
    """Near-miss registry entries for a name that did not match, best first.

    Accents are folded here so "Maria Garcia" can point at "María García"
    for a human to confirm. Suggestions never count as matches.
    """
    folded = fold_name(name)
    if not folded:
        return []
    scored = []
    for entry in registry:
        score = fuzz.token_sort_ratio(folded, fold_name(_field(entry, "name") or ""))
        if score >= SUGGESTION_THRESHOLD:
            scored.append((score, entry))
    scored.sort(key=lambda s: s[0], reverse=True)
    return [entry for _, entry in scored[:limit]]


def resolve_name(name: str, registry: Sequence[Any]) -> MatchOutcome:
    """Classify one name as Matched, Ambiguous or Unmatched against the registry."""
    normalized = normalize_name(name)
    if normalized:
        exact, partial = _candidates(normalized, registry, set())
        if exact is not None:
            return Matched(name=name, entry=exact)
        if len(partial) == 1:
            return Matched(name=name, entry=partial[0])
        if len(partial) > 1:
            return Ambiguous(name=name, candidates=partial)
    return Unmatched(
        name=name, slug=slugify(name), suggestions=suggest_performers(name, registry)
    )


def resolve_names(names: Iterable[str], registry: Sequence[Any]) -> list[MatchOutcome]:
    """Resolve each distinct name, for callers that report ambiguous and unmatched names."""
    outcomes = [resolve_name(n, registry) for n in dict.fromkeys(names)]
    ambiguous = [o.name for o in outcomes if isinstance(o, Ambiguous)]
    if ambiguous:
        logger.info("ambiguous_names_skipped", count=len(ambiguous), names=ambiguous)
    new = [o.slug for o in outcomes if isinstance(o, Unmatched) and o.slug]
    if new:
        logger.info("new_names_seen", count=len(new), slugs=new)
    return outcomes


def parse_performers_from_description(description: str, registry: Sequence[Any]) -> list[Any]:
    """Extract names from a description and match them against the registry."""
    return match_performers(extract_name_strings(description), registry)
