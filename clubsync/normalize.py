"""String normalization used for matching performers and shows.

Every comparison key lives here so that extraction, matching and
merging agree on the same canonical forms.
"""

from __future__ import annotations

import re
import unicodedata

_NON_NAME_CHARS = re.compile(r"[^a-z\s-]")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(s: str) -> str:
    """Normalize a performer name: lowercase, drop non-letters, collapse whitespace.

    Accented letters are dropped, not folded: "María" becomes "mara".
    Hyphens survive, so "Johnson-Williams" and "Johnson Williams" differ.
    """
    s = _NON_NAME_CHARS.sub("", s.lower())
    return _WHITESPACE.sub(" ", s).strip()


def fold_name(s: str) -> str:
    """Accent-folding variant of normalize_name, used for near-miss suggestions only."""
    s = unicodedata.normalize("NFKD", s)
    s = "".join(c for c in s if not unicodedata.combining(c))
    return normalize_name(s)


def normalize_title(s: str) -> str:
    """Normalize a show title: lowercase, non-alphanumeric runs become one space."""
    return _NON_ALNUM_RUN.sub(" ", s.lower()).strip()


def slugify(s: str) -> str:
    """URL slug for a new registry entry ("Noah Telson" -> "noah-telson")."""
    return _NON_ALNUM_RUN.sub("-", s.lower()).strip("-")
