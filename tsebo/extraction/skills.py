# tsebo/extraction/skills.py
from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Optional, Set, Tuple

from tsebo.utils import strip_bullet
from tsebo.vocabulary import DEFAULT_VOCABULARY, Vocabulary

_BULLETS_RE = re.compile(r"[•●○■□▪▫]")
_FRAGMENT_SPLIT_RE = re.compile(r"[\n,;|]")


@lru_cache(maxsize=8)
def _term_patterns(terms: Tuple[str, ...]) -> Tuple[Tuple[str, "re.Pattern[str]"], ...]:
    # \b breaks on terms like "c#" or ".net", so bound on word characters instead
    return tuple(
        (term.lower(), re.compile(rf"(?<!\w){re.escape(term.lower())}(?!\w)"))
        for term in terms
        if term.strip()
    )


def vocabulary_skills(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Set[str]:
    haystack = _BULLETS_RE.sub(" ", (text or "").lower())
    haystack = re.sub(r"\s+", " ", haystack)
    return {term for term, pattern in _term_patterns(vocabulary.skills) if pattern.search(haystack)}


def fragment_skills(section_text: str) -> Set[str]:
    """Short comma/semicolon/line separated pieces of a skills section."""
    found = set()
    for piece in _FRAGMENT_SPLIT_RE.split(section_text or ""):
        cleaned = strip_bullet(_BULLETS_RE.sub(" ", piece)).lower()
        cleaned = re.sub(r"\s+", " ", cleaned).strip(" .:")
        # "Languages: Python" style category prefixes
        if ":" in cleaned:
            cleaned = cleaned.split(":", 1)[1].strip()
        if 2 < len(cleaned) <= 30 and len(cleaned.split()) <= 3:
            found.add(cleaned)
    return found


def extract_skills(
    text: str,
    sections: Optional[Dict[str, str]] = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> Set[str]:
    section = (sections or {}).get("skills")
    skills = vocabulary_skills(section or text, vocabulary)
    if section:
        skills |= fragment_skills(section)

    stop = {w.lower() for w in vocabulary.stop_words}
    return {s for s in skills if s not in stop and len(s) > 1}
