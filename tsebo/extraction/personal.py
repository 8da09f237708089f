# tsebo/extraction/personal.py
"""
Single-value contact and identity fields.

Every extractor takes ``(text, sections)`` and returns the field value or
None; the first match in document order wins.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, Optional

from tsebo.utils import collapse_ws, normalize_date

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,}")

_PHONE_LABEL_RE = re.compile(
    r"\b(?:phone|tel|telephone|cell|cellphone|mobile)\b[^\S\n]*(?:no\.?|number)?[^\S\n]*[:.]?[^\S\n]*"
    r"([+(]?\d[\d ().-]{6,}\d)",
    re.IGNORECASE,
)
_PHONE_ZA_RE = re.compile(
    r"(?<![\w+])(?:\+27|0)[ -]?(?:\d{2}[ -]?\d{3}[ -]?\d{4}|\d{3}[ -]?\d{3}[ -]?\d{3})(?!\d)"
)
_PHONE_ANY_RE = re.compile(
    r"(?<![\w+])\+?(?:\(\d{1,4}\)|\d{1,4})(?:[ .-]?(?:\(\d{1,4}\)|\d{1,4})){1,6}(?![\w])"
)
_DATE_SHAPED_RE = re.compile(r"^\d{1,4}[-/.]\d{1,2}[-/.]\d{1,4}$")

_NAME_WORD_RE = re.compile(r"^(?:[A-Z][a-z]+(?:[-'][A-Z][a-z]+)?|[A-Z]\.?)$")
_CV_WORDS_RE = re.compile(r"\b(?:curriculum|vitae|resume|cv)\b", re.IGNORECASE)

_SUMMARY_SKIP_RE = re.compile(r"^(?:name|email|phone|address)", re.IGNORECASE)


def extract_email(text: str, sections: Optional[Dict[str, str]] = None) -> Optional[str]:
    m = EMAIL_RE.search(text or "")
    return m.group(0).lower() if m else None


def _digits(s: str) -> int:
    return sum(ch.isdigit() for ch in s)


def _plausible_phone(candidate: str) -> bool:
    s = candidate.strip()
    if _DATE_SHAPED_RE.match(s):
        return False
    return 8 <= _digits(s) <= 15


def extract_phone(text: str, sections: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Labeled numbers beat bare ones; each pattern needs 8+ digits."""
    text = text or ""
    for m in _PHONE_LABEL_RE.finditer(text):
        value = m.group(1).strip()
        if _plausible_phone(value):
            return value

    for regex in (_PHONE_ZA_RE, _PHONE_ANY_RE):
        for m in regex.finditer(text):
            value = m.group(0).strip()
            if _plausible_phone(value):
                return value
    return None


def extract_labeled_field(text: str, labels: Iterable[str]) -> Optional[str]:
    """Value after the first ``label:`` found at the start of a line."""
    for label in labels:
        pattern = re.compile(
            rf"^[^\S\n]*{label}\b[^\S\n]*[:\-]?[^\S\n]*(\S[^\n]*)$",
            re.IGNORECASE | re.MULTILINE,
        )
        m = pattern.search(text or "")
        if m:
            value = collapse_ws(m.group(1))
            if value:
                return value
    return None


def extract_name(text: str, sections: Optional[Dict[str, str]] = None) -> str:
    labeled = extract_labeled_field(text, [r"full\s+name", r"candidate\s+name", r"name"])
    if labeled and 3 < len(labeled) < 50:
        return labeled

    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    for line in lines[:5]:
        if len(line) >= 50 or _CV_WORDS_RE.search(line):
            continue
        words = line.split()
        if 2 <= len(words) <= 4 and all(_NAME_WORD_RE.match(w) for w in words):
            return line
    return "Unknown"


def extract_address(text: str, sections: Optional[Dict[str, str]] = None) -> Optional[str]:
    return extract_labeled_field(
        text, [r"residential\s+address", r"physical\s+address", r"address", r"location", r"residence"]
    )


def extract_nationality(text: str, sections: Optional[Dict[str, str]] = None) -> Optional[str]:
    return extract_labeled_field(text, [r"nationality", r"citizenship", r"citizen"])


def extract_gender(text: str, sections: Optional[Dict[str, str]] = None) -> Optional[str]:
    gender = extract_labeled_field(text, [r"gender", r"sex"])
    if not gender:
        return None
    lowered = gender.lower()
    if "female" in lowered:
        return "Female"
    if "male" in lowered:
        return "Male"
    return gender


def extract_date_of_birth(text: str, sections: Optional[Dict[str, str]] = None) -> Optional[str]:
    dob = extract_labeled_field(text, [r"date\s+of\s+birth", r"dob", r"birth\s+date", r"born"])
    return normalize_date(dob) if dob else None


def extract_profile_summary(text: str, sections: Optional[Dict[str, str]] = None) -> str:
    profile = ((sections or {}).get("profile") or "").strip()
    if len(profile) > 50:
        return collapse_ws(profile)

    summary_lines = []
    for raw in (text or "").splitlines()[:30]:
        line = raw.strip()
        if not summary_lines:
            if len(line) > 100 and not _SUMMARY_SKIP_RE.match(line):
                summary_lines.append(line)
            continue
        if len(line) > 50:
            summary_lines.append(line)
        else:
            break

    return " ".join(summary_lines)[:500]
