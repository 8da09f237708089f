# tsebo/utils.py
from __future__ import annotations

import re
from datetime import date
from typing import Optional


_ws_re = re.compile(r"\s+")
_bullet_re = re.compile(r"^[\s•●○■□▪▫*\-–]+")

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
_MON = r"(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"

_ISO_RE = re.compile(r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b")
_DMY_RE = re.compile(r"\b(\d{1,2})[-/](\d{1,2})[-/](\d{4})\b")
_MON_D_Y_RE = re.compile(rf"\b{_MON}\s+(\d{{1,2}}),?\s+(\d{{4}})\b", re.IGNORECASE)
_D_MON_Y_RE = re.compile(rf"\b(\d{{1,2}})\s+{_MON}\s+(\d{{4}})\b", re.IGNORECASE)

# partial forms, only used where a month or year is all a CV usually gives
_MON_Y_RE = re.compile(rf"\b{_MON}\s+(\d{{4}})\b", re.IGNORECASE)
_Y_M_RE = re.compile(r"\b(\d{4})[-/](\d{1,2})\b")
_Y_RE = re.compile(r"\b(19\d{2}|20\d{2})\b")

_PREFIX_RE = re.compile(r"^(on|from|since)\s+", re.IGNORECASE)


def _month(name: str) -> int:
    return _MONTHS[name[:3].lower()]


# (regex, match -> (year, month, day)), tried in order
_FULL_PATTERNS = [
    (_ISO_RE, lambda m: (m.group(1), m.group(2), m.group(3))),
    (_DMY_RE, lambda m: (m.group(3), m.group(2), m.group(1))),
    (_MON_D_Y_RE, lambda m: (m.group(3), _month(m.group(1)), m.group(2))),
    (_D_MON_Y_RE, lambda m: (m.group(3), _month(m.group(2)), m.group(1))),
]
_PARTIAL_PATTERNS = [
    (_MON_Y_RE, lambda m: (m.group(2), _month(m.group(1)), 1)),
    (_Y_M_RE, lambda m: (m.group(1), m.group(2), 1)),
    (_Y_RE, lambda m: (m.group(1), 1, 1)),
]


def collapse_ws(text: str) -> str:
    return _ws_re.sub(" ", text or "").strip()


def strip_bullet(line: str) -> str:
    return _bullet_re.sub("", line or "").strip()


def _iso(year, month, day) -> Optional[str]:
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except (TypeError, ValueError):
        return None


def normalize_date(value: Optional[str], partial: bool = False) -> Optional[str]:
    """
    Normalize a date string to YYYY-MM-DD.

    Accepts YYYY-MM-DD, YYYY/MM/DD, DD-MM-YYYY, DD/MM/YYYY, "Mon DD, YYYY" and
    "DD Mon YYYY". With ``partial`` set, "Mon YYYY", "YYYY-MM" and a bare year
    are also accepted and pinned to the first day of the month/year.
    Anything else (including impossible calendar dates) gives None.
    """
    if not value:
        return None
    s = _PREFIX_RE.sub("", str(value).strip())

    patterns = _FULL_PATTERNS + (_PARTIAL_PATTERNS if partial else [])
    for regex, ymd in patterns:
        for m in regex.finditer(s):
            found = _iso(*ymd(m))
            if found:
                return found
    return None


def months_between(start: date, end: date) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)
