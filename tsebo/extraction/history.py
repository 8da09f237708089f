# tsebo/extraction/history.py
"""
Multi-entry CV fields: employment, education, certifications, projects and
references. Each walks the lines of its section (or of the whole text where
noted) and keeps document order.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from tsebo.extraction.personal import extract_email, extract_phone
from tsebo.models import CertificationEntry, EducationEntry, EmploymentEntry, Project, Reference
from tsebo.utils import collapse_ws, normalize_date, strip_bullet
from tsebo.vocabulary import DEFAULT_VOCABULARY, Vocabulary

_MON = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?"
DATE_TOKEN_RE = re.compile(
    rf"\b(?:\d{{1,2}}[-/]\d{{1,2}}[-/]\d{{4}}|\d{{4}}[-/]\d{{1,2}}(?:[-/]\d{{1,2}})?|{_MON}\s+\d{{4}}|\d{{4}})\b",
    re.IGNORECASE,
)
CURRENT_RE = re.compile(r"\b(?:present|current|ongoing|now|to date)\b", re.IGNORECASE)
_YEAR_OR_DATE_RE = re.compile(r"\b(?:\d{1,2}[-/]\d{1,2}[-/]\d{4}|\d{4})\b")
_DATE_ONLY_RE = re.compile(rf"^[\s(]*(?:{DATE_TOKEN_RE.pattern}|[-–—to\s]|{CURRENT_RE.pattern})+[\s)]*$", re.IGNORECASE)
_BULLET_START_RE = re.compile(r"^\s*[•●○■□▪▫*\-–]")
_DASH_SPLIT_RE = re.compile(r"\s+[-–—]\s+|[–—]")
_URL_RE = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)
_CITY_RE = re.compile(r",\s*([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
_REFERENCE_NAME_RE = re.compile(
    r"^(?:(?:Mr|Mrs|Ms|Miss|Dr|Prof)\.?\s+)?([A-Z][a-z]+(?:\s+[A-Z]\.?)?(?:\s+[A-Z][a-z]+)+)"
)
_REFERENCE_HEADER_RE = re.compile(r"^references?\s*:?$", re.IGNORECASE)
_CERT_HEADER_RE = re.compile(r"^(?:certifications?|courses?|training)\b\s*:?$", re.IGNORECASE)

MAX_RESPONSIBILITIES = 500


def _lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines()]


def _compile(patterns) -> List["re.Pattern[str]"]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


def is_date_line(line: str) -> bool:
    # long sentences that merely mention a year are responsibilities
    if len(line) > 50 and not _DATE_ONLY_RE.match(line):
        return False
    return bool(DATE_TOKEN_RE.search(line) or CURRENT_RE.search(line))


# ----------------------------
# Employment
# ----------------------------

def _is_title_line(line: str, title_res) -> bool:
    if len(line) > 80 or _BULLET_START_RE.match(line):
        return False
    return any(r.search(line) for r in title_res)


def extract_employment_history(
    text: str,
    sections: Optional[Dict[str, str]] = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> List[EmploymentEntry]:
    title_res = _compile(vocabulary.title_patterns)
    entries: List[dict] = []
    current: Optional[dict] = None

    for line in _lines((sections or {}).get("experience") or text):
        if len(line) < 5:
            continue

        if _is_title_line(line, title_res):
            current = {"company_name": "", "job_title": line, "start_date": None, "end_date": None, "resp": []}
            entries.append(current)
            continue

        if current is None:
            continue

        if (
            not current["company_name"]
            and len(line) < 60
            and not line[0].isdigit()
            and not is_date_line(line)
            and not _BULLET_START_RE.match(line)
        ):
            current["company_name"] = line
            continue

        if is_date_line(line):
            dates = DATE_TOKEN_RE.findall(line)
            if dates:
                current["start_date"] = normalize_date(dates[0], partial=True)
                if len(dates) >= 2:
                    current["end_date"] = normalize_date(dates[1], partial=True)
            if CURRENT_RE.search(line):
                current["end_date"] = None
            continue

        if len(line) > 20 and (_BULLET_START_RE.match(line) or "-" in line or line[0].isupper()):
            current["resp"].append(strip_bullet(line))

    history = []
    for e in entries:
        responsibilities = " ".join(e["resp"])[:MAX_RESPONSIBILITIES]
        if not e["company_name"] and not responsibilities:
            continue
        history.append(
            EmploymentEntry(
                company_name=e["company_name"] or "Unknown",
                job_title=e["job_title"],
                start_date=e["start_date"],
                end_date=e["end_date"],
                responsibilities=responsibilities,
            )
        )
    return history


# ----------------------------
# Education
# ----------------------------

def _find_institution(line: str, vocabulary: Vocabulary) -> Optional[Tuple[str, re.Match]]:
    for inst in vocabulary.institutions:
        # acronyms like "UP" only count in capitals
        flags = 0 if inst.isupper() else re.IGNORECASE
        m = re.search(rf"(?<!\w){re.escape(inst)}(?!\w)", line, flags)
        if m:
            return inst, m
    return None


def extract_education(
    text: str,
    sections: Optional[Dict[str, str]] = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> List[EducationEntry]:
    degree_res = _compile(vocabulary.degree_patterns)
    lines = _lines((sections or {}).get("education") or text)
    education = []

    for i, line in enumerate(lines):
        if len(line) < 5:
            continue
        match = next((m for m in (r.search(line) for r in degree_res) if m), None)
        if not match:
            continue

        institution = city = graduation = None
        for nearby in lines[max(0, i - 2): i + 4]:
            if institution is None:
                found = _find_institution(nearby, vocabulary)
                if found:
                    institution, inst_match = found
                    city_match = _CITY_RE.search(nearby, inst_match.end())
                    if city_match:
                        city = city_match.group(1)
            if graduation is None:
                date_match = _YEAR_OR_DATE_RE.search(nearby)
                if date_match:
                    graduation = normalize_date(date_match.group(0), partial=True)

        education.append(
            EducationEntry(
                degree=collapse_ws(match.group(0)),
                institution=institution or "Unknown",
                city=city,
                graduation_date=graduation,
            )
        )
    return education


# ----------------------------
# Certifications
# ----------------------------

def extract_certifications(text: str, sections: Optional[Dict[str, str]] = None) -> List[CertificationEntry]:
    """Certification section only: free text elsewhere is too noisy."""
    section = (sections or {}).get("certifications")
    if not section:
        return []

    lines = _lines(section)
    certifications = []
    i = 0
    while i < len(lines):
        title_index = i
        line = lines[i]
        i += 1
        if len(line) < 5 or _CERT_HEADER_RE.match(line) or _DATE_ONLY_RE.match(line):
            continue

        parts = _DASH_SPLIT_RE.split(strip_bullet(line), maxsplit=1)
        institution = None
        if len(parts) == 2:
            title, institution = parts[0].strip(), parts[1].strip() or None
        else:
            title = strip_bullet(line)
            if i < len(lines):
                nxt = lines[i]
                if 0 < len(nxt) < 50 and not nxt[0].isdigit() and not _DATE_ONLY_RE.match(nxt):
                    institution = nxt
                    i += 1

        start = end = None
        for nearby in lines[title_index: title_index + 3]:
            found = _YEAR_OR_DATE_RE.findall(nearby)
            if found:
                start = normalize_date(found[0], partial=True)
                if len(found) >= 2:
                    end = normalize_date(found[1], partial=True)
                break

        if institution:
            # a trailing year belongs to the dates, not the issuer
            institution = _YEAR_OR_DATE_RE.sub("", institution).strip(" ,()-–") or None

        if title and len(title) > 3:
            certifications.append(
                CertificationEntry(title=title, institution=institution, start_date=start, end_date=end)
            )
    return certifications


# ----------------------------
# Projects
# ----------------------------

def extract_projects(text: str, sections: Optional[Dict[str, str]] = None) -> List[Project]:
    lines = _lines((sections or {}).get("projects") or text)
    projects = []
    for i, line in enumerate(lines):
        if len(line) < 5:
            continue
        for raw_url in _URL_RE.findall(line):
            url = raw_url.rstrip(".,;:)]")
            name = strip_bullet(line.replace(raw_url, "")).strip(" :-–|")
            if not name and i > 0:
                name = strip_bullet(lines[i - 1])
            projects.append(Project(name=name or "Project", url=url))
    return projects


# ----------------------------
# References
# ----------------------------

def _is_organisation(line: str, vocabulary: Vocabulary) -> bool:
    words = {w.strip(".,()").lower() for w in line.split()}
    return any(marker in words for marker in vocabulary.organisation_markers)


def extract_references(
    text: str,
    sections: Optional[Dict[str, str]] = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> List[Reference]:
    """References section only."""
    section = (sections or {}).get("references")
    if not section:
        return []

    title_res = _compile(vocabulary.title_patterns)
    references: List[Reference] = []
    current: Optional[Reference] = None

    for line in _lines(section):
        if not line or _REFERENCE_HEADER_RE.match(line):
            continue

        name_match = _REFERENCE_NAME_RE.match(line)
        if (
            name_match
            and "@" not in line
            and not _is_organisation(line, vocabulary)
            and not any(r.search(name_match.group(0)) for r in title_res)
        ):
            current = Reference(name=name_match.group(0).strip())
            references.append(current)
            continue

        if current is None:
            continue

        email = extract_email(line)
        phone = extract_phone(line)
        if email:
            current.email = email
        if phone:
            current.phone = phone
        if email or phone or not 3 < len(line) < 60:
            continue
        # a role line ("Head of Engineering") may come first; an organisation line replaces it
        if not current.company or (
            _is_organisation(line, vocabulary) and not _is_organisation(current.company, vocabulary)
        ):
            current.company = line

    return references
