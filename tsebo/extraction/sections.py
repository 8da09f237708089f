# tsebo/extraction/sections.py
from __future__ import annotations

import re
from typing import Dict, List, Optional

# Checked in this order; the first header family that matches wins.
SECTION_HEADERS = {
    "profile": r"profile|summary|about\s*me|professional\s*summary|objective",
    "skills": r"skills|technical\s*skills|core\s*competencies|expertise|technologies",
    "experience": r"experience|employment\s*history|work\s*experience|professional\s*experience|career\s*history",
    "education": r"education|academic\s*background|qualifications|academic\s*qualifications",
    "certifications": r"certifications?|courses?|other\s*qualifications|training|professional\s*development",
    "projects": r"projects?|portfolio|work\s*samples",
    "references": r"references?",
}

_HEADER_RES = {name: re.compile(rf"(?:{alts})", re.IGNORECASE) for name, alts in SECTION_HEADERS.items()}
_DECORATION = re.compile(r"^[\s#*•▪=_\-]+|[\s:#*=_\-]+$")


def section_for(line: str) -> Optional[str]:
    """Name of the section a header line opens, or None for ordinary lines."""
    candidate = _DECORATION.sub("", line or "")
    candidate = re.sub(r"\s+", " ", candidate)
    if not candidate or len(candidate) > 40:
        return None
    for name, regex in _HEADER_RES.items():
        if regex.fullmatch(candidate):
            return name
    return None


def split_sections(text: str) -> Dict[str, str]:
    """
    Map section name -> body text. Lines before the first header are dropped,
    empty sections are omitted and a repeated header appends to its section.
    """
    bodies: Dict[str, List[str]] = {}
    current: Optional[str] = None

    for line in (text or "").splitlines():
        name = section_for(line)
        if name:
            current = name
            bodies.setdefault(name, [])
            continue
        if current:
            bodies[current].append(line)

    sections: Dict[str, str] = {}
    for name, lines in bodies.items():
        body = "\n".join(lines)
        if body.strip():
            sections[name] = body
    return sections
