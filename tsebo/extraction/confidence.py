# tsebo/extraction/confidence.py
from __future__ import annotations

from typing import Any, Callable, List, Tuple

from tsebo.extraction.personal import EMAIL_RE
from tsebo.models import ParsedDocument, ValidationReport

# (field, weight, check) - weights total 19
FIELD_WEIGHTS: List[Tuple[str, int, Callable[[Any], bool]]] = [
    ("full_name", 3, lambda v: bool(v) and v != "Unknown"),
    ("email", 3, lambda v: bool(v) and EMAIL_RE.fullmatch(v) is not None),
    ("phone", 2, lambda v: bool(v) and len(v) >= 9),
    ("skills", 2, lambda v: bool(v)),
    ("employment_history", 2, lambda v: bool(v)),
    ("education", 2, lambda v: bool(v)),
    ("profile_summary", 1, lambda v: bool(v) and len(v) > 50),
    ("certifications", 1, lambda v: bool(v)),
    ("address", 1, lambda v: bool(v)),
]


def score(doc: ParsedDocument) -> float:
    """Weighted completeness in [0, 1]."""
    total = sum(weight for _, weight, _ in FIELD_WEIGHTS)
    earned = sum(weight for field, weight, check in FIELD_WEIGHTS if check(getattr(doc, field)))
    return earned / total if total else 0.0


def validate_parsed(doc: ParsedDocument) -> ValidationReport:
    errors = []
    warnings = []

    if not doc.full_name or doc.full_name == "Unknown":
        errors.append("Could not extract name from CV")

    if not doc.email:
        errors.append("Could not extract email from CV")
    elif EMAIL_RE.fullmatch(doc.email) is None:
        errors.append("Invalid email format")

    if not doc.skills:
        warnings.append("No skills found in CV")
    if not doc.employment_history:
        warnings.append("No work experience found in CV")
    if not doc.education:
        warnings.append("No education found in CV")
    if not doc.phone:
        warnings.append("No phone number found in CV")

    return ValidationReport(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        confidence=score(doc),
    )
