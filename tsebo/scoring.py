# tsebo/scoring.py
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from tsebo.config import Weights
from tsebo.models import MatchInput

DEFAULT_WEIGHTS = Weights()

QUALITY_LABELS = [
    (80, "Excellent Match"),
    (60, "Good Match"),
    (40, "Fair Match"),
]


@dataclass
class ScoreBreakdown:
    total: int
    skills_points: float
    experience_points: float
    matched_skills: List[str]


def _norm(skill: str) -> str:
    return (skill or "").strip().lower()


def _overlaps(skill: str, required: List[str]) -> bool:
    return any(skill in req or req in skill for req in required)


def matched_skills(candidate_skills: Iterable[str], required_skills: Iterable[str]) -> List[str]:
    """
    Candidate skills (original spelling, original order) that contain, or are
    contained in, some required skill. Display only; ranking uses the score.
    """
    required = [r for r in (_norm(s) for s in required_skills) if r]
    out = []
    for skill in candidate_skills or []:
        s = _norm(skill)
        if s and _overlaps(s, required):
            out.append(skill)
    return out


def skills_points(candidate_skills: Iterable[str], required_skills: Iterable[str], weight: float) -> float:
    required = sorted({r for r in (_norm(s) for s in required_skills) if r})
    if not required:
        return 0.0
    candidate = {c for c in (_norm(s) for s in candidate_skills) if c}
    overlap = sum(1 for c in candidate if _overlaps(c, required))
    # several candidate variants ("react", "react native") may hit one requirement
    return weight * min(overlap, len(required)) / len(required)


def experience_points(candidate_years: float, min_years: float, weights: Weights = DEFAULT_WEIGHTS) -> float:
    if candidate_years >= min_years:
        return weights.experience
    for step in sorted(weights.experience_steps, key=lambda s: s.ratio, reverse=True):
        if candidate_years >= min_years * step.ratio:
            return step.points
    return 0.0


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def score_breakdown(match: MatchInput, weights: Optional[Weights] = None) -> ScoreBreakdown:
    weights = weights or DEFAULT_WEIGHTS
    sp = skills_points(match.candidate_skills, match.required_skills, weights.skills)
    ep = experience_points(match.candidate_experience_years, match.min_experience_years, weights)
    total = max(0, min(100, _round_half_up(sp + ep)))
    return ScoreBreakdown(
        total=total,
        skills_points=round(sp, 2),
        experience_points=ep,
        matched_skills=sorted(matched_skills(match.candidate_skills, match.required_skills)),
    )


def calculate_match_score(match: MatchInput, weights: Optional[Weights] = None) -> int:
    """0-100: skills overlap (70) plus experience sufficiency (30)."""
    return score_breakdown(match, weights).total


def match_quality(score: int) -> str:
    for floor, label in QUALITY_LABELS:
        if score >= floor:
            return label
    return "Weak Match"
