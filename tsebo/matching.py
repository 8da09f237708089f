# tsebo/matching.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from tsebo.config import Weights
from tsebo.exceptions import ConfigurationError
from tsebo.models import CandidateRecord, JobSpec, MatchResult, match_input
from tsebo.scoring import calculate_match_score, match_quality, matched_skills

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


# ----------------------------
# IO
# ----------------------------

def _read_structured(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def load_records(path: str, model: Type[RecordT]) -> List[RecordT]:
    """
    Read candidate or job records from a JSON/YAML file holding either a list
    or a single mapping. Invalid entries are skipped with a warning.
    """
    p = Path(path).expanduser()
    if not p.exists():
        raise ConfigurationError(f"Records file not found: {p}")

    data = _read_structured(p)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ConfigurationError(f"Records file must hold a list or a mapping: {p}")

    records: List[RecordT] = []
    for i, raw in enumerate(data):
        try:
            records.append(model(**raw))
        except (TypeError, ValidationError) as e:
            logger.warning(f"Skipping {model.__name__} #{i} in {p.name}: {e}")
    return records


# ----------------------------
# Ranking
# ----------------------------

def _result(candidate: CandidateRecord, job: JobSpec, weights: Optional[Weights]) -> MatchResult:
    score = calculate_match_score(match_input(candidate, job), weights)
    return MatchResult(
        candidate=candidate,
        job=job,
        score=score,
        matched_skills=matched_skills(candidate.skills, job.required_skills),
        quality=match_quality(score),
    )


def _top(results: List[MatchResult], top_n: int) -> List[MatchResult]:
    # sort is stable: equal scores keep input order
    results.sort(key=lambda r: r.score, reverse=True)
    return results[: max(0, top_n)]


def match_candidates(
    job: Optional[JobSpec],
    candidates: Sequence[CandidateRecord],
    top_n: int = 2,
    weights: Optional[Weights] = None,
) -> List[MatchResult]:
    """Best ``top_n`` candidates for one job."""
    if job is None or not candidates:
        return []
    results = [_result(c, job, weights) for c in candidates]
    logger.debug(f"Scored {len(results)} candidates for job {job.id}")
    return _top(results, top_n)


def match_jobs(
    candidate: Optional[CandidateRecord],
    jobs: Sequence[JobSpec],
    top_n: int = 2,
    weights: Optional[Weights] = None,
) -> List[MatchResult]:
    """Best ``top_n`` jobs for one candidate."""
    if candidate is None or not jobs:
        return []
    results = [_result(candidate, j, weights) for j in jobs]
    logger.debug(f"Scored {len(results)} jobs for candidate {candidate.id}")
    return _top(results, top_n)


def result_row(r: MatchResult) -> Dict[str, Any]:
    return {
        "score": r.score,
        "quality": r.quality,
        "candidate_id": r.candidate.id,
        "candidate_name": r.candidate.name,
        "job_id": r.job.id,
        "job_title": r.job.title,
        "company": r.job.company or "",
        "matched_skills": ", ".join(r.matched_skills),
        "experience": r.candidate.experience,
        "min_experience": r.job.min_experience,
    }
