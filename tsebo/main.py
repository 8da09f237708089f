# tsebo/main.py
from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Optional

from tsebo.config import Config, load_config
from tsebo.exceptions import ConfigurationError
from tsebo.extraction import AffindaExtractor, Extractor, LocalExtractor, parse_with_fallback
from tsebo.log import setup_logging
from tsebo.matching import load_records, match_candidates, result_row
from tsebo.models import CandidateRecord, ExtractionResult, JobSpec, MatchResult
from tsebo.resume import read_document

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[1]

RESULT_FIELDS = [
    "score",
    "quality",
    "candidate_id",
    "candidate_name",
    "job_id",
    "job_title",
    "company",
    "matched_skills",
    "experience",
    "min_experience",
]


def _load(config_path: Optional[str]) -> Config:
    cfg = load_config(config_path)
    setup_logging(cfg.logging.level)
    logger.debug(f"Using config file: {config_path or '(defaults)'}")
    return cfg


def build_extractors(cfg: Config) -> List[Extractor]:
    """Hosted parser first when enabled, local heuristics always last."""
    extractors: List[Extractor] = []
    if cfg.parser.use_hosted:
        extractors.append(AffindaExtractor(cfg.parser, cfg.upload))
    extractors.append(LocalExtractor(cfg.vocabulary(), cfg.upload))
    return extractors


def parse_cv(path: str, cfg: Config) -> ExtractionResult:
    content = read_document(path)
    return parse_with_fallback(
        content,
        Path(path).name,
        build_extractors(cfg),
        threshold=cfg.parser.confidence_threshold,
    )


def _write_results(results: List[MatchResult], out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)

    out_json = out_dir / "results.json"
    out_csv = out_dir / "results.csv"

    out_json.write_text(
        json.dumps([r.model_dump(mode="json") for r in results], indent=2),
        encoding="utf-8",
    )

    with out_csv.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        writer.writeheader()
        for r in results:
            writer.writerow(result_row(r))

    print(f"Wrote {len(results)} matches → {out_json}")
    print(f"Wrote CSV → {out_csv}")


def run_parse(cv_path: str, out_path: Optional[str] = None, config_path: Optional[str] = None) -> ExtractionResult:
    cfg = _load(config_path)
    result = parse_cv(cv_path, cfg)

    body = json.dumps(result.model_dump(mode="json"), indent=2)
    if out_path:
        out = Path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(body, encoding="utf-8")
        print(f"Wrote {result.source} extraction ({result.confidence:.0%}) → {out}")
    else:
        print(body)
    return result


def run_match(
    job_path: str,
    candidates_path: str,
    out_dir: Optional[str] = None,
    top_n: Optional[int] = None,
    config_path: Optional[str] = None,
) -> List[MatchResult]:
    cfg = _load(config_path)

    jobs = load_records(job_path, JobSpec)
    if not jobs:
        raise ConfigurationError(f"No valid job found in {job_path}")
    if len(jobs) > 1:
        logger.warning(f"{job_path} holds {len(jobs)} jobs; matching against the first")
    job = jobs[0]

    candidates = load_records(candidates_path, CandidateRecord)
    if not candidates:
        print(f"No candidates found in {candidates_path}")
        return []

    results = match_candidates(
        job,
        candidates,
        top_n=top_n if top_n is not None else cfg.matching.top_n,
        weights=cfg.scoring.weights,
    )

    for r in results:
        print(f"{r.score:>3}%  {r.quality:<15}  {r.candidate.name}  [{', '.join(r.matched_skills)}]")

    _write_results(results, Path(out_dir) if out_dir else REPO_ROOT / "data" / "results")
    return results


if __name__ == "__main__":
    run_match(str(REPO_ROOT / "data" / "job.yaml"), str(REPO_ROOT / "data" / "candidates.yaml"))
