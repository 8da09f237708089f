import json

import pytest

from tsebo.exceptions import ConfigurationError
from tsebo.matching import load_records, match_candidates, match_jobs
from tsebo.models import CandidateRecord, JobSpec


def _candidate(cid, skills, experience):
    return CandidateRecord(id=cid, name=f"Candidate {cid}", skills=skills, experience=experience)


JOB = JobSpec(id="j1", title="Full Stack Developer", required_skills=["react", "node", "aws"], min_experience=5)


def test_basic_candidate_matching():
    candidates = [
        _candidate("1", ["Python"], 1),
        _candidate("2", ["React", "Node", "AWS"], 6),
        _candidate("3", ["React", "Node"], 5),
    ]

    results = match_candidates(JOB, candidates)

    assert len(results) == 2
    assert [r.candidate.id for r in results] == ["2", "3"]
    assert results[0].score == 100
    assert results[0].quality == "Excellent Match"
    assert results[1].score == 77
    assert results[1].matched_skills == ["React", "Node"]


def test_top_n_and_sorting():
    candidates = [_candidate(str(i), ["react"] * (i % 2), i) for i in range(6)]

    for top_n in (1, 3, 10):
        results = match_candidates(JOB, candidates, top_n=top_n)
        assert len(results) == min(top_n, len(candidates))
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)


def test_ties_keep_input_order():
    candidates = [_candidate(cid, ["react"], 5) for cid in ("a", "b", "c")]
    results = match_candidates(JOB, candidates, top_n=3)
    assert [r.candidate.id for r in results] == ["a", "b", "c"]


def test_empty_inputs():
    assert match_candidates(JOB, []) == []
    assert match_candidates(None, [_candidate("1", [], 0)]) == []
    assert match_jobs(None, [JOB]) == []


def test_jobs_for_candidate():
    jobs = [
        JobSpec(id="backend", title="Backend Engineer", required_skills=["python", "aws"], min_experience=3),
        JobSpec(id="frontend", title="Frontend Engineer", required_skills=["react", "css"], min_experience=3),
        JOB,
    ]
    results = match_jobs(_candidate("1", ["Python", "AWS", "Docker"], 4), jobs)

    assert [r.job.id for r in results] == ["backend", "j1"]
    assert results[0].score == 100
    assert results[1].score == 43


def test_load_records_json_and_yaml(tmp_path):
    json_path = tmp_path / "candidates.json"
    json_path.write_text(json.dumps([{"id": "1", "name": "Jane", "skills": ["react"], "experience": 2}]))
    yaml_path = tmp_path / "job.yaml"
    yaml_path.write_text("id: j1\ntitle: Developer\nrequired_skills: [react]\nmin_experience: 2\n")

    (candidate,) = load_records(str(json_path), CandidateRecord)
    (job,) = load_records(str(yaml_path), JobSpec)

    assert candidate.skills == ["react"]
    assert job.min_experience == 2


def test_load_records_skips_invalid_entries(tmp_path):
    path = tmp_path / "candidates.yaml"
    path.write_text("- id: '1'\n  name: Jane\n- name: No Id\n- id: '3'\n  name: Neg\n  experience: -1\n")

    records = load_records(str(path), CandidateRecord)
    assert [r.id for r in records] == ["1"]


def test_load_records_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_records(str(tmp_path / "nope.json"), JobSpec)
