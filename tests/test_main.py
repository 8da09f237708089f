import csv
import json

import pytest
from docx import Document

from tsebo.config import Config
from tsebo.exceptions import ExtractionFailed
from tsebo.extraction import AffindaExtractor, LocalExtractor
from tsebo.main import build_extractors, run_match, run_parse


def test_build_extractors():
    assert [type(e) for e in build_extractors(Config())] == [AffindaExtractor, LocalExtractor]
    assert [type(e) for e in build_extractors(Config(parser={"use_hosted": False}))] == [LocalExtractor]


def test_run_match_writes_json_and_csv(tmp_path, capsys):
    job = tmp_path / "job.yaml"
    job.write_text("id: j1\ntitle: Developer\nrequired_skills: [react, node, aws]\nmin_experience: 5\n")
    candidates = tmp_path / "candidates.yaml"
    candidates.write_text(
        "- {id: '1', name: Jane, skills: [React, Node], experience: 5}\n"
        "- {id: '2', name: Sipho, skills: [Python], experience: 1}\n"
        "- {id: '3', name: Lerato, skills: [React, Node, AWS], experience: 7}\n"
    )
    out = tmp_path / "results"

    results = run_match(str(job), str(candidates), str(out))

    assert [r.candidate.id for r in results] == ["3", "1"]
    data = json.loads((out / "results.json").read_text())
    assert data[0]["score"] == 100
    with (out / "results.csv").open() as f:
        rows = list(csv.DictReader(f))
    assert rows[1]["candidate_name"] == "Jane"
    assert rows[1]["matched_skills"] == "React, Node"
    assert "Wrote 2 matches" in capsys.readouterr().out


def test_run_parse_uses_local_fallback(tmp_path, monkeypatch):
    monkeypatch.delenv("TSEBO_AFFINDA_API_KEY", raising=False)
    cv = tmp_path / "cv.docx"
    doc = Document()
    for line in ["Jane Doe", "Email: jane@example.com", "Phone: 082 123 4567", "Skills", "Python, Docker"]:
        doc.add_paragraph(line)
    doc.save(str(cv))
    out = tmp_path / "parsed.json"

    result = run_parse(str(cv), str(out))

    assert result.source == "local"
    assert "API key missing" in result.fallback_reason
    data = json.loads(out.read_text())
    assert data["data"]["full_name"] == "Jane Doe"
    assert data["data"]["skills"] == ["docker", "python"]


def test_run_parse_unreadable_file(tmp_path, monkeypatch):
    monkeypatch.delenv("TSEBO_AFFINDA_API_KEY", raising=False)
    cv = tmp_path / "cv.pdf"
    cv.write_bytes(b"not a pdf")

    with pytest.raises(ExtractionFailed):
        run_parse(str(cv))


def test_run_match_explicit_top_n_zero(tmp_path):
    job = tmp_path / "job.yaml"
    job.write_text("id: j1\ntitle: Developer\nrequired_skills: [react]\nmin_experience: 1\n")
    candidates = tmp_path / "candidates.yaml"
    candidates.write_text("- {id: '1', name: Jane, skills: [React], experience: 2}\n")

    assert run_match(str(job), str(candidates), str(tmp_path / "out"), top_n=0) == []
    assert run_match(str(job), str(candidates), str(tmp_path / "out"))[0].candidate.id == "1"
