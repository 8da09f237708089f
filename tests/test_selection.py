from unittest import mock

import pytest

from tsebo.exceptions import ExtractionFailed, ParserServiceError
from tsebo.extraction import AffindaExtractor, Extractor, choose_result, parse_with_fallback
from tsebo.models import EmploymentEntry, ExtractionResult, ParsedDocument

# 19/19
COMPLETE = ParsedDocument(
    full_name="Jane Doe",
    email="jane@example.com",
    phone="082 123 4567",
    address="Cape Town",
    profile_summary="Engineer with a long history of shipping backend services for banks.",
    skills={"python"},
    employment_history=[EmploymentEntry(company_name="Acme", job_title="Developer")],
    education=[{"degree": "BSc", "institution": "UCT"}],
    certifications=[{"title": "AWS Developer"}],
)
# 6/19
THIN = ParsedDocument(full_name="Jane Doe", email="jane@example.com")
# 3/19
THINNER = ParsedDocument(full_name="Jane Doe")


class FakeExtractor(Extractor):
    def __init__(self, name, doc=None, error=None):
        self.name = name
        self.doc = doc
        self.error = error
        self.calls = 0

    def parse(self, content, filename):
        self.calls += 1
        if self.error:
            raise self.error
        return self.doc


def test_confident_first_extractor_wins():
    hosted = FakeExtractor("affinda", COMPLETE)
    local = FakeExtractor("local", THIN)

    result = parse_with_fallback(b"...", "cv.pdf", [hosted, local])

    assert result.source == "affinda"
    assert result.confidence == pytest.approx(1.0)
    assert result.fallback_reason is None
    assert local.calls == 0


def test_low_confidence_falls_back():
    hosted = FakeExtractor("affinda", THIN)
    local = FakeExtractor("local", COMPLETE)

    result = parse_with_fallback(b"...", "cv.pdf", [hosted, local])

    assert result.source == "local"
    assert "Low confidence" in result.fallback_reason
    assert result.fallback_reason.startswith("affinda:")


def test_service_error_falls_back():
    hosted = FakeExtractor("affinda", error=ParserServiceError("Affinda API failed: 500", status_code=500))
    local = FakeExtractor("local", COMPLETE)

    result = parse_with_fallback(b"...", "cv.pdf", [hosted, local])

    assert result.source == "local"
    assert "Affinda API failed" in result.fallback_reason


def test_best_of_low_confidence_results():
    result = parse_with_fallback(b"...", "cv.pdf", [FakeExtractor("affinda", THINNER), FakeExtractor("local", THIN)])

    assert result.source == "local"
    assert result.confidence == pytest.approx(6 / 19)
    assert result.fallback_reason.count("Low confidence") == 2


def test_every_extractor_failing():
    failing = [
        FakeExtractor("affinda", error=ParserServiceError("timeout")),
        FakeExtractor("local", error=ParserServiceError("boom")),
    ]
    with pytest.raises(ExtractionFailed) as exc:
        parse_with_fallback(b"...", "cv.pdf", failing)

    assert len(exc.value.details["reasons"]) == 2
    assert exc.value.to_dict()["error_code"] == "EXTRACTION_FAILED"


def test_threshold_is_configurable():
    result = parse_with_fallback(b"...", "cv.pdf", [FakeExtractor("affinda", THIN), FakeExtractor("local", COMPLETE)], threshold=0.3)
    assert result.source == "affinda"


def test_choose_result():
    low = ExtractionResult(data=THIN, source="a", confidence=0.3)
    ok = ExtractionResult(data=THIN, source="b", confidence=0.6)
    best = ExtractionResult(data=THIN, source="c", confidence=0.9)

    assert choose_result([]) is None
    assert choose_result([low, ok, best]).source == "b"
    assert choose_result([low, ExtractionResult(data=THIN, source="d", confidence=0.4)]).source == "d"
    assert choose_result([ok], threshold=0.7).source == "b"


@pytest.mark.parametrize(
    "payload",
    [
        [{"data": {}}],
        {"data": {"workExperience": [{"organization": "Acme", "dates": "2019"}]}},
        {"data": {"totalYearsExperience": float("inf")}},
    ],
)
def test_malformed_hosted_payload_falls_back_to_local(monkeypatch, payload):
    monkeypatch.setenv("TSEBO_AFFINDA_API_KEY", "test-key")
    response = mock.Mock(ok=True, status_code=200)
    response.json.return_value = payload
    session = mock.Mock()
    session.post.return_value = response
    local = FakeExtractor("local", COMPLETE)

    result = parse_with_fallback(b"%PDF-1.4", "cv.pdf", [AffindaExtractor(session=session), local])

    assert result.source == "local"
    assert result.fallback_reason.startswith("affinda:")
    assert local.calls == 1
