import pytest

from tsebo.extraction.confidence import FIELD_WEIGHTS, score, validate_parsed
from tsebo.models import EducationEntry, ParsedDocument


def test_weights_total_19():
    assert sum(weight for _, weight, _ in FIELD_WEIGHTS) == 19


def test_empty_document_scores_zero():
    assert score(ParsedDocument()) == 0.0


def test_partial_document():
    doc = ParsedDocument(full_name="Jane Doe", email="jane@example.com", skills={"python"})
    assert score(doc) == pytest.approx(8 / 19)


def test_field_checks():
    # short phone, short summary and malformed email earn nothing
    doc = ParsedDocument(phone="12345", profile_summary="Too short", email="jane-at-example")
    assert score(doc) == 0.0


def test_validation_of_empty_document():
    report = validate_parsed(ParsedDocument())
    assert not report.is_valid
    assert report.errors == ["Could not extract name from CV", "Could not extract email from CV"]
    assert len(report.warnings) == 4
    assert report.confidence == 0.0


def test_invalid_email_is_an_error():
    report = validate_parsed(ParsedDocument(full_name="Jane Doe", email="not-an-email"))
    assert report.errors == ["Invalid email format"]


def test_valid_document_may_still_warn():
    doc = ParsedDocument(
        full_name="Jane Doe",
        email="jane@example.com",
        education=[EducationEntry(degree="BSc", institution="UCT")],
    )
    report = validate_parsed(doc)
    assert report.is_valid
    assert "No phone number found in CV" in report.warnings
    assert "No education found in CV" not in report.warnings
