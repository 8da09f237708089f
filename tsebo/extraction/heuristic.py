# tsebo/extraction/heuristic.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from tsebo.config import UploadLimits
from tsebo.extraction import history, personal
from tsebo.extraction.base import Extractor
from tsebo.extraction.sections import split_sections
from tsebo.extraction.skills import extract_skills
from tsebo.models import ParsedDocument, estimate_experience_years
from tsebo.resume import decode_document
from tsebo.vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)


class TextFieldExtractor:
    """
    Best-effort structured fields from plain CV text.

    Sections are found once, then each field extractor runs independently
    against ``(text, sections)``. Missing fields fall back to their defaults;
    ``extract`` does not raise for text it cannot make sense of.
    """

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY, as_of: Optional[date] = None):
        self.vocabulary = vocabulary
        self.as_of = as_of

    def extract(self, raw_text: str) -> ParsedDocument:
        text = (raw_text or "").replace("\r\n", "\n").replace("\r", "\n")
        sections = split_sections(text)
        vocab = self.vocabulary

        employment = history.extract_employment_history(text, sections, vocab)
        doc = ParsedDocument(
            full_name=personal.extract_name(text, sections),
            email=personal.extract_email(text, sections),
            phone=personal.extract_phone(text, sections),
            address=personal.extract_address(text, sections),
            nationality=personal.extract_nationality(text, sections),
            gender=personal.extract_gender(text, sections),
            date_of_birth=personal.extract_date_of_birth(text, sections),
            profile_summary=personal.extract_profile_summary(text, sections),
            skills=extract_skills(text, sections, vocab),
            employment_history=employment,
            education=history.extract_education(text, sections, vocab),
            certifications=history.extract_certifications(text, sections),
            projects=history.extract_projects(text, sections),
            references=history.extract_references(text, sections, vocab),
            experience_years=estimate_experience_years(employment, self.as_of),
        )

        logger.debug(
            "CV parsing complete: name=%s email=%s phone=%s skills=%d employment=%d "
            "education=%d certifications=%d projects=%d references=%d sections=%s",
            doc.full_name != "Unknown",
            bool(doc.email),
            bool(doc.phone),
            len(doc.skills),
            len(doc.employment_history),
            len(doc.education),
            len(doc.certifications),
            len(doc.projects),
            len(doc.references),
            sorted(sections),
        )
        return doc


def extract(raw_text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> ParsedDocument:
    return TextFieldExtractor(vocabulary).extract(raw_text)


class LocalExtractor(Extractor):
    """Decode the file locally, then run the text heuristics."""

    name = "local"

    def __init__(
        self,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        limits: Optional[UploadLimits] = None,
    ):
        self.fields = TextFieldExtractor(vocabulary)
        self.limits = limits

    def parse(self, content: bytes, filename: str) -> ParsedDocument:
        text = decode_document(content, filename, self.limits)
        return self.fields.extract(text)
