from __future__ import annotations

from datetime import date
from typing import List, Optional, Set

from pydantic import BaseModel, Field, field_serializer

from tsebo.utils import months_between


class EmploymentEntry(BaseModel):
    company_name: str
    job_title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None  # None while current
    responsibilities: str = ""


class EducationEntry(BaseModel):
    degree: str
    institution: str = "Unknown"
    city: Optional[str] = None
    graduation_date: Optional[str] = None


class CertificationEntry(BaseModel):
    title: str
    institution: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class Project(BaseModel):
    name: str
    url: str


class Reference(BaseModel):
    name: str
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class ParsedDocument(BaseModel):
    """Structured fields pulled out of one CV. Created fresh per parse."""

    full_name: str = "Unknown"
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    nationality: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    profile_summary: str = ""
    skills: Set[str] = Field(default_factory=set)
    employment_history: List[EmploymentEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    experience_years: int = Field(default=0, ge=0)
    languages: List[str] = Field(default_factory=list)
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    @field_serializer("skills")
    def _sorted_skills(self, skills: Set[str]) -> List[str]:
        return sorted(skills)


class ExtractionResult(BaseModel):
    data: ParsedDocument
    source: str
    confidence: float
    fallback_reason: Optional[str] = None


class ValidationReport(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    confidence: float = 0.0


class MatchInput(BaseModel):
    """The four values a match score is computed from."""

    candidate_skills: Set[str] = Field(default_factory=set)
    candidate_experience_years: int = Field(default=0, ge=0)
    required_skills: Set[str] = Field(default_factory=set)
    min_experience_years: int = Field(default=0, ge=0)


class CandidateRecord(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: int = Field(default=0, ge=0)
    education: Optional[str] = None

    @classmethod
    def from_parsed(cls, record_id: str, doc: ParsedDocument) -> "CandidateRecord":
        education = None
        if doc.education:
            first = doc.education[0]
            education = f"{first.degree} - {first.institution}"
        return cls(
            id=record_id,
            name=doc.full_name,
            email=doc.email,
            phone=doc.phone,
            skills=sorted(doc.skills),
            experience=doc.experience_years,
            education=education,
        )


class JobSpec(BaseModel):
    id: str
    title: str
    company: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)
    min_experience: int = Field(default=0, ge=0)
    location: Optional[str] = None


def match_input(candidate: CandidateRecord, job: JobSpec) -> MatchInput:
    return MatchInput(
        candidate_skills=set(candidate.skills),
        candidate_experience_years=candidate.experience,
        required_skills=set(job.required_skills),
        min_experience_years=job.min_experience,
    )


class MatchResult(BaseModel):
    candidate: CandidateRecord
    job: JobSpec
    score: int
    matched_skills: List[str]
    quality: str


def estimate_experience_years(history: List[EmploymentEntry], as_of: Optional[date] = None) -> int:
    """
    Whole years worked, summed over entries that have a start date.
    Open-ended entries run until ``as_of`` (today by default).
    """
    as_of = as_of or date.today()
    total = 0
    for job in history:
        if not job.start_date:
            continue
        start = date.fromisoformat(job.start_date)
        end = date.fromisoformat(job.end_date) if job.end_date else as_of
        total += max(0, months_between(start, end))
    return int(total / 12 + 0.5)
