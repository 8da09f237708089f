# tsebo/extraction/affinda.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from tsebo.config import ParserSettings, UploadLimits
from tsebo.exceptions import ConfigurationError, ParserServiceError
from tsebo.extraction.base import Extractor
from tsebo.models import (
    CertificationEntry,
    EducationEntry,
    EmploymentEntry,
    ParsedDocument,
    Project,
    Reference,
    estimate_experience_years,
)
from tsebo.resume import check_upload
from tsebo.utils import normalize_date

logger = logging.getLogger(__name__)

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
_SOCIAL_HOSTS = ("facebook.com", "twitter.com", "instagram.com")
_PORTFOLIO_HINTS = ("github", "portfolio", "behance")


def _safe_str(x: Any) -> str:
    return x.strip() if isinstance(x, str) else ""


def _as_list(x: Any) -> List[Any]:
    return x if isinstance(x, list) else []


def _as_dict(x: Any) -> Dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _date(x: Any) -> Optional[str]:
    # Affinda sends ISO dates, sometimes only year-month
    return normalize_date(_safe_str(x), partial=True)


def _is_linkedin(url: str) -> bool:
    return "linkedin.com" in url.lower()


def _is_generic(url: str) -> bool:
    u = url.lower()
    return u.startswith("mailto:") or u.startswith("tel:") or any(h in u for h in _SOCIAL_HOSTS)


def _name(data: Dict[str, Any]) -> str:
    name = data.get("name")
    if isinstance(name, dict):
        if _safe_str(name.get("raw")):
            return _safe_str(name["raw"])
        first, last = _safe_str(name.get("first")), _safe_str(name.get("last"))
        if first and last:
            return f"{first} {last}"
    return "Unknown"


def _address(data: Dict[str, Any]) -> Optional[str]:
    location = data.get("location")
    if isinstance(location, dict):
        return _safe_str(location.get("formatted")) or _safe_str(location.get("rawInput")) or None
    return None


def _skills(data: Dict[str, Any]) -> set:
    skills = set()
    for skill in _as_list(data.get("skills")):
        if isinstance(skill, dict) and _safe_str(skill.get("name")):
            skills.add(skill["name"].strip().lower())
        elif isinstance(skill, str) and skill.strip():
            skills.add(skill.strip().lower())
    return skills


def _employment(data: Dict[str, Any]) -> List[EmploymentEntry]:
    out = []
    for job in _as_list(data.get("workExperience")):
        if not isinstance(job, dict):
            continue
        dates = _as_dict(job.get("dates"))
        out.append(
            EmploymentEntry(
                company_name=_safe_str(job.get("organization")) or "Unknown",
                job_title=_safe_str(job.get("jobTitle")) or _safe_str(job.get("occupation")),
                start_date=_date(dates.get("startDate")),
                end_date=_date(dates.get("endDate")),
                responsibilities=_safe_str(job.get("jobDescription")),
            )
        )
    return out


def _education(data: Dict[str, Any]) -> List[EducationEntry]:
    out = []
    for edu in _as_list(data.get("education")):
        if not isinstance(edu, dict):
            continue
        accreditation = _as_dict(edu.get("accreditation"))
        dates = _as_dict(edu.get("dates"))
        location = _as_dict(edu.get("location"))
        out.append(
            EducationEntry(
                degree=_safe_str(accreditation.get("education")) or _safe_str(accreditation.get("inputStr")),
                institution=_safe_str(edu.get("organization")) or "Unknown",
                city=_safe_str(location.get("city")) or None,
                graduation_date=_date(dates.get("completionDate") or dates.get("endDate")),
            )
        )
    return out


def _certifications(data: Dict[str, Any]) -> List[CertificationEntry]:
    out = []
    for cert in _as_list(data.get("certifications")):
        if isinstance(cert, str):
            cert = {"name": cert}
        if not isinstance(cert, dict) or not _safe_str(cert.get("name")):
            continue
        out.append(
            CertificationEntry(
                title=_safe_str(cert.get("name")),
                institution=_safe_str(cert.get("organization")) or None,
                start_date=_date(cert.get("date")),
            )
        )
    return out


def _websites(data: Dict[str, Any]) -> List[str]:
    urls = []
    for site in _as_list(data.get("websites")):
        url = _safe_str(site.get("url")) if isinstance(site, dict) else _safe_str(site)
        if url:
            urls.append(url)
    return urls


def _projects(urls: List[str]) -> List[Project]:
    return [
        Project(name=url.rstrip("/").split("/")[-1] or "Project", url=url)
        for url in urls
        if not _is_linkedin(url) and not _is_generic(url)
    ]


def _references(data: Dict[str, Any]) -> List[Reference]:
    out = []
    for ref in _as_list(data.get("referees")):
        if not isinstance(ref, dict) or not _safe_str(ref.get("name")):
            continue
        out.append(
            Reference(
                name=_safe_str(ref.get("name")),
                company=_safe_str(ref.get("company")) or None,
                phone=_safe_str(ref.get("phone")) or None,
                email=_safe_str(ref.get("email")) or None,
            )
        )
    return out


def _languages(data: Dict[str, Any]) -> List[str]:
    out = []
    for lang in _as_list(data.get("languages")):
        name = _safe_str(lang.get("name")) if isinstance(lang, dict) else _safe_str(lang)
        if name:
            out.append(name)
    return out


def map_affinda_response(payload: Any) -> ParsedDocument:
    """Map an Affinda v3 resume document onto a ParsedDocument."""
    payload = _as_dict(payload)
    data = _as_dict(payload.get("data")) or payload
    emails = [e for e in _as_list(data.get("emails")) if _safe_str(e)]
    phones = [p for p in _as_list(data.get("phoneNumbers")) if _safe_str(p)]
    urls = _websites(data)
    employment = _employment(data)

    years = data.get("totalYearsExperience")
    if not isinstance(years, (int, float)) or years < 0:
        years = estimate_experience_years(employment)

    linkedin = next((u for u in urls if _is_linkedin(u)), None) or _safe_str(data.get("linkedin")) or None
    portfolio = next(
        (u for u in urls if not _is_linkedin(u) and any(h in u.lower() for h in _PORTFOLIO_HINTS)),
        None,
    )

    return ParsedDocument(
        full_name=_name(data),
        email=emails[0].strip().lower() if emails else None,
        phone=phones[0].strip() if phones else None,
        address=_address(data),
        nationality=_safe_str(data.get("nationality")) or None,
        gender=_safe_str(data.get("gender")) or None,
        date_of_birth=normalize_date(_safe_str(data.get("dateOfBirth"))),
        profile_summary=_safe_str(data.get("summary")) or _safe_str(data.get("objective")),
        skills=_skills(data),
        employment_history=employment,
        experience_years=int(round(years)),
        education=_education(data),
        certifications=_certifications(data),
        projects=_projects(urls),
        references=_references(data),
        languages=_languages(data),
        linkedin_url=linkedin,
        portfolio_url=portfolio,
    )


class AffindaExtractor(Extractor):
    """
    Hosted resume parsing:
      POST https://api.affinda.com/v3/documents  (multipart, wait=true)
    """

    name = "affinda"

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        limits: Optional[UploadLimits] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or ParserSettings()
        self.limits = limits
        self.session = session or requests.Session()

    def parse(self, content: bytes, filename: str) -> ParsedDocument:
        suffix = check_upload(content, filename, self.limits)

        api_key = self.settings.api_key()
        if not api_key:
            raise ConfigurationError(
                f"Affinda API key missing (set {self.settings.api_key_env})",
                config_key="parser.api_key_env",
            )

        form = {"identifier": filename, "wait": "true"}
        if self.settings.affinda_workspace:
            form["workspace"] = self.settings.affinda_workspace

        logger.info(f"Sending {filename} ({len(content) / 1024:.2f} KB) to Affinda")
        try:
            response = self.session.post(
                self.settings.affinda_api_url,
                headers={"Authorization": f"Bearer {api_key}", "Accept": "application/json"},
                data=form,
                files={"file": (filename, content, _CONTENT_TYPES[suffix])},
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Affinda request failed: {e}")
            raise ParserServiceError(f"Affinda request failed: {e}", cause=e) from e

        if not response.ok:
            logger.error(f"Affinda API error {response.status_code}: {response.text[:500]}")
            raise ParserServiceError(
                f"Affinda API failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ParserServiceError("Affinda returned a non-JSON body", cause=e) from e

        try:
            doc = map_affinda_response(payload)
        except (AttributeError, TypeError, ValueError, OverflowError, ValidationError) as e:
            logger.error(f"Unexpected Affinda payload for {filename}: {e}")
            raise ParserServiceError("Affinda returned an unexpected payload", cause=e) from e

        logger.info("Affinda parsing successful")
        return doc
