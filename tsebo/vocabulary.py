# tsebo/vocabulary.py
"""
Fixed word lists the CV heuristics match against.

A ``Vocabulary`` is frozen; deployments that need other terms load a YAML
override with ``load_vocabulary`` and pass the result to the extractor.
"""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import yaml
from pydantic import BaseModel, ConfigDict

from tsebo.exceptions import ConfigurationError


SKILLS: Tuple[str, ...] = (
    # Frontend
    "reactjs", "react", "vuejs", "vue", "angular", "angularjs", "svelte", "nextjs", "nuxtjs",
    "javascript", "typescript", "html", "html5", "css", "css3", "sass", "scss", "less",
    "tailwindcss", "tailwind", "bootstrap", "material-ui", "mui", "chakra ui",
    "webpack", "vite", "parcel", "rollup", "babel",
    # Backend
    "nodejs", "node.js", "express", "expressjs", "nestjs", "fastify", "koa",
    "python", "django", "flask", "fastapi", "java", "spring", "spring boot",
    "c#", ".net", "asp.net", ".net core", "php", "laravel", "symfony", "codeigniter",
    "ruby", "ruby on rails", "rails", "go", "golang", "rust", "elixir", "phoenix",
    # Mobile
    "flutter", "react native", "swift", "kotlin", "android", "ios", "xamarin",
    # Databases
    "sql", "mysql", "postgresql", "postgres", "mongodb", "redis", "elasticsearch",
    "cassandra", "dynamodb", "firebase", "firestore", "sqlite", "oracle", "mssql",
    "mariadb", "couchdb", "neo4j",
    # Cloud & DevOps
    "aws", "amazon web services", "azure", "microsoft azure", "gcp", "google cloud",
    "docker", "kubernetes", "k8s", "jenkins", "gitlab ci", "github actions", "circleci",
    "terraform", "ansible", "chef", "puppet", "vagrant", "nginx", "apache",
    # Tools & platforms
    "git", "github", "gitlab", "bitbucket", "jira", "confluence", "slack", "trello",
    "figma", "sketch", "adobe xd", "photoshop", "illustrator", "invision",
    # Architecture
    "rest api", "restful", "graphql", "grpc", "microservices", "serverless",
    "mvc", "mvvm", "clean architecture", "domain-driven design", "ddd",
    # Testing
    "jest", "mocha", "chai", "jasmine", "pytest", "junit", "selenium", "cypress",
    "playwright", "testing library", "enzyme",
    # Data & AI
    "machine learning", "ml", "ai", "artificial intelligence", "data science",
    "tensorflow", "pytorch", "keras", "scikit-learn", "pandas", "numpy",
    "data analysis", "data visualization", "power bi", "tableau", "looker",
    # Methodologies
    "agile", "scrum", "kanban", "waterfall", "devops", "ci/cd", "tdd", "bdd",
    # Other
    "linux", "unix", "windows", "macos", "bash", "powershell", "vim", "vscode",
    "excel", "word", "powerpoint", "sap", "salesforce", "crm", "erp",
)

INSTITUTIONS: Tuple[str, ...] = (
    "North-West University", "NWU",
    "UCT", "University of Cape Town",
    "Wits", "University of the Witwatersrand",
    "Stellenbosch", "University of Stellenbosch",
    "UP", "University of Pretoria",
    "UJ", "University of Johannesburg",
    "UNISA", "University of South Africa",
    "Rhodes University", "UFS", "University of the Free State",
    "UKZN", "University of KwaZulu-Natal",
    "Walter Sisulu University", "WSU",
    "Tshwane University of Technology", "TUT",
    "Cape Peninsula University of Technology", "CPUT",
    "Durban University of Technology", "DUT",
    "Vaal University of Technology", "VUT",
)

STOP_WORDS: Tuple[str, ...] = (
    "skilled", "experienced", "proficient", "knowledge", "experience", "skills",
    "and", "or", "the", "with", "in",
)

TITLE_PATTERNS: Tuple[str, ...] = (
    r"\b(?:(?:senior|junior|lead|principal|intermediate|associate)\s+)?"
    r"(?:(?:software|web|mobile|frontend|front-end|backend|back-end|full[\s-]?stack)\s+)?"
    r"(?:developer|engineer|programmer|architect)s?\b",
    r"\b(?:project|product|program|technical|engineering)\s+(?:manager|lead|director)\b",
    r"\b(?:data|business|systems?)\s+analyst\b",
    r"\b(?:ui|ux|graphic|web)\s+designer\b",
    r"\b(?:devops|system|network|security)\s+engineer\b",
    r"\b(?:qa|quality\s+assurance)\s+(?:engineer|analyst|tester)\b",
    r"\b(?:scrum\s+master|agile\s+coach|product\s+owner)\b",
)

DEGREE_PATTERNS: Tuple[str, ...] = (
    r"\b(?:bachelor(?:'?s)?|b\.?sc|b\.?a|b\.?eng|b\.?tech|b\.?com)\b\.?(?:\s*(?:in|of)\s+[\w\s&]+|[\w\s&]*)",
    r"\b(?:master(?:'?s)?|m\.?sc|m\.?a|m\.?eng|m\.?tech|mba|m\.?com)\b\.?(?:\s*(?:in|of)\s+[\w\s&]+|[\w\s&]*)",
    r"\b(?:phd|ph\.d|doctorate)\b\.?(?:\s*(?:in|of)\s+[\w\s&]+|[\w\s&]*)",
    r"\b(?:diploma|certificate|associate)\b(?:\s*(?:in|of)\s+[\w\s&]+|[\w\s&]*)",
)

ORGANISATION_MARKERS: Tuple[str, ...] = (
    "ltd", "pty", "inc", "corp", "corporation", "company", "group", "holdings",
    "bank", "solutions", "technologies", "consulting", "university", "college",
    "school", "department", "agency", "limited", "llc",
)


class Vocabulary(BaseModel):
    model_config = ConfigDict(frozen=True)

    skills: Tuple[str, ...] = SKILLS
    institutions: Tuple[str, ...] = INSTITUTIONS
    stop_words: Tuple[str, ...] = STOP_WORDS
    title_patterns: Tuple[str, ...] = TITLE_PATTERNS
    degree_patterns: Tuple[str, ...] = DEGREE_PATTERNS
    organisation_markers: Tuple[str, ...] = ORGANISATION_MARKERS


DEFAULT_VOCABULARY = Vocabulary()


def load_vocabulary(path: str, base: Vocabulary = DEFAULT_VOCABULARY) -> Vocabulary:
    """
    Read a YAML mapping of list overrides, e.g.

        skills: [sap abap, sap hana]
        extend: true

    With ``extend: true`` the lists are appended to ``base`` instead of
    replacing it.
    """
    p = Path(path).expanduser()
    if not p.exists():
        raise ConfigurationError(f"Vocabulary file not found: {p}", config_key="vocabulary_path")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Vocabulary must be a YAML mapping: {p}", config_key="vocabulary_path")

    extend = bool(raw.pop("extend", False))
    unknown = set(raw) - set(Vocabulary.model_fields)
    if unknown:
        raise ConfigurationError(
            f"Unknown vocabulary keys: {', '.join(sorted(unknown))}", config_key="vocabulary_path"
        )

    updates = {}
    for key, values in raw.items():
        items = tuple(str(v) for v in (values or []))
        updates[key] = getattr(base, key) + items if extend else items
    return base.model_copy(update=updates)
