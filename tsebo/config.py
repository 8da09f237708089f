from __future__ import annotations

import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from tsebo.exceptions import ConfigurationError
from tsebo.vocabulary import DEFAULT_VOCABULARY, Vocabulary, load_vocabulary


class ParserSettings(BaseModel):
    use_hosted: bool = True
    affinda_api_url: str = "https://api.affinda.com/v3/documents"
    affinda_workspace: str = ""
    api_key_env: str = "TSEBO_AFFINDA_API_KEY"
    timeout: float = 60.0
    confidence_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    def api_key(self) -> Optional[str]:
        return os.environ.get(self.api_key_env) or None


class UploadLimits(BaseModel):
    max_bytes: int = 10 * 1024 * 1024
    allowed_suffixes: List[str] = Field(default_factory=lambda: [".pdf", ".docx"])


class ExperienceStep(BaseModel):
    # fraction of the job's minimum years the candidate must reach
    ratio: float
    points: float


class Weights(BaseModel):
    skills: float = 70.0
    experience: float = 30.0
    experience_steps: List[ExperienceStep] = Field(
        default_factory=lambda: [
            ExperienceStep(ratio=0.7, points=20.0),
            ExperienceStep(ratio=0.5, points=10.0),
        ]
    )


class Scoring(BaseModel):
    weights: Weights = Field(default_factory=Weights)


class Matching(BaseModel):
    top_n: int = Field(default=2, ge=1)


class Logging(BaseModel):
    level: str = "INFO"


class Config(BaseModel):
    version: int = 1
    parser: ParserSettings = Field(default_factory=ParserSettings)
    upload: UploadLimits = Field(default_factory=UploadLimits)
    scoring: Scoring = Field(default_factory=Scoring)
    matching: Matching = Field(default_factory=Matching)
    vocabulary_path: Optional[str] = None
    logging: Logging = Field(default_factory=Logging)

    def vocabulary(self) -> Vocabulary:
        if not self.vocabulary_path:
            return DEFAULT_VOCABULARY
        return load_vocabulary(self.vocabulary_path)


def validate_weights(weights: Weights) -> None:
    total = weights.skills + weights.experience
    if abs(total - 100.0) >= 0.01:
        raise ConfigurationError(f"Scoring weights must sum to 100 (got {total})", config_key="scoring.weights")
    for step in weights.experience_steps:
        if step.points > weights.experience:
            raise ConfigurationError(
                f"Experience step worth {step.points} exceeds the experience weight {weights.experience}",
                config_key="scoring.weights.experience_steps",
            )


def load_config(path: Optional[str] = None) -> Config:
    if not path:
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}", cause=e) from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config must be a YAML mapping: {path}")

    cfg = Config(**raw)
    validate_weights(cfg.scoring.weights)
    return cfg
