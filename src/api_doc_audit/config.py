"""Scoring weights and thresholds, optionally overridden from a YAML file.

Defaults reproduce the long-standing scoring contract. A config file only
needs the keys it changes, e.g.::

    scoring:
      suggestion_penalty: 0.5
    coverage:
      good_threshold: 90
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

CONFIG_ENVVAR = "API_DOC_AUDIT_CONFIG"


class ConfigError(ValueError):
    """Raised when a config file cannot be read or has invalid values."""


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ScoringConfig(_StrictModel):
    """Weights for the specification completeness score."""

    issue_penalty: float = Field(default=5, ge=0)
    suggestion_penalty: float = Field(default=1, ge=0)
    description_bonus: float = Field(default=5, ge=0)
    description_bonus_min_length: int = Field(default=50, ge=0)
    tags_bonus: float = Field(default=3, ge=0)
    external_docs_bonus: float = Field(default=2, ge=0)
    description_coverage_threshold: float = Field(default=80, ge=0, le=100)
    example_coverage_threshold: float = Field(default=50, ge=0, le=100)
    excellent_threshold: float = Field(default=90, ge=0, le=100)
    good_threshold: float = Field(default=70, ge=0, le=100)
    fair_threshold: float = Field(default=50, ge=0, le=100)

    @model_validator(mode="after")
    def check_rating_order(self) -> "ScoringConfig":
        if not self.excellent_threshold >= self.good_threshold >= self.fair_threshold:
            raise ValueError("rating thresholds must satisfy excellent >= good >= fair")
        return self


class CoverageConfig(_StrictModel):
    """Cutoffs for the test coverage summary."""

    good_threshold: float = Field(default=80, ge=0, le=100)
    fair_threshold: float = Field(default=60, ge=0, le=100)
    low_file_threshold: float = Field(default=50, ge=0, le=100)

    @model_validator(mode="after")
    def check_rating_order(self) -> "CoverageConfig":
        if self.good_threshold < self.fair_threshold:
            raise ValueError("good_threshold must not be below fair_threshold")
        return self


class AuditConfig(_StrictModel):
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)


def load_config(path: Path | None = None) -> AuditConfig:
    """Load an AuditConfig from a YAML file, or return the defaults."""
    if path is None:
        return AuditConfig()

    logger.debug("Loading config from %s", path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e

    if data is None:
        return AuditConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")

    try:
        return AuditConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e
