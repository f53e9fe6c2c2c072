"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``SAJU_COMPAT_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The scorer receives a ``ScoringConfig`` (``AppConfig.scoring``) — weights,
penalty rates and affinities are never hard-coded in scoring functions.
``ScoringConfig()`` with no arguments reproduces ``config/default.toml``.
"""

from __future__ import annotations

import math
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class WeightsConfig(BaseModel):
    """Fixed sub-score weights.  Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    balance: float = 0.35
    yongshin_match: float = 0.35
    strength: float = 0.15
    ten_god: float = 0.15

    @model_validator(mode="after")
    def validate_sum(self) -> "WeightsConfig":
        values = self.as_dict()
        for key, val in values.items():
            if val < 0:
                raise ValueError(f"Weight '{key}' must be >= 0, got {val}.")
        total = sum(values.values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}.")
        return self

    def as_dict(self) -> dict[str, float]:
        return {
            "balance": self.balance,
            "yongshin_match": self.yongshin_match,
            "strength": self.strength,
            "ten_god": self.ten_god,
        }


class PenaltyConfig(BaseModel):
    """Fixed deductions per name character, in score points."""

    model_config = ConfigDict(frozen=True)

    gishin_per_char: float = 6.0
    gushin_per_char: float = 10.0
    structure_per_char: float = 4.0

    @field_validator("gishin_per_char", "gushin_per_char", "structure_per_char")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"Penalty rates must be >= 0, got {v}.")
        return v


class AffinityConfig(BaseModel):
    """Per-character affinity used by the yongshin-match sub-score.

    Favorable values must be positive, unfavorable ones negative, and the
    yongshin affinity must be the maximum so that adding a yongshin
    character never lowers the sub-score.
    """

    model_config = ConfigDict(frozen=True)

    yongshin: float = 1.0
    heeshin: float = 0.5
    yongshin_generator: float = 0.3
    gishin: float = -0.6
    gushin: float = -1.0

    @model_validator(mode="after")
    def validate_ordering(self) -> "AffinityConfig":
        if not 0 < self.yongshin <= 1.0:
            raise ValueError(f"yongshin affinity must be in (0, 1], got {self.yongshin}.")
        if not (self.yongshin >= self.heeshin >= 0 and self.yongshin >= self.yongshin_generator >= 0):
            raise ValueError("heeshin and yongshin_generator must be in [0, yongshin].")
        if not (-1.0 <= self.gushin <= 0 and -1.0 <= self.gishin <= 0):
            raise ValueError("gishin and gushin affinities must be in [-1, 0].")
        return self


class ScoringConfig(BaseModel):
    """Everything the compatibility scorer reads."""

    model_config = ConfigDict(frozen=True)

    weights: WeightsConfig = WeightsConfig()
    penalties: PenaltyConfig = PenaltyConfig()
    affinity: AffinityConfig = AffinityConfig()
    pass_threshold: float = 70.0
    structure_confidence_threshold: float = 0.7

    @field_validator("pass_threshold")
    @classmethod
    def validate_pass_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"pass_threshold must be in [0, 100], got {v}.")
        return v

    @field_validator("structure_confidence_threshold")
    @classmethod
    def validate_structure_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"structure_confidence_threshold must be in [0, 1], got {v}.")
        return v


class RankingConfig(BaseModel):
    """Batch scoring defaults for the ``rank`` command."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 10
    max_candidates: Optional[int] = None

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_n must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    CLI commands receive an ``AppConfig`` instance constructed by
    ``load_config()``, which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    scoring: ScoringConfig = ScoringConfig()
    ranking: RankingConfig = RankingConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply SAJU_COMPAT_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply SAJU_COMPAT_* env vars to the raw config dict.

    Supported overrides:
      SAJU_COMPAT_LOG_LEVEL       → raw["logging"]["level"]
      SAJU_COMPAT_PASS_THRESHOLD  → raw["scoring"]["pass_threshold"]
      SAJU_COMPAT_DEBUG           → raw["debug"]
    """
    if log_level := os.environ.get("SAJU_COMPAT_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if threshold := os.environ.get("SAJU_COMPAT_PASS_THRESHOLD"):
        raw.setdefault("scoring", {})["pass_threshold"] = float(threshold)

    if debug := os.environ.get("SAJU_COMPAT_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})
    scoring = dict(raw.get("scoring", {}))

    return AppConfig(
        scoring=ScoringConfig(
            weights=WeightsConfig(**scoring.pop("weights", {})),
            penalties=PenaltyConfig(**scoring.pop("penalties", {})),
            affinity=AffinityConfig(**scoring.pop("affinity", {})),
            **scoring,
        ),
        ranking=RankingConfig(**raw.get("ranking", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
