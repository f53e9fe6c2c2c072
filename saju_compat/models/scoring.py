"""
Scorer output models.

``CompatibilityResult`` bundles the numeric ``ScoringBreakdown`` with the
ordered ``TraceStep`` log.  Both are plain serializable data: reporting and
UI layers call ``model_dump()`` / ``model_dump_json()`` and render from
there.  Field names are stable.

Trace order is part of the contract: consumers render steps in sequence and
must not reorder them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from saju_compat.taxonomy.chart_taxonomy import FallbackReason
from saju_compat.taxonomy.element_taxonomy import Element


class SubScore(BaseModel):
    """One weighted sub-score.

    Attributes:
        score:            0–100, or ``None`` when its input was missing.
        weight:           Configured weight.
        effective_weight: Weight after renormalization over applied
                          sub-scores (0 when dropped).
    """

    model_config = ConfigDict(frozen=True)

    score: Optional[float] = None
    weight: float
    effective_weight: float = 0.0

    @property
    def applied(self) -> bool:
        return self.score is not None


class PenaltyBreakdown(BaseModel):
    """Fixed deductions applied after weighting."""

    model_config = ConfigDict(frozen=True)

    gishin: float = 0.0
    gushin: float = 0.0
    structure: float = 0.0
    total: float = 0.0


class ElementMatches(BaseModel):
    """How many name characters fall on each favorable/unfavorable element."""

    model_config = ConfigDict(frozen=True)

    yongshin: int = 0
    heeshin: int = 0
    gishin: int = 0
    gushin: int = 0


class TraceStep(BaseModel):
    """One explained inference step.

    Attributes:
        key:        Stable step identifier (``"balance"``, ``"penalties"`` …).
        summary:    Human-readable summary slot; left ``None`` by the core
                    and filled by narrative layers.
        evidence:   Facts the step observed.
        reasoning:  How the facts turned into the step's result.
        citations:  Rule references (e.g. ``"지장간 본기"``).
        confidence: Step confidence 0–1, when meaningful.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    summary: Optional[str] = None
    evidence: tuple[str, ...] = ()
    reasoning: tuple[str, ...] = ()
    citations: tuple[str, ...] = ()
    confidence: Optional[float] = None


class ScoringBreakdown(BaseModel):
    """Numeric result of one (chart, candidate name) evaluation.

    ``final_score = clamp(weighted_before_penalty - penalties.total, 0, 100)``.
    """

    model_config = ConfigDict(frozen=True)

    balance: SubScore
    yongshin_match: SubScore
    strength: SubScore
    ten_god: SubScore
    penalties: PenaltyBreakdown
    element_matches: ElementMatches
    chart_distribution: dict[Element, int]
    name_distribution: dict[Element, int]
    combined_distribution: dict[Element, int]
    weighted_before_penalty: float
    final_score: float = Field(ge=0.0, le=100.0)
    confidence: float = Field(ge=0.0, le=1.0)
    is_passed: bool
    fallbacks: tuple[FallbackReason, ...] = ()

    def sub_scores(self) -> dict[str, SubScore]:
        """Sub-scores by field name, in weighting order."""
        return {
            "balance": self.balance,
            "yongshin_match": self.yongshin_match,
            "strength": self.strength,
            "ten_god": self.ten_god,
        }


class CompatibilityResult(BaseModel):
    """Breakdown plus evidence trace for one candidate name."""

    model_config = ConfigDict(frozen=True)

    name: str
    breakdown: ScoringBreakdown
    trace: tuple[TraceStep, ...]

    @property
    def final_score(self) -> float:
        return self.breakdown.final_score

    def step(self, key: str) -> Optional[TraceStep]:
        """First trace step with ``key``, or ``None``."""
        return next((s for s in self.trace if s.key == key), None)
