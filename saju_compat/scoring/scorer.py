"""
Compatibility scorer: one birth chart + one candidate name → score + trace.

Score formula
-------------
    weighted_before_penalty = Σ score_i · w_i / Σ w_i      (applied sub-scores)
    final_score             = clamp(weighted_before_penalty − penalties.total, 0, 100)

Default weights (``ScoringConfig.weights``, must sum to 1.0):
    balance 0.35 · yongshin_match 0.35 · strength 0.15 · ten_god 0.15

Incomplete input
----------------
``balance`` needs only the chart and the name and is always applied.  The
other three sub-scores need an upstream input each (yongshin, strength
level, ten-god profile).  When one is missing its sub-score is dropped,
the remaining weights are renormalized, ``confidence`` falls to the sum of
the applied weights, and a ``fallback`` trace step names what was missing.
Nothing is raised for a missing optional input.

Trace order
-----------
    distribution → chart_signals → balance → yongshin_match → strength_role
    → ten_god_role → penalties → [fallback] → final

Every evaluation is independent and deterministic: identical inputs give an
identical ``CompatibilityResult``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from saju_compat.analysis.relations import find_relations, tuchul
from saju_compat.analysis.roots import chart_roots, root_ratio
from saju_compat.config import ScoringConfig
from saju_compat.errors import StructuralViolationError
from saju_compat.models.chart import BirthChart
from saju_compat.models.inputs import CandidateName, ChartContext, NameCharacter
from saju_compat.models.scoring import CompatibilityResult, ScoringBreakdown, SubScore
from saju_compat.scoring.components import (
    ComponentResult,
    balance_score,
    compute_penalties,
    element_matches,
    has_ten_god_signal,
    strength_score,
    structure_violations,
    ten_god_score,
    yongshin_match_score,
)
from saju_compat.scoring.elements import (
    chart_distribution,
    combine_distributions,
    format_distribution,
    name_distribution,
)
from saju_compat.scoring.trace import TraceRecorder
from saju_compat.tables.climate import climate_need
from saju_compat.tables.cycles import stem_element
from saju_compat.taxonomy.chart_taxonomy import FallbackReason
from saju_compat.utils.logging import EvaluationLogAdapter

logger = logging.getLogger(__name__)

NameInput = Union[CandidateName, Sequence[NameCharacter]]


def _as_candidate(name: NameInput) -> CandidateName:
    if isinstance(name, CandidateName):
        return name
    return CandidateName(characters=tuple(name))


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def evaluate_name(
    chart: BirthChart,
    context: Optional[ChartContext],
    name: NameInput,
    config: Optional[ScoringConfig] = None,
) -> CompatibilityResult:
    """Score one candidate name against one birth chart.

    Args:
        chart:   The four resolved pillars.
        context: Upstream judgments; any part may be ``None``.
        name:    Candidate name (or its characters), at least one character.
        config:  Scoring configuration; defaults to ``ScoringConfig()``.

    Returns:
        ``CompatibilityResult`` with the breakdown and the ordered trace.

    Raises:
        StructuralViolationError: If the name has zero characters.
    """
    candidate = _as_candidate(name)
    if not candidate.characters:
        raise StructuralViolationError("candidate name has zero characters.")

    cfg = config or ScoringConfig()
    ctx = context or ChartContext()
    trace = TraceRecorder()

    day_master = chart.day_master
    dm_element = stem_element(day_master)
    elements = candidate.elements

    # ── 1. Distribution ───────────────────────────────────────────────────────
    chart_counts = chart_distribution(chart)
    name_counts = name_distribution(elements)
    combined = combine_distributions(chart_counts, name_counts)
    trace.add(
        "distribution",
        evidence=[
            f"chart {chart.label()}",
            f"chart elements: {format_distribution(chart_counts)}",
            f"name {candidate.text}: {format_distribution(name_counts)}",
            f"combined: {format_distribution(combined)}",
        ],
        reasoning=[
            f"{sum(chart_counts.values())} chart counts (stem + branch per pillar)"
            f" + {len(elements)} name counts",
        ],
        citations=["오행 분포"],
    )

    # ── 2. Chart signals ──────────────────────────────────────────────────────
    ratio = _record_chart_signals(trace, chart, elements)

    # ── 3. Balance ────────────────────────────────────────────────────────────
    balance = balance_score(chart_counts, combined, len(elements))
    trace.add("balance", balance.evidence, balance.reasoning, ["오행 균형"])

    # ── 4. Yongshin match ─────────────────────────────────────────────────────
    fallbacks: list[FallbackReason] = []
    favorable = ctx.favorable
    yongshin: Optional[ComponentResult] = None
    if favorable is not None and favorable.yongshin is not None:
        yongshin = yongshin_match_score(elements, favorable, cfg.affinity)
        trace.add(
            "yongshin_match", yongshin.evidence, yongshin.reasoning, ["용신", "희신"],
            confidence=favorable.confidence,
        )
    else:
        fallbacks.append(FallbackReason.MISSING_FAVORABLE_ELEMENT)
        trace.add("yongshin_match", reasoning=["skipped: no yongshin resolved upstream"])

    # ── 5. Strength role ──────────────────────────────────────────────────────
    strength: Optional[ComponentResult] = None
    if ctx.strength is not None:
        strength = strength_score(elements, dm_element, ctx.strength, ratio)
        trace.add("strength_role", strength.evidence, strength.reasoning, ["신강신약"])
    else:
        fallbacks.append(FallbackReason.MISSING_STRENGTH_LEVEL)
        trace.add("strength_role", reasoning=["skipped: no strength level resolved upstream"])

    # ── 6. Ten-god role ───────────────────────────────────────────────────────
    ten_god: Optional[ComponentResult] = None
    if ctx.ten_god is not None and has_ten_god_signal(ctx.ten_god):
        ten_god = ten_god_score(elements, dm_element, ctx.ten_god)
        trace.add("ten_god_role", ten_god.evidence, ten_god.reasoning, ["십성"])
    else:
        fallbacks.append(FallbackReason.MISSING_TEN_GOD_PROFILE)
        trace.add("ten_god_role", reasoning=["skipped: no ten-god profile resolved upstream"])

    # ── Weighting ─────────────────────────────────────────────────────────────
    weights = cfg.weights.as_dict()
    results: dict[str, Optional[ComponentResult]] = {
        "balance": balance,
        "yongshin_match": yongshin,
        "strength": strength,
        "ten_god": ten_god,
    }
    applied = {k: r.score for k, r in results.items() if r is not None}
    applied_weight = sum(weights[k] for k in applied)
    if applied_weight > 0:
        weighted = sum(score * weights[k] for k, score in applied.items()) / applied_weight
    else:
        weighted = sum(applied.values()) / len(applied)
    weighted = round(weighted, 2)

    sub_scores = {
        k: SubScore(
            score=None if r is None else r.score,
            weight=weights[k],
            effective_weight=(
                round(weights[k] / applied_weight, 4)
                if r is not None and applied_weight > 0 else 0.0
            ),
        )
        for k, r in results.items()
    }

    # ── 7. Penalties ──────────────────────────────────────────────────────────
    matches = element_matches(elements, favorable)
    structure_hits = structure_violations(
        elements, dm_element, ctx.structure, cfg.structure_confidence_threshold,
    )
    penalties = compute_penalties(matches, structure_hits, cfg.penalties)
    penalty_evidence = [
        f"gishin chars {matches.gishin} x {cfg.penalties.gishin_per_char:g} = {penalties.gishin:g}",
        f"gushin chars {matches.gushin} x {cfg.penalties.gushin_per_char:g} = {penalties.gushin:g}",
    ]
    if ctx.structure is not None:
        penalty_evidence.append(
            f"structure {ctx.structure.name} ({ctx.structure.category.value}, "
            f"confidence {ctx.structure.confidence:.2f}): {structure_hits} char(s) "
            f"x {cfg.penalties.structure_per_char:g} = {penalties.structure:g}"
        )
    trace.add(
        "penalties",
        evidence=penalty_evidence,
        reasoning=[f"total deduction {penalties.total:g}"],
        citations=["기신", "구신"],
    )

    # ── 8. Fallback ───────────────────────────────────────────────────────────
    confidence = round(applied_weight, 4)
    if fallbacks:
        trace.add(
            "fallback",
            evidence=[reason.value for reason in fallbacks],
            reasoning=[
                "dropped sub-scores: "
                + ", ".join(k for k, r in results.items() if r is None),
                "renormalized weights: "
                + ", ".join(f"{k} {s.effective_weight:.4f}" for k, s in sub_scores.items() if s.applied),
            ],
            confidence=confidence,
        )

    # ── 9. Final ──────────────────────────────────────────────────────────────
    final = round(_clamp(weighted - penalties.total, 0.0, 100.0), 2)
    is_passed = final >= cfg.pass_threshold
    trace.add(
        "final",
        evidence=[f"{k} {s:.2f}" for k, s in applied.items()],
        reasoning=[
            f"weighted {weighted:.2f} - penalties {penalties.total:g} -> {final:.2f}",
            f"{'passed' if is_passed else 'below'} threshold {cfg.pass_threshold:g}",
        ],
        confidence=confidence,
    )

    breakdown = ScoringBreakdown(
        balance=sub_scores["balance"],
        yongshin_match=sub_scores["yongshin_match"],
        strength=sub_scores["strength"],
        ten_god=sub_scores["ten_god"],
        penalties=penalties,
        element_matches=matches,
        chart_distribution=chart_counts,
        name_distribution=name_counts,
        combined_distribution=combined,
        weighted_before_penalty=weighted,
        final_score=final,
        confidence=confidence,
        is_passed=is_passed,
        fallbacks=tuple(fallbacks),
    )

    EvaluationLogAdapter(logger, chart=chart.label(), candidate=candidate.text).debug(
        "Evaluated name: confidence=%.2f passed=%s", confidence, is_passed,
        extra={"final_score": final},
    )
    return CompatibilityResult(name=candidate.text, breakdown=breakdown, trace=trace.steps())


def _record_chart_signals(
    trace: TraceRecorder, chart: BirthChart, elements: Sequence
) -> float:
    """Add the ``chart_signals`` step; return the day master's root ratio."""
    day_master = chart.day_master
    branches = chart.branches
    positions = chart.positions

    evidence: list[str] = []
    for relation in find_relations(branches):
        where = "/".join(positions[i].value for i in relation.positions)
        evidence.append(f"{relation.describe()} ({where})")

    roots = chart_roots(day_master, branches)
    evidence.append(
        f"day master {day_master.value} roots: "
        + ", ".join(f"{p.value} {b.value} {r.value}" for p, b, r in zip(positions, branches, roots))
    )

    for position, branch in zip(positions, branches):
        revealed = tuchul(branch, chart.stems)
        if revealed:
            evidence.append(
                f"revealed in {position.value} {branch.value}: "
                + ", ".join(f"{e.stem.value}({e.role.value})" for e in revealed)
            )

    need = climate_need(day_master, chart.month.branch)
    need_elements = {stem_element(need.primary), stem_element(need.secondary)}
    supplied = sorted(e.value for e in need_elements if e in set(elements))
    evidence.append(
        f"climate need: {need.primary.value} ({stem_element(need.primary).value}), "
        f"{need.secondary.value} ({stem_element(need.secondary).value}); "
        f"name supplies {', '.join(supplied) if supplied else 'none'}"
    )

    ratio = root_ratio(day_master, branches)
    trace.add(
        "chart_signals",
        evidence=evidence,
        reasoning=[f"day-master root ratio {ratio:.3f} (STRONG 1, WEAK 0.5, NONE 0)"],
        citations=["지지 관계", "통근", "투출", "조후"],
    )
    return ratio
